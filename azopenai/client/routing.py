"""
URL routing for the two backends.

Date: 2026-10-18
"""

from typing import Protocol, runtime_checkable
from urllib.parse import quote

# Asynchronous job submission uses its own routing convention on every backend.
# https://learn.microsoft.com/en-us/azure/cognitive-services/openai/reference#image-generation
ASYNC_SUBMISSION_PATHS = frozenset({"/images/generations:submit"})


@runtime_checkable
class HasDeployment(Protocol):
    """Anything that may name the model deployment it targets."""

    deployment_name: str | None


def get_deployment(options: object) -> str | None:
    """Return the deployment named by a request options object, if any."""
    if isinstance(options, HasDeployment):
        return options.deployment_name
    return None


def join_paths(root: str, *paths: str) -> str:
    """
    Join path segments onto a root URL with exactly one slash between each.

    A query string on ``root`` is kept and moved after the joined path.
    """
    root, sep, query = root.partition("?")
    parts = [root.rstrip("/")]
    parts.extend(p.strip("/") for p in paths if p and p.strip("/"))
    return f"{'/'.join(parts)}{sep}{query}"


def format_url(endpoint: str, path: str, deployment: str | None, azure: bool) -> str:
    """
    Resolve a logical path to a request URL.

    Args:
        endpoint: Service endpoint, e.g. https://{resource}.openai.azure.com
        path: Logical operation path, e.g. "/chat/completions"
        deployment: Deployment name; ignored for the OpenAI backend
        azure: Whether the endpoint is an Azure OpenAI resource

    Returns:
        Fully qualified URL without query parameters
    """
    if path in ASYNC_SUBMISSION_PATHS:
        return join_paths(endpoint, path)

    if azure:
        if deployment is not None:
            escaped = quote(deployment, safe="")
            if escaped in (".", ".."):
                # Dot segments survive quoting and would be collapsed by path normalization
                escaped = escaped.replace(".", "%2E")
            return join_paths(endpoint, "openai", "deployments", escaped, path)
        return join_paths(endpoint, "openai", path)

    return join_paths(endpoint, path)
