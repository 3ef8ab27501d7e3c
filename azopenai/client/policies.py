"""
Pipeline policies installed by the client.

Authentication and backend adjustment policies run once per attempt so a
retried request is signed again and keeps its query changes.

Date: 2026-10-18
"""

import time

from loguru import logger

from azopenai.client.credentials import KeyCredential, TokenCredential
from azopenai.client.exceptions import InsecureTransportError
from azopenai.client.pipeline import NextPolicy, PipelineRequest
from azopenai.client.transport.base import HTTPResponse

API_VERSION_PARAM = "api-version"

_REDACTED_HEADERS = frozenset({"authorization", "api-key"})


def _ensure_secure(request: PipelineRequest, allow_insecure: bool) -> None:
    if request.url.scheme != "https" and not allow_insecure:
        raise InsecureTransportError(
            "Refusing to send a credential over a non-TLS connection "
            f"({request.url.scheme}://{request.url.host}). Set "
            "allow_insecure_credential_with_http to permit it.",
            details={"scheme": request.url.scheme}
        )


class BearerTokenPolicy:
    """Attaches ``Authorization: Bearer <token>`` from a token credential."""

    def __init__(
        self,
        credential: TokenCredential,
        scopes: list[str],
        allow_insecure: bool = False
    ):
        if not scopes:
            raise ValueError("at least one scope is required")
        self.credential = credential
        self.scopes = list(scopes)
        self.allow_insecure = allow_insecure

    async def send(self, request: PipelineRequest, next_: NextPolicy) -> HTTPResponse:
        _ensure_secure(request, self.allow_insecure)
        access_token = await self.credential.get_token(*self.scopes)
        request.headers["Authorization"] = f"Bearer {access_token.token}"
        return await next_(request)


class KeyCredentialPolicy:
    """
    Attaches a static key as a request header.

    Args:
        credential: Key to send
        header_name: Header carrying the key (e.g. "api-key")
        prefix: Optional string placed before the key (e.g. "Bearer ")
        allow_insecure: Permit sending the key over plain HTTP
    """

    def __init__(
        self,
        credential: KeyCredential,
        header_name: str,
        prefix: str = "",
        allow_insecure: bool = False
    ):
        self.credential = credential
        self.header_name = header_name
        self.prefix = prefix
        self.allow_insecure = allow_insecure

    async def send(self, request: PipelineRequest, next_: NextPolicy) -> HTTPResponse:
        _ensure_secure(request, self.allow_insecure)
        request.headers[self.header_name] = f"{self.prefix}{self.credential.key}"
        return await next_(request)


class APIVersionPolicy:
    """
    Force-sets the api-version query parameter on every request.

    NOTE: Workaround while request builders do not emit api-version
    themselves. Remove once they do.
    """

    def __init__(self, api_version: str):
        self.api_version = api_version

    async def send(self, request: PipelineRequest, next_: NextPolicy) -> HTTPResponse:
        request.set_query_param(API_VERSION_PARAM, self.api_version)
        return await next_(request)


class OpenAIPolicy:
    """Adapts a request for the public OpenAI endpoint, which rejects api-version."""

    async def send(self, request: PipelineRequest, next_: NextPolicy) -> HTTPResponse:
        request.remove_query_param(API_VERSION_PARAM)
        return await next_(request)


class RequestLoggingPolicy:
    """Logs each attempt and its status without exposing credentials."""

    def __init__(self, log_level: str = "DEBUG"):
        self.log_level = log_level

    async def send(self, request: PipelineRequest, next_: NextPolicy) -> HTTPResponse:
        headers = {
            name: ("REDACTED" if name.lower() in _REDACTED_HEADERS else value)
            for name, value in request.headers.items()
        }
        logger.log(self.log_level, f"Request: {request.method} {request.url} headers={headers}")

        start = time.perf_counter()
        response = await next_(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.log(
            self.log_level,
            f"Response: {response.status_code} for {request.method} {request.url.path} "
            f"({elapsed_ms:.0f} ms)"
        )
        return response
