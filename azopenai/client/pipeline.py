"""
Request pipeline: per-attempt policy chain in front of a transport.

Policies receive the outgoing request, may change its URL, query or
headers, and must hand it on to ``next_``. They never produce a response
of their own.

Date: 2026-10-18
"""

import asyncio
import json
from dataclasses import dataclass, field, replace
from functools import partial
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, Sequence

from loguru import logger
from yarl import URL

from azopenai.client.exceptions import parse_retry_after
from azopenai.client.retry import RetryConfig, is_retryable_error, is_retryable_status

if TYPE_CHECKING:
    from azopenai.client.transport.base import HTTPResponse, Transport

NextPolicy = Callable[["PipelineRequest"], Awaitable["HTTPResponse"]]


@dataclass
class PipelineRequest:
    """An outgoing HTTP request as seen by policies."""

    method: str
    url: URL
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None
    stream: bool = False
    """When set, the transport returns before reading the response body."""

    @classmethod
    def create(cls, method: str, url: str) -> "PipelineRequest":
        # Path segments are escaped by the router already
        return cls(method=method.upper(), url=URL(url, encoded=True))

    def set_json(self, value: Any) -> None:
        """Serialize ``value`` as the JSON body."""
        self.content = json.dumps(value, separators=(",", ":")).encode("utf-8")
        self.headers["Content-Type"] = "application/json"

    def skip_body_download(self) -> None:
        """Leave the response body on the connection for the caller to consume."""
        self.stream = True

    def set_query_param(self, name: str, value: str) -> None:
        """Set a query parameter, replacing every existing value."""
        self.remove_query_param(name)
        self.url = self.url.update_query({name: value})

    def remove_query_param(self, name: str) -> None:
        if name not in self.url.query:
            return
        remaining = [(k, v) for k, v in self.url.query.items() if k != name]
        self.url = self.url.with_query(remaining or None)

    def copy(self) -> "PipelineRequest":
        return replace(self, headers=dict(self.headers))


class Policy(Protocol):
    """Protocol for request policies."""

    async def send(self, request: PipelineRequest, next_: NextPolicy) -> "HTTPResponse":
        """
        Process request.

        Args:
            request: Mutable outgoing request
            next_: Rest of the chain; must be awaited with the request

        Returns:
            Response produced further down the chain
        """
        ...


class Pipeline:
    """
    Runs per-retry policies and the transport, retrying dispatch on failure.

    Every attempt starts from a fresh copy of the caller's request, so
    policy mutations (credentials, query parameters) are applied again on
    each try.
    """

    def __init__(
        self,
        transport: "Transport",
        per_retry_policies: Sequence[Policy] = (),
        retry: RetryConfig | None = None
    ):
        self.transport = transport
        self.per_retry_policies = list(per_retry_policies)
        self.retry = retry or RetryConfig()

    def _build_chain(self) -> NextPolicy:
        chain: NextPolicy = self.transport.send
        for policy in reversed(self.per_retry_policies):
            chain = partial(policy.send, next_=chain)
        return chain

    async def run(self, request: PipelineRequest) -> "HTTPResponse":
        """
        Dispatch a request.

        Returns the first response that is not retryable, or the last one
        once retries are exhausted. Raises the last dispatch error when no
        response was obtained.
        """
        chain = self._build_chain()
        config = self.retry

        for attempt in range(config.max_retries + 1):
            attempt_request = request.copy()
            try:
                response = await chain(attempt_request)
            except Exception as e:
                if not is_retryable_error(e) or attempt >= config.max_retries:
                    raise
                delay = config.calculate_delay(attempt)
                logger.debug(
                    f"Dispatch attempt {attempt + 1} failed ({type(e).__name__}: {e}); "
                    f"retrying in {delay:.2f}s"
                )
            else:
                if not is_retryable_status(response.status_code) or attempt >= config.max_retries:
                    return response

                retry_after = parse_retry_after(response.headers)
                if retry_after is not None:
                    delay = min(retry_after, config.max_delay)
                else:
                    delay = config.calculate_delay(attempt)
                await response.close()
                logger.debug(
                    f"Attempt {attempt + 1} got status {response.status_code}; "
                    f"retrying in {delay:.2f}s"
                )

            await asyncio.sleep(delay)

        raise RuntimeError("Retry logic error")
