"""
Transport protocol for the azopenai client.

Date: 2026-10-18
"""

from typing import TYPE_CHECKING, Mapping, Protocol

if TYPE_CHECKING:
    from azopenai.client.pipeline import PipelineRequest


class HTTPResponse(Protocol):
    """Protocol for a response whose body may still be on the wire."""

    @property
    def status_code(self) -> int:
        ...

    @property
    def headers(self) -> Mapping[str, str]:
        ...

    async def read_chunk(self) -> bytes:
        """
        Read the next available chunk of the body.

        Returns:
            Bytes received so far that were not yet returned; b"" at end of body

        Raises:
            TransportError: If the connection fails mid-body
            TimeoutError: If no data arrives within the read timeout
        """
        ...

    async def read(self) -> bytes:
        """Read the remainder of the body."""
        ...

    async def close(self) -> None:
        """Release the underlying connection. Safe to call more than once."""
        ...


class Transport(Protocol):
    """Protocol for the layer that puts a request on the wire."""

    async def send(self, request: "PipelineRequest") -> HTTPResponse:
        """
        Send a request and return once response headers are available.

        When ``request.stream`` is False the body is read fully before
        returning; otherwise it is left on the connection for the caller.

        Raises:
            TransportError: If communication fails
            TimeoutError: If connecting times out
        """
        ...

    async def close(self) -> None:
        """Close transport and cleanup resources."""
        ...
