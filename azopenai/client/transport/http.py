"""
aiohttp-backed HTTP transport.

Date: 2026-10-18
"""

import asyncio
from typing import Mapping

import aiohttp
from loguru import logger

from azopenai.client.exceptions import TimeoutError, TransportError
from azopenai.client.pipeline import PipelineRequest


class AiohttpResponse:
    """
    Response wrapper around ``aiohttp.ClientResponse``.

    Buffered responses carry their body in memory and no longer hold a
    connection. Streaming responses read from the live connection until
    closed.
    """

    def __init__(self, raw: aiohttp.ClientResponse):
        self._raw = raw
        self._body: bytes | None = None
        self._body_returned = False
        self._closed = False

    @property
    def status_code(self) -> int:
        return self._raw.status

    @property
    def headers(self) -> Mapping[str, str]:
        return self._raw.headers

    async def read_chunk(self) -> bytes:
        if self._body is not None:
            if self._body_returned:
                return b""
            self._body_returned = True
            return self._body

        if self._closed:
            return b""

        try:
            return await self._raw.content.readany()
        except asyncio.TimeoutError as e:
            raise TimeoutError("Timed out reading response body") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Reading response body failed: {str(e)}") from e

    async def read(self) -> bytes:
        if self._body is None:
            try:
                self._body = await self._raw.read()
            except asyncio.TimeoutError as e:
                raise TimeoutError("Timed out reading response body") from e
            except aiohttp.ClientError as e:
                raise TransportError(f"Reading response body failed: {str(e)}") from e
        return self._body

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # Drops the connection if the body was not fully consumed
        self._raw.close()


class HTTPTransport:
    """
    Transport for HTTP calls made with a shared ``aiohttp.ClientSession``.

    The session is created lazily on first use and owned by the transport.
    """

    def __init__(
        self,
        connect_timeout: float = 10.0,
        read_timeout: float | None = 300.0,
        user_agent: str | None = None,
        session: aiohttp.ClientSession | None = None
    ):
        """
        Initialize HTTP transport.

        Args:
            connect_timeout: Seconds allowed to establish a connection
            read_timeout: Seconds allowed between two reads of the body
            user_agent: Value for the User-Agent header
            session: Existing session to use; it is not closed by the transport
        """
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.user_agent = user_agent
        self._session = session
        self._owns_session = session is None
        self._closed = False

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            # No total timeout: event streams may legitimately run for minutes
            timeout_config = aiohttp.ClientTimeout(
                total=None,
                connect=self.connect_timeout,
                sock_read=self.read_timeout
            )
            headers = {"User-Agent": self.user_agent} if self.user_agent else None
            self._session = aiohttp.ClientSession(timeout=timeout_config, headers=headers)
            self._owns_session = True

        return self._session

    async def send(self, request: PipelineRequest) -> AiohttpResponse:
        """
        Send a request.

        Args:
            request: Fully prepared request

        Returns:
            Response; buffered unless ``request.stream`` is set

        Raises:
            TransportError: If communication fails
            TimeoutError: If the request times out
        """
        if self._closed:
            raise TransportError("Transport is closed")

        session = await self._get_session()

        try:
            raw = await session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.content
            )
        except asyncio.TimeoutError as e:
            raise TimeoutError(f"Request timed out after {self.connect_timeout}s") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"HTTP request failed: {str(e)}") from e

        if request.stream:
            return AiohttpResponse(raw)

        response = AiohttpResponse(raw)
        try:
            body = await response.read()
        finally:
            await response.close()
        logger.trace(f"Buffered {len(body)} bytes from {request.method} {request.url.path}")
        return response

    async def close(self) -> None:
        """Close transport and cleanup resources."""
        self._closed = True

        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
