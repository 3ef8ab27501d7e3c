"""
Shared test doubles for azopenai tests.

Date: 2026-10-18
"""

import asyncio
import time
from typing import Any

import pytest

from azopenai.client.credentials import AccessToken


class FakeResponse:
    """In-memory response; chunks may include exceptions to raise mid-body."""

    def __init__(
        self,
        chunks: list[Any] | None = None,
        status_code: int = 200,
        headers: dict[str, str] | None = None
    ):
        self._chunks = list(chunks or [])
        self.status_code = status_code
        self.headers = headers or {}
        self.reads = 0
        self.closed = False

    async def read_chunk(self) -> bytes:
        if self.closed or not self._chunks:
            return b""
        self.reads += 1
        chunk = self._chunks.pop(0)
        if isinstance(chunk, BaseException):
            raise chunk
        return chunk

    async def read(self) -> bytes:
        body = b"".join(c for c in self._chunks if isinstance(c, bytes))
        self._chunks = []
        return body

    async def close(self) -> None:
        self.closed = True


class BlockingResponse(FakeResponse):
    """Response whose body never arrives."""

    def __init__(self):
        super().__init__()
        self.reading = asyncio.Event()

    async def read_chunk(self) -> bytes:
        self.reading.set()
        await asyncio.Event().wait()
        return b""


class FakeTransport:
    """Returns queued responses (or raises queued errors) and records requests."""

    def __init__(self, responses: list[Any]):
        self.responses = list(responses)
        self.requests = []
        self.closed = False

    async def send(self, request):
        self.requests.append(request)
        result = self.responses.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


class FakeTokenCredential:
    """Issues a new token on every call."""

    def __init__(self):
        self.calls: list[tuple[str, ...]] = []

    async def get_token(self, *scopes: str) -> AccessToken:
        self.calls.append(scopes)
        return AccessToken(f"token-{len(self.calls)}", int(time.time()) + 3600)


def sse(*payloads: str) -> bytes:
    """Encode payloads as event stream frames."""
    return b"".join(f"data: {payload}\n\n".encode("utf-8") for payload in payloads)


@pytest.fixture
def make_response():
    """Factory for FakeResponse."""
    return FakeResponse


@pytest.fixture
def make_transport():
    """Factory for FakeTransport."""
    return FakeTransport


@pytest.fixture
def blocking_response():
    return BlockingResponse()


@pytest.fixture
def token_credential():
    return FakeTokenCredential()


@pytest.fixture
def encode_sse():
    return sse
