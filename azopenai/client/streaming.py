"""
Decoder for server-sent event streams.

An ``EventReader`` turns the body of a ``text/event-stream`` response into
an async iterator of typed results, one per ``data:`` frame, ending at the
``[DONE]`` sentinel.

Nothing is read from the network until the caller asks for the next
element. Any failure (transport, malformed frame, cancellation) ends the
sequence: the failing pull raises, later pulls raise StopAsyncIteration.
The connection is released as soon as the reader reaches a terminal state
or is closed.

Example:
    ```python
    async with await client.get_chat_completions_stream(options) as stream:
        async for chunk in stream:
            for choice in chunk.choices:
                print(choice.delta.content or "", end="")
    ```

Date: 2026-10-18
"""

import asyncio
from enum import Enum
from typing import Generic, TypeVar

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from azopenai.client.exceptions import StreamDecodeError
from azopenai.client.transport.base import HTTPResponse

T = TypeVar("T")

DONE_SENTINEL = "[DONE]"


class StreamState(str, Enum):
    """Lifecycle of an event reader."""

    AWAITING_FRAME = "awaiting_frame"
    DONE = "done"
    FAILED = "failed"


class EventReader(Generic[T]):
    """
    Forward-only, single-pass reader over an event stream.

    Args:
        response: Response whose body is still on the connection
        result_type: Type each frame's JSON document is validated into
        require_sentinel: If True, a stream that closes before ``[DONE]``
            raises StreamDecodeError; otherwise it ends cleanly
    """

    def __init__(
        self,
        response: HTTPResponse,
        result_type: type[T],
        require_sentinel: bool = False
    ):
        self._response = response
        self._adapter = TypeAdapter(result_type)
        self._type_name = getattr(result_type, "__name__", str(result_type))
        self.require_sentinel = require_sentinel

        self._state = StreamState.AWAITING_FRAME
        self._buffer = bytearray()
        self._data_lines: list[str] = []
        self._eof = False
        self._frames = 0

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def frames_read(self) -> int:
        """Number of result frames emitted so far."""
        return self._frames

    def __aiter__(self) -> "EventReader[T]":
        return self

    async def __anext__(self) -> T:
        if self._state is not StreamState.AWAITING_FRAME:
            raise StopAsyncIteration

        try:
            data = await self._next_frame()
        except asyncio.CancelledError:
            await self._finish(StreamState.FAILED, "cancelled")
            raise
        except Exception as e:
            await self._finish(StreamState.FAILED, f"{type(e).__name__}: {e}")
            raise

        if data is None:
            if self.require_sentinel:
                await self._finish(StreamState.FAILED, "closed before sentinel")
                raise StreamDecodeError(
                    f"Event stream ended before {DONE_SENTINEL} after {self._frames} frames"
                )
            await self._finish(StreamState.DONE, "connection closed")
            raise StopAsyncIteration

        if data.strip() == DONE_SENTINEL:
            await self._finish(StreamState.DONE, "sentinel")
            raise StopAsyncIteration

        try:
            result = self._adapter.validate_json(data)
        except ValidationError as e:
            await self._finish(StreamState.FAILED, "undecodable frame")
            raise StreamDecodeError(
                f"Failed to decode stream frame {self._frames + 1} as {self._type_name}",
                details={"frame": data[:500], "errors": e.errors(include_url=False)}
            ) from e

        self._frames += 1
        return result

    async def _next_frame(self) -> str | None:
        """
        Assemble the next frame's data.

        Returns:
            Joined ``data:`` payload of one frame, or None at end of stream
        """
        while True:
            line = self._pop_line()

            if line is None:
                if self._eof:
                    # Dispatch a trailing frame that lacks its blank line
                    return self._take_frame()

                chunk = await self._response.read_chunk()
                if chunk:
                    self._buffer.extend(chunk)
                else:
                    self._eof = True
                    if self._buffer:
                        # Final line without a terminator
                        self._buffer.extend(b"\n")
                continue

            if not line:
                frame = self._take_frame()
                if frame is not None:
                    return frame
                continue

            if line.startswith(":"):
                continue

            field, _, value = line.partition(":")
            if field == "data":
                self._data_lines.append(value[1:] if value.startswith(" ") else value)
            # event:, id: and retry: carry nothing this client uses

    def _pop_line(self) -> str | None:
        index = self._buffer.find(b"\n")
        if index < 0:
            return None

        raw = bytes(self._buffer[:index])
        del self._buffer[:index + 1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StreamDecodeError("Event stream contains invalid UTF-8") from e

    def _take_frame(self) -> str | None:
        if not self._data_lines:
            return None
        frame = "\n".join(self._data_lines)
        self._data_lines = []
        return frame

    async def _finish(self, state: StreamState, reason: str) -> None:
        self._state = state
        self._buffer.clear()
        self._data_lines = []
        logger.debug(f"Event stream {state.value} ({reason}) after {self._frames} frames")
        await self._response.close()

    async def aclose(self) -> None:
        """Stop reading and release the connection."""
        if self._state is StreamState.AWAITING_FRAME:
            await self._finish(StreamState.DONE, "closed by caller")

    async def __aenter__(self) -> "EventReader[T]":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
