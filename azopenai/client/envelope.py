"""
Streaming request envelope.

The option models exposed to callers have no ``stream`` field; the
envelope adds it (and ``stream_options``) to whatever body it wraps.

Date: 2026-10-18
"""

import json
from typing import Any, Mapping

from pydantic import BaseModel


class StreamOptions(BaseModel):
    """Options for streaming responses."""
    include_usage: bool = False


def to_json_object(body: Any) -> dict[str, Any]:
    """
    Serialize an arbitrary request body to a JSON object.

    Accepts pydantic models, mappings, and objects with a ``to_dict``
    method.

    Raises:
        TypeError: If the body is not serializable or not a JSON object
    """
    if isinstance(body, BaseModel):
        data = body.model_dump(mode="json", by_alias=True, exclude_none=True)
    elif isinstance(body, Mapping):
        data = json.loads(json.dumps(dict(body)))
    elif callable(getattr(body, "to_dict", None)):
        data = json.loads(json.dumps(body.to_dict()))
    else:
        raise TypeError(f"Cannot serialize request body of type {type(body).__name__}")

    if not isinstance(data, dict):
        raise TypeError(
            f"Request body must serialize to a JSON object, got {type(data).__name__}"
        )
    return data


class StreamCompletionsOptions:
    """Wraps a request body and switches on streaming."""

    def __init__(
        self,
        body: Any,
        stream: bool = True,
        stream_options: StreamOptions | None = None
    ):
        self.body = body
        self.stream = stream
        self.stream_options = stream_options

    def to_dict(self) -> dict[str, Any]:
        # Injected keys override same-named keys from the body
        object_map = to_json_object(self.body)
        object_map["stream"] = self.stream
        if self.stream_options is not None:
            object_map["stream_options"] = {
                "include_usage": self.stream_options.include_usage
            }
        return object_map

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")
