"""
User message content: a plain string or a list of typed content parts.

On the wire the content is the bare string or the bare array; there is no
wrapping object telling the two apart.

Date: 2026-10-18
"""

import json
from typing import Annotated, Any, Literal, Sequence, Union

from loguru import logger
from pydantic import BaseModel, Field, TypeAdapter
from pydantic_core import core_schema


class ChatMessageImageURL(BaseModel):
    """Location of an image sent as part of a prompt."""
    url: str = Field(description="HTTPS URL or base64 data URL of the image")
    detail: Literal["auto", "low", "high"] | None = None


class ChatMessageTextContentItem(BaseModel):
    """Text content part."""
    type: Literal["text"] = "text"
    text: str


class ChatMessageImageContentItem(BaseModel):
    """Image content part."""
    type: Literal["image_url"] = "image_url"
    image_url: ChatMessageImageURL


ChatMessageContentItem = Annotated[
    Union[ChatMessageTextContentItem, ChatMessageImageContentItem],
    Field(discriminator="type")
]

_CONTENT_ITEM_TYPES = (ChatMessageTextContentItem, ChatMessageImageContentItem)
_CONTENT_ITEMS = TypeAdapter(list[ChatMessageContentItem])


class ChatRequestUserMessageContent:
    """
    Contents of a user prompt.

    Holds exactly one of ``text`` or ``parts``. Constructing it from any
    other kind of value leaves both unset, which the service will reject;
    callers should not rely on that.

    Example:
        ```python
        ChatRequestUserMessageContent("What is in this image?")

        ChatRequestUserMessageContent([
            ChatMessageTextContentItem(text="What is in this image?"),
            ChatMessageImageContentItem(
                image_url=ChatMessageImageURL(url="https://example.com/cat.png")
            ),
        ])
        ```
    """

    __slots__ = ("_text", "_parts")

    def __init__(self, value: str | Sequence[ChatMessageContentItem] | None = None):
        self._text: str | None = None
        self._parts: list[ChatMessageContentItem] | None = None

        if isinstance(value, str):
            self._text = value
        elif isinstance(value, (list, tuple)) and all(
            isinstance(item, _CONTENT_ITEM_TYPES) for item in value
        ):
            self._parts = list(value)
        elif value is not None:
            logger.warning(
                f"Unsupported user message content of type {type(value).__name__}; "
                "content left unset"
            )

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def parts(self) -> list[ChatMessageContentItem] | None:
        return self._parts

    def is_set(self) -> bool:
        return self._text is not None or self._parts is not None

    def to_wire(self) -> str | list[dict[str, Any]] | None:
        """Return the JSON-ready value for whichever shape is held."""
        if self._text is not None:
            return self._text
        if self._parts is not None:
            return _CONTENT_ITEMS.dump_python(self._parts, mode="json", exclude_none=True)
        return None

    def to_json(self) -> str:
        return json.dumps(self.to_wire())

    @classmethod
    def from_wire(cls, data: Any) -> "ChatRequestUserMessageContent":
        """
        Build content from a decoded JSON value.

        An array of objects is tried before a plain string.

        Raises:
            ValueError: If ``data`` is neither shape
        """
        if isinstance(data, (list, tuple)) and all(
            isinstance(item, (dict, *_CONTENT_ITEM_TYPES)) for item in data
        ):
            return cls(_CONTENT_ITEMS.validate_python(list(data)))

        if isinstance(data, str):
            return cls(data)

        raise ValueError(
            "user message content must be a string or an array of content parts, "
            f"got {type(data).__name__}"
        )

    @classmethod
    def from_json(cls, raw: str | bytes) -> "ChatRequestUserMessageContent":
        return cls.from_wire(json.loads(raw))

    @classmethod
    def _coerce(cls, value: Any) -> "ChatRequestUserMessageContent":
        if isinstance(value, cls):
            return value
        return cls.from_wire(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_wire()
            )
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChatRequestUserMessageContent):
            return NotImplemented
        return self._text == other._text and self._parts == other._parts

    def __repr__(self) -> str:
        if self._text is not None:
            return f"ChatRequestUserMessageContent(text={self._text!r})"
        if self._parts is not None:
            return f"ChatRequestUserMessageContent(parts={self._parts!r})"
        return "ChatRequestUserMessageContent()"
