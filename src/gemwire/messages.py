"""Provider-agnostic chat messages and their content parts.

Messages are immutable once constructed. Structured content is frozen to a
tuple so a message can be shared between histories without copies.
"""

from __future__ import annotations

import dataclasses
import typing

from ._validation import _is_parts_tuple, _require


@dataclasses.dataclass(frozen=True, slots=True)
class TextContent:
    """A text part of a message."""

    text: str

    def __post_init__(self) -> None:
        """Validate TextContent invariants."""
        _require(isinstance(self.text, str), "text must be a str")


@dataclasses.dataclass(frozen=True, slots=True)
class ImageUrlContent:
    """An image reference: either a ``data:`` URI or a remote URI."""

    url: str

    def __post_init__(self) -> None:
        """Validate ImageUrlContent invariants."""
        _require(isinstance(self.url, str), "url must be a str")

    @property
    def is_inline(self) -> bool:
        """Whether the image bytes are embedded in the URL."""
        return self.url.startswith("data:")


ContentPart: typing.TypeAlias = TextContent | ImageUrlContent
MessageContent: typing.TypeAlias = str | tuple[ContentPart, ...]


def _freeze_content(content: typing.Any) -> MessageContent:
    if isinstance(content, str):
        return content
    frozen = tuple(content)
    _require(
        _is_parts_tuple(frozen, (TextContent, ImageUrlContent)),
        "content must be a str or a sequence of content parts",
    )
    return frozen


@dataclasses.dataclass(frozen=True, slots=True)
class _BaseMessage:
    content: MessageContent

    type: typing.ClassVar[str] = "base"

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", _freeze_content(self.content))


@dataclasses.dataclass(frozen=True, slots=True)
class SystemMessage(_BaseMessage):
    """Instructions for the model."""

    type: typing.ClassVar[str] = "system"


@dataclasses.dataclass(frozen=True, slots=True)
class HumanMessage(_BaseMessage):
    """A turn written by the user."""

    type: typing.ClassVar[str] = "human"


@dataclasses.dataclass(frozen=True, slots=True)
class AIMessage(_BaseMessage):
    """A turn produced by the model."""

    type: typing.ClassVar[str] = "ai"


@dataclasses.dataclass(frozen=True, slots=True)
class AIMessageChunk(AIMessage):
    """A partial model turn, as produced while streaming.

    Chunks concatenate with ``+`` in emission order.
    """

    def __add__(self, other: AIMessageChunk) -> AIMessageChunk:
        if not isinstance(other, AIMessageChunk):
            return NotImplemented
        if isinstance(self.content, str) and isinstance(other.content, str):
            return AIMessageChunk(self.content + other.content)
        return AIMessageChunk(_as_parts(self.content) + _as_parts(other.content))


@dataclasses.dataclass(frozen=True, slots=True)
class GenericMessage(_BaseMessage):
    """A message with an arbitrary role (tool, function, ...)."""

    role: str

    type: typing.ClassVar[str] = "generic"


ChatMessage: typing.TypeAlias = SystemMessage | HumanMessage | AIMessage | GenericMessage


def _as_parts(content: MessageContent) -> tuple[ContentPart, ...]:
    if isinstance(content, str):
        return (TextContent(content),) if content else ()
    return content


def message_text(message: _BaseMessage) -> str:
    """Return the text of a message, ignoring non-text parts."""
    if isinstance(message.content, str):
        return message.content
    return "".join(p.text for p in message.content if isinstance(p, TextContent))
