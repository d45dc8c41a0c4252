"""Conversion between chat message content and Gemini parts.

Encoding maps chat messages to ``GeminiContent`` turns. Gemini has no system
role, so a system message becomes a user turn followed by a synthetic model
acknowledgment. Decoding maps provider parts back to content parts; shapes
that are not text, inline data, or file data are dropped unless strict
decoding is requested.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from gemwire.errors import MissingDataError, UnrecognizedPartError
from gemwire.messages import (
    AIMessage,
    ChatMessage,
    ContentPart,
    HumanMessage,
    ImageUrlContent,
    MessageContent,
    SystemMessage,
    TextContent,
)
from gemwire.wire import GeminiContent, GeminiPart, GeminiRole

log = logging.getLogger(__name__)

#: Remote URLs carry no MIME type; callers needing accuracy must upload with one.
DEFAULT_FILE_MIME_TYPE = "image/png"
#: Text of the model turn that follows an expanded system message.
SYSTEM_ACK_TEXT = "Ok"


def _encode_image_url(part: ImageUrlContent) -> GeminiPart:
    url = part.url
    if not url:
        raise MissingDataError(
            "Missing image URL",
            hint="Pass a data: URI or a remote URI in ImageUrlContent(url=...).",
        )
    if url.startswith("data:"):
        mime_type = url.split(":", 1)[1].split(";", 1)[0]
        data = url.split(",", 1)[1] if "," in url else ""
        return {"inlineData": {"mimeType": mime_type, "data": data}}
    return {"fileData": {"mimeType": DEFAULT_FILE_MIME_TYPE, "fileUri": url}}


def encode_part(part: ContentPart) -> GeminiPart:
    """Convert one content part to a Gemini part."""
    match part:
        case TextContent(text=text):
            return {"text": text}
        case ImageUrlContent():
            return _encode_image_url(part)
        case _:
            raise TypeError(f"Unsupported content part: {type(part).__name__}")


def encode_content(content: MessageContent) -> list[GeminiPart]:
    """Convert message content to Gemini parts, promoting a plain string to text."""
    if isinstance(content, str):
        return [{"text": content}]
    return [encode_part(p) for p in content]


def encode_message(role: GeminiRole, message: ChatMessage) -> list[GeminiContent]:
    """Wrap a message's content as one turn, expanding system messages to two."""
    if isinstance(message, SystemMessage):
        return [
            {"role": "user", "parts": encode_content(message.content)},
            {"role": "model", "parts": encode_content(SYSTEM_ACK_TEXT)},
        ]
    return [{"role": role, "parts": encode_content(message.content)}]


def encode_chat_message(message: ChatMessage) -> list[GeminiContent]:
    """Convert a chat message to Gemini turns, dispatching on its kind.

    Unsupported kinds produce no turns and a warning so mixed-provider
    histories keep working.
    """
    match message:
        case SystemMessage():
            return encode_message("user", message)
        case HumanMessage():
            return encode_message("user", message)
        case AIMessage():
            return encode_message("model", message)
        case _:
            log.warning(
                "Unsupported message type: %s", getattr(message, "type", type(message))
            )
            return []


def encode_chat_messages(messages: Iterable[ChatMessage]) -> list[GeminiContent]:
    """Convert a whole chat history to Gemini turns, preserving order."""
    contents: list[GeminiContent] = []
    for message in messages:
        contents.extend(encode_chat_message(message))
    return contents


def decode_part(part: Any, *, strict: bool = False) -> ContentPart | None:
    """Convert a Gemini part back to a content part.

    Returns None for ``None`` and unrecognized shapes, including a known key
    whose value is not the expected string fields. With ``strict=True`` such
    a part raises ``UnrecognizedPartError`` instead.
    """
    if isinstance(part, Mapping):
        if isinstance(part.get("text"), str):
            return TextContent(part["text"])
        inline = part.get("inlineData")
        if _has_str_fields(inline, "mimeType", "data"):
            return ImageUrlContent(f"data:{inline['mimeType']};base64,{inline['data']}")
        file_data = part.get("fileData")
        if _has_str_fields(file_data, "fileUri"):
            return ImageUrlContent(file_data["fileUri"])
    if strict:
        raise UnrecognizedPartError(
            f"Unrecognized Gemini part: {part!r}",
            part=part,
            hint="Disable strict part decoding to drop unknown parts silently.",
        )
    if part is not None:
        log.debug("Dropping unrecognized Gemini part with keys %s", _keys(part))
    return None


def decode_parts(
    parts: Iterable[Any], *, strict: bool = False
) -> tuple[ContentPart, ...]:
    """Convert Gemini parts to content parts, dropping unrecognized ones."""
    decoded = (decode_part(p, strict=strict) for p in parts)
    return tuple(p for p in decoded if p is not None)


def _has_str_fields(value: Any, *keys: str) -> bool:
    return isinstance(value, Mapping) and all(
        isinstance(value.get(k), str) for k in keys
    )


def _keys(part: Any) -> list[str]:
    if isinstance(part, Mapping):
        return sorted(str(k) for k in part)
    return [type(part).__name__]
