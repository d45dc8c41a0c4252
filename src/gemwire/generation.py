"""Build caller-facing results from Gemini responses.

Every ``response_to_*`` builder is a pure function of the response. The
``safe_response_to_*`` variants enforce a safety policy first; when the
policy raises ``SafetyError`` they compute the builder over the rejected
response, attach it as ``error.reply``, and re-raise, so callers can see
what the blocked answer would have been without the policy accepting it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from gemwire.codec import decode_parts
from gemwire.errors import SafetyError, UnsupportedConversionError
from gemwire.messages import (
    AIMessage,
    AIMessageChunk,
    MessageContent,
    TextContent,
)
from gemwire.response import extract_parts, normalize, part_to_text
from gemwire.safety import SafetyPolicy
from gemwire.wire import RawResponse, SingleResponse, StreamResponse, as_response

T = TypeVar("T")


@dataclass(frozen=True)
class Generation:
    """A plain text completion."""

    text: str
    generation_info: Any = None


@dataclass(frozen=True)
class ChatGeneration:
    """A completion rendered as a chat message."""

    text: str
    message: AIMessage
    generation_info: Any = None


@dataclass(frozen=True)
class ChatGenerationChunk(ChatGeneration):
    """A chat generation that can be concatenated with ``+`` while streaming."""

    message: AIMessageChunk = field(default_factory=lambda: AIMessageChunk(""))

    def __add__(self, other: ChatGenerationChunk) -> ChatGenerationChunk:
        if not isinstance(other, ChatGenerationChunk):
            return NotImplemented
        return ChatGenerationChunk(
            text=self.text + other.text,
            message=self.message + other.message,
            generation_info=other.generation_info,
        )


@dataclass(frozen=True)
class ChatResult:
    """All generations of one response plus the raw response."""

    generations: list[ChatGeneration]
    llm_output: Any = None


# --- Part-level helpers ---


def part_to_message(part: Any) -> AIMessageChunk:
    """Decode one Gemini part into a message chunk."""
    return AIMessageChunk(decode_parts([part]))


def part_to_chat_generation(part: Any) -> ChatGenerationChunk:
    """Decode one Gemini part into a chat generation chunk."""
    return ChatGenerationChunk(
        text=part_to_text(part),
        message=part_to_message(part),
    )


def chunk_to_text(chunk: AIMessage | None) -> str:
    """Return the text of a streamed message chunk.

    Only the first part is inspected; a chunk that starts with a non-text
    part cannot be rendered as text.
    """
    if chunk is None:
        return ""
    if isinstance(chunk.content, str):
        return chunk.content
    if not chunk.content:
        return ""
    first = chunk.content[0]
    if isinstance(first, TextContent):
        return first.text
    raise UnsupportedConversionError(f"Unexpected chunk: {chunk!r}")


# --- Response builders ---


def response_to_text(raw: RawResponse) -> str:
    """Concatenate the text parts of the response's first candidate."""
    return "".join(part_to_text(p) for p in response_to_parts(raw))


def response_to_parts(raw: RawResponse) -> list[Any]:
    """Return the first candidate's parts of the normalized response."""
    return extract_parts(normalize(raw))


def response_to_generation(raw: RawResponse) -> Generation:
    """Build a text generation that keeps the raw response as its info."""
    return Generation(text=response_to_text(raw), generation_info=raw)


def response_to_chat_generation(raw: RawResponse) -> ChatGenerationChunk:
    """Build a chat generation chunk seeded from the first part only."""
    parts = response_to_parts(raw)
    return ChatGenerationChunk(
        text=response_to_text(raw),
        message=part_to_message(parts[0] if parts else None),
        generation_info=raw,
    )


def response_to_chat_generations(raw: RawResponse) -> list[ChatGeneration]:
    """Build one chat generation per part of the first candidate."""
    return [part_to_chat_generation(p) for p in response_to_parts(raw)]


def response_to_message_content(
    raw: RawResponse, *, strict: bool = False
) -> MessageContent:
    """Decode all parts of the first candidate.

    With ``strict=True`` an unrecognized part raises instead of being dropped.
    """
    return decode_parts(response_to_parts(raw), strict=strict)


def response_to_message(raw: RawResponse, *, strict: bool = False) -> AIMessage:
    """Build an AI message from all parts of the first candidate."""
    return AIMessage(response_to_message_content(raw, strict=strict))


def response_to_chat_result(raw: RawResponse) -> ChatResult:
    """Build a chat result with one generation per part."""
    return ChatResult(generations=response_to_chat_generations(raw), llm_output=raw)


# --- Safe builders ---


def _safe_response_to(
    raw: Any, policy: SafetyPolicy, response_to: Callable[[RawResponse], T]
) -> T:
    response = as_response(raw)
    try:
        safe_response = policy.enforce(response)
        return response_to(safe_response)
    except SafetyError as e:
        e.reply = response_to(e.response)
        raise


def safe_response_to_text(raw: Any, policy: SafetyPolicy) -> str:
    """Enforce ``policy`` then build the response text."""
    return _safe_response_to(raw, policy, response_to_text)


def safe_response_to_generation(raw: Any, policy: SafetyPolicy) -> Generation:
    """Enforce ``policy`` then build a text generation."""
    return _safe_response_to(raw, policy, response_to_generation)


def safe_response_to_chat_generation(
    raw: Any, policy: SafetyPolicy
) -> ChatGenerationChunk:
    """Enforce ``policy`` then build a chat generation chunk."""
    return _safe_response_to(raw, policy, response_to_chat_generation)


def safe_response_to_message(raw: Any, policy: SafetyPolicy) -> AIMessage:
    """Enforce ``policy`` then build an AI message."""
    return _safe_response_to(raw, policy, response_to_message)


def safe_response_to_chat_result(raw: Any, policy: SafetyPolicy) -> ChatResult:
    """Enforce ``policy`` then build a chat result."""
    return _safe_response_to(raw, policy, response_to_chat_result)


# --- Streaming ---


async def astream_chat_generations(
    raw: StreamResponse | Any,
) -> AsyncIterator[ChatGenerationChunk]:
    """Yield one chat generation chunk per stream element, in emission order.

    Chunks are decoded as they arrive with no buffering and no safety
    enforcement. The stream is consumed once; an error raised by the stream
    propagates after the chunks already yielded.
    """
    response = as_response(raw)
    if not isinstance(response, StreamResponse):
        raise UnsupportedConversionError(
            f"Expected a stream, got {type(response).__name__}",
            hint="Use response_to_chat_generation() for complete responses.",
        )
    async for chunk in response.stream:
        yield response_to_chat_generation(SingleResponse(chunk))


async def aconcat_chat_generations(raw: StreamResponse | Any) -> ChatGenerationChunk:
    """Consume a stream and concatenate its chunks into one generation."""
    merged: ChatGenerationChunk | None = None
    async for chunk in astream_chat_generations(raw):
        merged = chunk if merged is None else merged + chunk
    return merged if merged is not None else ChatGenerationChunk(text="")
