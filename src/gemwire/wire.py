"""Gemini wire shapes and the raw response sum type.

The TypedDicts mirror the REST JSON exactly (camelCase keys). Keys this
library does not interpret, such as ``safetyRatings`` or ``usageMetadata``,
are carried through untouched.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any, Literal, NotRequired, TypeAlias

from pydantic import ConfigDict, TypeAdapter, ValidationError, with_config
from typing_extensions import TypedDict

from gemwire.errors import MalformedResponseError, UnsupportedConversionError

GeminiRole: TypeAlias = Literal["user", "model"]


class InlineData(TypedDict):
    mimeType: str
    data: str


class FileData(TypedDict):
    mimeType: str
    fileUri: str


class GeminiPartText(TypedDict):
    text: str


class GeminiPartInlineData(TypedDict):
    inlineData: InlineData


class GeminiPartFileData(TypedDict):
    fileData: FileData


GeminiPart: TypeAlias = GeminiPartText | GeminiPartInlineData | GeminiPartFileData


class GeminiContent(TypedDict):
    role: GeminiRole
    parts: list[GeminiPart]


@with_config(ConfigDict(extra="allow"))
class PromptFeedback(TypedDict, total=False):
    blockReason: str


@with_config(ConfigDict(extra="allow"))
class _WireContent(TypedDict, total=False):
    role: str
    # Parts stay untyped here: unknown part shapes must survive parsing so
    # the codec can decide whether to drop or reject them.
    parts: list[dict[str, Any]]


@with_config(ConfigDict(extra="allow"))
class Candidate(TypedDict, total=False):
    content: _WireContent
    finishReason: str


@with_config(ConfigDict(extra="allow"))
class GenerateContentResponseData(TypedDict):
    candidates: NotRequired[list[Candidate]]
    promptFeedback: NotRequired[PromptFeedback]


@dataclass(frozen=True, slots=True)
class SingleResponse:
    """One complete response payload."""

    data: GenerateContentResponseData


@dataclass(frozen=True, slots=True)
class BatchResponse:
    """An array of payloads that together form one logical response."""

    data: tuple[GenerateContentResponseData, ...]


@dataclass(frozen=True, slots=True)
class StreamResponse:
    """A finite, single-use async stream of payload chunks."""

    stream: AsyncIterator[GenerateContentResponseData]


RawResponse: TypeAlias = SingleResponse | BatchResponse | StreamResponse


def as_response(obj: Any) -> RawResponse:
    """Coerce a loose provider value into a RawResponse variant.

    Mappings become single responses, lists and tuples become batches, and
    async iterables become streams.
    """
    if isinstance(obj, SingleResponse | BatchResponse | StreamResponse):
        return obj
    if isinstance(obj, Mapping):
        return SingleResponse(obj)  # type: ignore[arg-type]
    if isinstance(obj, list | tuple):
        return BatchResponse(tuple(obj))
    if isinstance(obj, AsyncIterable):
        return StreamResponse(aiter(obj))
    raise UnsupportedConversionError(
        f"Cannot interpret {type(obj).__name__} as a Gemini response",
        hint="Pass a response dict, a list of response dicts, or an async iterator.",
    )


_PAYLOAD_ADAPTER: TypeAdapter[GenerateContentResponseData] = TypeAdapter(
    GenerateContentResponseData
)
_BATCH_ADAPTER: TypeAdapter[list[GenerateContentResponseData]] = TypeAdapter(
    list[GenerateContentResponseData]
)


def response_from_json(text: str | bytes) -> SingleResponse | BatchResponse:
    """Parse a REST response body.

    A JSON object is a single response. A JSON array, which is what
    ``streamGenerateContent`` returns without ``alt=sse``, is a batch.
    """
    body = text.lstrip()
    is_array = body[:1] in ("[", b"[")
    try:
        if is_array:
            return BatchResponse(tuple(_BATCH_ADAPTER.validate_json(body)))
        return SingleResponse(_PAYLOAD_ADAPTER.validate_json(body))
    except ValidationError as e:
        raise MalformedResponseError(
            f"Invalid GenerateContent response body: {e.error_count()} error(s)",
            hint="Expected {'candidates': [...]} or a JSON array of such objects.",
        ) from e
