"""Collapse raw Gemini responses into one canonical payload."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gemwire.errors import UnsupportedConversionError
from gemwire.wire import (
    BatchResponse,
    GenerateContentResponseData,
    RawResponse,
    SingleResponse,
    StreamResponse,
    as_response,
)


def normalize(raw: RawResponse) -> GenerateContentResponseData:
    """Return the single payload a response represents.

    A batch is folded left to right: the first candidate's parts of every
    element are concatenated in order, and ``promptFeedback`` is overwritten
    by each element so the last one wins. Other candidates and safety
    ratings are not merged. Streams must be consumed chunk by chunk.
    """
    match as_response(raw):
        case StreamResponse():
            raise UnsupportedConversionError(
                "Cannot convert a stream to GenerateContentResponseData",
                hint="Iterate the stream and convert each chunk instead.",
            )
        case BatchResponse(data=items):
            return _fold_batch(items)
        case SingleResponse(data=data):
            return data


def _fold_batch(
    items: tuple[GenerateContentResponseData, ...],
) -> GenerateContentResponseData:
    if not items:
        return {"candidates": []}

    first = items[0]
    # Copy the containers on the fold path; the caller's payloads stay intact.
    candidates = [dict(c) for c in first.get("candidates") or [{}]]
    head: dict[str, Any] = candidates[0]
    content = dict(head.get("content") or {"role": "model"})
    parts = list(content.get("parts") or [])
    content["parts"] = parts
    head["content"] = content

    acc: dict[str, Any] = {**first, "candidates": candidates}
    for item in items[1:]:
        parts.extend(extract_parts(item))
        acc["promptFeedback"] = item.get("promptFeedback")
    if acc.get("promptFeedback") is None:
        acc.pop("promptFeedback", None)
    return acc  # type: ignore[return-value]


def extract_parts(payload: GenerateContentResponseData) -> list[Any]:
    """Return the first candidate's parts, or an empty list if any link is absent."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return []
    content = candidates[0].get("content") or {}
    return list(content.get("parts") or [])


def part_to_text(part: Any) -> str:
    """Return a part's text, or ``""`` for non-text parts."""
    if isinstance(part, Mapping) and isinstance(part.get("text"), str):
        return part["text"]
    return ""


def extract_text(payload: GenerateContentResponseData) -> str:
    """Concatenate the text of every text part of the first candidate."""
    return "".join(part_to_text(p) for p in extract_parts(payload))
