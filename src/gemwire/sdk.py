"""Bridge between the wire shapes and ``google-genai`` SDK objects.

The SDK is imported lazily so the conversion core works without it.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
import json
from typing import Any

from gemwire.errors import ConfigurationError
from gemwire.wire import GeminiContent, GenerateContentResponseData, StreamResponse


def _genai_types() -> Any:
    try:
        from google.genai import types
    except ImportError as e:
        raise ConfigurationError(
            "google-genai package not installed",
            hint="pip install google-genai",
        ) from e
    return types


def payload_from_sdk(response: Any) -> GenerateContentResponseData:
    """Dump an SDK ``GenerateContentResponse`` to the camelCase wire payload.

    Inline bytes are rendered as base64 strings, as in the REST API.
    """
    if isinstance(response, Mapping):
        return dict(response)  # type: ignore[return-value]
    dump = getattr(response, "model_dump", None)
    if not callable(dump):
        raise ConfigurationError(
            f"Cannot convert {type(response).__name__} to a Gemini payload",
            hint="Pass a google.genai.types.GenerateContentResponse.",
        )
    return dump(mode="json", by_alias=True, exclude_none=True)


def contents_to_sdk(contents: Iterable[GeminiContent]) -> list[Any]:
    """Build SDK ``Content`` objects from encoded wire contents."""
    types = _genai_types()
    # JSON validation decodes base64 inline data into bytes.
    return [types.Content.model_validate_json(json.dumps(c)) for c in contents]


def stream_from_sdk(chunks: AsyncIterable[Any]) -> StreamResponse:
    """Wrap an SDK chunk stream (``generate_content_stream``) as a StreamResponse."""

    async def _payloads() -> AsyncIterator[GenerateContentResponseData]:
        async for chunk in chunks:
            yield payload_from_sdk(chunk)

    return StreamResponse(_payloads())
