"""Test helpers (small, reusable payload builders).

Keep this file tiny and purpose-built: it exists so test modules do not each
grow their own hand-written response dicts.
"""

from __future__ import annotations

from typing import Any


def make_payload(
    *parts: dict[str, Any],
    finish_reason: str | None = "STOP",
    block_reason: str | None = None,
    role: str = "model",
) -> dict[str, Any]:
    """Build a one-candidate GenerateContent payload."""
    candidate: dict[str, Any] = {"content": {"role": role, "parts": list(parts)}}
    if finish_reason is not None:
        candidate["finishReason"] = finish_reason
    payload: dict[str, Any] = {"candidates": [candidate]}
    if block_reason is not None:
        payload["promptFeedback"] = {"blockReason": block_reason}
    return payload


async def agen(*items: Any):
    """Yield items as an async stream."""
    for item in items:
        yield item
