"""Safety policies applied to Gemini responses.

Two checks run in fixed order on every payload: a blocked prompt
(``promptFeedback.blockReason``), then a disallowed finish reason on the
first candidate. ``StrictSafetyPolicy`` raises ``SafetyError`` on the first
rejection and never modifies what it is given. ``ReplacingSafetyPolicy``
wraps the strict checks and substitutes a placeholder answer instead; it
rewrites content, so do not use it where an unmodified audit trail of
provider output is required.

Streams pass through both policies untouched: enforcement is not defined for
partial chunks.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
from typing import Any, Protocol, runtime_checkable

from gemwire.config import DEFAULT_ERROR_FINISH, SafetySettings
from gemwire.errors import SafetyError
from gemwire.response import extract_parts
from gemwire.wire import (
    BatchResponse,
    GenerateContentResponseData,
    RawResponse,
    SingleResponse,
    StreamResponse,
    as_response,
)

log = logging.getLogger(__name__)


@runtime_checkable
class SafetyPolicy(Protocol):
    """Decides whether a response may be delivered to the caller."""

    def enforce(self, raw: RawResponse) -> RawResponse:
        """Return a deliverable response or raise ``SafetyError``."""
        ...

    def enforce_payload(
        self, payload: GenerateContentResponseData
    ) -> GenerateContentResponseData:
        """Apply the checks to a single canonical payload."""
        ...


def prompt_feedback_reason(payload: GenerateContentResponseData) -> str | None:
    """Return the rejection reason for a blocked prompt, if any."""
    feedback = payload.get("promptFeedback") or {}
    block_reason = feedback.get("blockReason")
    if block_reason:
        return f"Prompt blocked: {block_reason}"
    return None


def finish_reason_reason(
    payload: GenerateContentResponseData, error_finish: Iterable[str]
) -> str | None:
    """Return the rejection reason for a disallowed finish reason, if any."""
    candidates = payload.get("candidates") or []
    finish_reason = candidates[0].get("finishReason") if candidates else None
    if finish_reason is not None and finish_reason in error_finish:
        return f"Finish reason: {finish_reason}"
    return None


@dataclass(frozen=True)
class StrictSafetyPolicy:
    """Reject blocked prompts and disallowed finish reasons with ``SafetyError``."""

    error_finish: frozenset[str] = frozenset(DEFAULT_ERROR_FINISH)

    def __post_init__(self) -> None:
        object.__setattr__(self, "error_finish", frozenset(self.error_finish))

    def enforce_payload(
        self, payload: GenerateContentResponseData
    ) -> GenerateContentResponseData:
        """Return ``payload`` itself when it passes both checks."""
        return self._check(SingleResponse(payload), payload)

    def enforce(self, raw: RawResponse) -> RawResponse:
        """Check every payload of ``raw`` and return ``raw`` itself when all pass.

        Batch elements are checked in order. The first rejection stops the
        scan and is re-raised carrying the whole original batch.
        """
        raw = as_response(raw)
        match raw:
            case StreamResponse():
                return raw
            case BatchResponse(data=items):
                try:
                    for item in items:
                        self._check(raw, item)
                except SafetyError as e:
                    raise SafetyError(raw, e.reason) from e
                return raw
            case SingleResponse(data=data):
                self._check(raw, data)
                return raw

    def _check(
        self, raw: RawResponse, payload: GenerateContentResponseData
    ) -> GenerateContentResponseData:
        reason = prompt_feedback_reason(payload) or finish_reason_reason(
            payload, self.error_finish
        )
        if reason is not None:
            raise SafetyError(raw, reason)
        return payload


@dataclass(frozen=True)
class ReplacingSafetyPolicy:
    """Recover from rejections by substituting a placeholder model answer.

    A rejected payload that already has parts keeps them unless
    ``force_new_message`` is set; otherwise its first candidate's content
    becomes ``{"role": "model", "parts": [{"text": placeholder_message}]}``.
    """

    checks: StrictSafetyPolicy = StrictSafetyPolicy()
    placeholder_message: str = ""
    force_new_message: bool = False

    def enforce_payload(
        self, payload: GenerateContentResponseData
    ) -> GenerateContentResponseData:
        """Return ``payload`` when it passes, else its replacement."""
        try:
            return self.checks.enforce_payload(payload)
        except SafetyError as e:
            log.warning("Recovering from safety rejection: %s", e.reason)
            return self._replace(payload)

    def enforce(self, raw: RawResponse) -> RawResponse:
        """Return ``raw`` when every payload passes, else a rewritten copy."""
        raw = as_response(raw)
        match raw:
            case StreamResponse():
                return raw
            case BatchResponse(data=items):
                handled = tuple(self.enforce_payload(item) for item in items)
                if all(h is i for h, i in zip(handled, items, strict=True)):
                    return raw
                return BatchResponse(handled)
            case SingleResponse(data=data):
                handled_data = self.enforce_payload(data)
                return raw if handled_data is data else SingleResponse(handled_data)

    def _replace(
        self, payload: GenerateContentResponseData
    ) -> GenerateContentResponseData:
        if not self.force_new_message and extract_parts(payload):
            return payload
        candidates: list[Any] = list(payload.get("candidates") or [{}])
        candidates[0] = {
            **candidates[0],
            "content": {
                "role": "model",
                "parts": [{"text": self.placeholder_message}],
            },
        }
        return {**payload, "candidates": candidates}  # type: ignore[typeddict-item]


def build_policy(settings: SafetySettings | None = None) -> SafetyPolicy:
    """Select the safety strategy described by ``settings``."""
    settings = settings or SafetySettings()
    checks = StrictSafetyPolicy(error_finish=frozenset(settings.error_finish))
    if not settings.recover:
        return checks
    return ReplacingSafetyPolicy(
        checks=checks,
        placeholder_message=settings.placeholder_message,
        force_new_message=settings.force_new_message,
    )
