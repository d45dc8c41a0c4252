"""Exception hierarchy for gemwire."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gemwire.wire import RawResponse


class GemwireError(Exception):
    """Base exception for all gemwire errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(GemwireError):
    """Configuration validation or resolution failed."""


class MissingDataError(GemwireError):
    """A content part is missing the data it needs (e.g. an empty image URL)."""


class UnsupportedConversionError(GemwireError):
    """The requested conversion is not defined for this input shape."""


class UnrecognizedPartError(GemwireError):
    """A provider part matched none of the known shapes (strict decoding only)."""

    def __init__(self, message: str, *, part: Any, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.part = part


class MalformedResponseError(GemwireError):
    """A provider response body does not have the expected envelope."""


class InvalidParameterError(GemwireError):
    """A generation parameter is outside its accepted range."""

    def __init__(
        self, message: str, *, field: str | None = None, hint: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.field = field


class SafetyError(GemwireError):
    """The safety policy rejected a response.

    ``response`` is always the original, un-normalized response (for a batch,
    the whole batch rather than the offending element). Safe builders store
    what the rejected answer would have produced on ``reply`` before the
    error reaches the caller.
    """

    def __init__(self, response: RawResponse, reason: str) -> None:
        super().__init__(reason)
        self.response = response
        self.reason = reason
        self.reply: Any = None
