from __future__ import annotations

import pytest

from gemwire.errors import (
    ConfigurationError,
    GemwireError,
    InvalidParameterError,
    MalformedResponseError,
    MissingDataError,
    SafetyError,
    UnrecognizedPartError,
    UnsupportedConversionError,
)
from gemwire.wire import SingleResponse

pytestmark = pytest.mark.unit


def test_base_error_carries_hint() -> None:
    err = GemwireError("boom", hint="do this")

    assert str(err) == "boom"
    assert err.hint == "do this"


def test_subclass_hierarchy() -> None:
    for cls in (
        ConfigurationError,
        InvalidParameterError,
        MalformedResponseError,
        MissingDataError,
        SafetyError,
        UnrecognizedPartError,
        UnsupportedConversionError,
    ):
        assert issubclass(cls, GemwireError)


def test_safety_error_carries_response_and_reply() -> None:
    raw = SingleResponse({"candidates": []})
    err = SafetyError(raw, "Finish reason: SAFETY")

    assert str(err) == "Finish reason: SAFETY"
    assert err.response is raw
    assert err.reason == "Finish reason: SAFETY"
    assert err.reply is None

    err.reply = "would-be answer"
    assert err.reply == "would-be answer"


def test_structured_metadata_defaults() -> None:
    assert InvalidParameterError("bad").field is None
    assert UnrecognizedPartError("bad", part={"x": 1}).part == {"x": 1}
