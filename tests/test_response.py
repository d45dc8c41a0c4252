"""Response normalization tests."""

from __future__ import annotations

import copy

import pytest

from gemwire.errors import UnsupportedConversionError
from gemwire.response import extract_parts, extract_text, normalize, part_to_text
from gemwire.wire import BatchResponse, SingleResponse, StreamResponse
from tests.helpers import agen, make_payload

pytestmark = pytest.mark.unit


def test_single_payload_is_returned_unchanged() -> None:
    payload = make_payload({"text": "hi"})

    assert normalize(SingleResponse(payload)) is payload


def test_batch_concatenates_first_candidate_parts_in_order() -> None:
    batch = BatchResponse((make_payload({"text": "A"}), make_payload({"text": "B"})))

    merged = normalize(batch)

    assert extract_parts(merged) == [{"text": "A"}, {"text": "B"}]


def test_batch_only_merges_first_candidate_of_each_element() -> None:
    extra = {"content": {"role": "model", "parts": [{"text": "1st"}]}}
    alt = {"content": {"role": "model", "parts": [{"text": "alt"}]}}
    first = make_payload({"text": "A"})
    first["candidates"].append(extra)
    second = make_payload({"text": "B"})
    second["candidates"].append(alt)

    merged = normalize(BatchResponse((first, second)))

    assert extract_text(merged) == "AB"
    # The first element's extra candidates are carried; later ones are not.
    assert merged["candidates"][1:] == [extra]
    assert alt not in merged["candidates"]


def test_batch_prompt_feedback_is_overwritten_by_last_element() -> None:
    batch = BatchResponse(
        (
            make_payload({"text": "A"}, block_reason="SAFETY"),
            make_payload({"text": "B"}, block_reason="OTHER"),
            make_payload({"text": "C"}),
        )
    )

    merged = normalize(batch)

    # The last element has no feedback, so earlier feedback is discarded.
    assert "promptFeedback" not in merged


def test_batch_prompt_feedback_keeps_last_value() -> None:
    batch = BatchResponse(
        (make_payload({"text": "A"}), make_payload({"text": "B"}, block_reason="OTHER"))
    )

    assert normalize(batch)["promptFeedback"] == {"blockReason": "OTHER"}


def test_batch_fold_does_not_mutate_inputs() -> None:
    items = (make_payload({"text": "A"}), make_payload({"text": "B"}))
    snapshot = copy.deepcopy(items)

    normalize(BatchResponse(items))

    assert items == snapshot


def test_batch_tolerates_elements_without_candidates() -> None:
    batch = BatchResponse(({}, make_payload({"text": "B"}), {"candidates": []}))

    assert extract_text(normalize(batch)) == "B"


def test_empty_batch_normalizes_to_no_candidates() -> None:
    assert normalize(BatchResponse(())) == {"candidates": []}


def test_stream_cannot_be_normalized() -> None:
    with pytest.raises(UnsupportedConversionError, match="stream"):
        normalize(StreamResponse(agen()))


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {"role": "model"}}]},
    ],
)
def test_extract_parts_is_empty_when_chain_is_broken(payload) -> None:
    assert extract_parts(payload) == []


def test_extract_text_skips_non_text_parts() -> None:
    payload = make_payload(
        {"text": "Hello, "},
        {"inlineData": {"mimeType": "image/png", "data": "AA=="}},
        {"text": "world"},
    )

    assert extract_text(payload) == "Hello, world"


def test_part_to_text_of_non_text_part_is_empty() -> None:
    assert part_to_text({"fileData": {"mimeType": "image/png", "fileUri": "x"}}) == ""


def test_part_to_text_ignores_non_string_text() -> None:
    payload = make_payload({"text": None}, {"text": "b"})

    assert part_to_text({"text": None}) == ""
    assert extract_text(payload) == "b"
