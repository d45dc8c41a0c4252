"""Internal validation helpers for the message data model."""

from __future__ import annotations


def _is_parts_tuple(value: object, part_types: tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, part_types) for v in value)


def _require(
    condition: bool, message: str, *, exc: type[Exception] = TypeError
) -> None:
    """Raise ``exc(message)`` unless ``condition`` holds."""
    if not condition:
        raise exc(message)
