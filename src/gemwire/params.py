"""Generation parameters and their validation.

Out-of-range values fail fast with ``InvalidParameterError`` before any
provider call is made.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from gemwire.errors import InvalidParameterError


@dataclass(frozen=True)
class GenerationParams:
    """Tuning parameters for one Gemini generation call."""

    #: Hard limit on output tokens; ``0`` is accepted and left to the provider.
    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    stop_sequences: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate ranges early for clear errors."""
        object.__setattr__(self, "stop_sequences", tuple(self.stop_sequences))
        validate_gemini_params(self)

    def to_generation_config(self) -> dict[str, Any]:
        """Return the camelCase ``generationConfig`` mapping, omitting unset fields."""
        config: dict[str, Any] = {}
        if self.max_output_tokens is not None:
            config["maxOutputTokens"] = self.max_output_tokens
        if self.temperature is not None:
            config["temperature"] = self.temperature
        if self.top_p is not None:
            config["topP"] = self.top_p
        if self.top_k is not None:
            config["topK"] = self.top_k
        if self.stop_sequences:
            config["stopSequences"] = list(self.stop_sequences)
        return config


def _in_unit_range(value: float) -> bool:
    return 0.0 <= value <= 1.0


def validate_gemini_params(params: GenerationParams) -> None:
    """Raise ``InvalidParameterError`` for the first out-of-range parameter."""
    if params.max_output_tokens is not None and params.max_output_tokens < 0:
        raise InvalidParameterError(
            "`max_output_tokens` must be a positive integer",
            field="max_output_tokens",
            hint="Leave it unset to use the model default.",
        )
    if params.temperature is not None and not _in_unit_range(params.temperature):
        raise InvalidParameterError(
            "`temperature` must be in the range of [0.0,1.0]",
            field="temperature",
        )
    if params.top_p is not None and not _in_unit_range(params.top_p):
        raise InvalidParameterError(
            "`top_p` must be in the range of [0.0,1.0]",
            field="top_p",
        )
    if params.top_k is not None and params.top_k < 0:
        raise InvalidParameterError(
            "`top_k` must be a positive integer",
            field="top_k",
        )


def is_model_gemini(model_name: str) -> bool:
    """Return True for Gemini model names (case-insensitive ``gemini`` prefix)."""
    return model_name.lower().startswith("gemini")
