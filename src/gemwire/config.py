"""Configuration: frozen safety settings with environment resolution."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from gemwire.errors import ConfigurationError

load_dotenv()

DEFAULT_ERROR_FINISH: tuple[str, ...] = ("SAFETY", "RECITATION", "OTHER")

_ENV_PREFIX = "GEMWIRE_"
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class SafetySettings:
    """Immutable settings that select and tune a safety policy.

    Example:
        settings = SafetySettings(recover=True, placeholder_message="[blocked]")
        policy = build_policy(settings)
    """

    #: Finish reasons that reject a response.
    error_finish: tuple[str, ...] = DEFAULT_ERROR_FINISH
    #: Text substituted for rejected responses when ``recover`` is set.
    placeholder_message: str = ""
    #: Replace rejected content even when the response already has parts.
    force_new_message: bool = False
    #: Recover from rejections instead of raising ``SafetyError``.
    recover: bool = False

    def __post_init__(self) -> None:
        """Normalize and validate field shapes early for clear errors."""
        if isinstance(self.error_finish, str):
            raise ConfigurationError(
                "error_finish must be a sequence of finish reasons, not a string",
                hint="Pass error_finish=('SAFETY', 'RECITATION').",
            )
        reasons = tuple(self.error_finish)
        if not all(isinstance(r, str) and r for r in reasons):
            raise ConfigurationError(
                "error_finish entries must be non-empty strings",
                hint="Use Gemini finish reason names such as 'SAFETY'.",
            )
        object.__setattr__(self, "error_finish", reasons)

        if not isinstance(self.placeholder_message, str):
            raise ConfigurationError(
                "placeholder_message must be a string",
                hint="Pass placeholder_message='This response was blocked.'",
            )

    @classmethod
    def from_env(cls) -> SafetySettings:
        """Build settings from ``GEMWIRE_*`` environment variables.

        Unset variables keep their defaults.
        """
        kwargs: dict[str, object] = {}

        raw_finish = os.environ.get(f"{_ENV_PREFIX}SAFETY_ERROR_FINISH")
        if raw_finish is not None:
            kwargs["error_finish"] = tuple(
                r.strip().upper() for r in raw_finish.split(",") if r.strip()
            )

        placeholder = os.environ.get(f"{_ENV_PREFIX}SAFETY_PLACEHOLDER")
        if placeholder is not None:
            kwargs["placeholder_message"] = placeholder

        for field_name, env_name in (
            ("force_new_message", "SAFETY_FORCE_NEW_MESSAGE"),
            ("recover", "SAFETY_RECOVER"),
        ):
            raw = os.environ.get(f"{_ENV_PREFIX}{env_name}")
            if raw is not None:
                kwargs[field_name] = _parse_bool(f"{_ENV_PREFIX}{env_name}", raw)

        return cls(**kwargs)  # type: ignore[arg-type]


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean, got {raw!r}",
        hint="Use one of: 1, 0, true, false, yes, no, on, off.",
    )
