"""Environment-driven defaults for the built-in macros."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX, record_event


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        record_event(
            "config.invalid_int",
            level="warning",
            data={"key": key, "value": value},
        )
        return fallback
    return parsed if parsed > 0 else fallback


def _env_str(env: Mapping[str, str], key: str, fallback: str) -> str:
    value = env.get(f"{ENV_PREFIX}{key}")
    return fallback if value is None else value


@dataclass(frozen=True, slots=True)
class MacroSettings:
    """Knobs shared by commands; transformer functions take explicit arguments."""

    delimiter_width: int = 76
    delimiter_char: str = "-"
    cut_label: str = "8<"
    placeholder: str = "[...]"
    open_quote: str = "`"
    close_quote: str = "'"
    default_tag: str = "em"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "MacroSettings":
        source = os.environ if env is None else env
        defaults = cls()
        char = _env_str(source, "DELIMITER_CHAR", defaults.delimiter_char)
        return cls(
            delimiter_width=_env_int(
                source, "DELIMITER_WIDTH", defaults.delimiter_width
            ),
            delimiter_char=char[:1] or defaults.delimiter_char,
            cut_label=_env_str(source, "CUT_LABEL", defaults.cut_label),
            placeholder=_env_str(source, "PLACEHOLDER", defaults.placeholder),
            open_quote=_env_str(source, "OPEN_QUOTE", defaults.open_quote),
            close_quote=_env_str(source, "CLOSE_QUOTE", defaults.close_quote),
            default_tag=_env_str(source, "DEFAULT_TAG", defaults.default_tag),
        )

    def with_overrides(self, **changes: object) -> "MacroSettings":
        return replace(self, **changes)  # type: ignore[arg-type]


__all__ = ["MacroSettings"]
