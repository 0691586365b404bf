"""Telemetry for text_macros, built on telelog.

Spans are named ``<area>::<operation>`` (``transform::markup``,
``buffer::insert``, ``commands::run``). The area is tracked as the telelog
component unless the caller names one. Failures that carry a macro error
``code`` (no expression at point, no file, bad input) are logged as warnings;
anything else escaping a span is logged as an error.

Environment knobs, all prefixed ``TEXT_MACROS_``:

``PRESET``           ``tui``, ``debug`` or ``quiet``; replaces the knobs below
``LOG_LEVEL``        minimum level, ``WARNING`` by default
``LOG_FILE``         also write records to this file
``LOG_JSON``         JSON records instead of text
``DISABLE_CONSOLE``  no console output
``NO_COLOR``         plain console output
``PROFILE``          ``0`` turns span profiling off
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEXT_MACROS_"
DEFAULT_LOGGER_NAME = "text_macros"
TUI_LOG_FILE = "text_macros.log"

_LOGGERS: Dict[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _base_config(level: str) -> Any:
    config = tl.Config()
    config.with_min_level(level.upper())
    config.with_profiling(_env_flag("PROFILE", True))
    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)
    return config


def _tui_config() -> Any:
    # the Textual screen owns the terminal, so records go to a file
    config = _base_config(_env("LOG_LEVEL") or "INFO")
    config.with_console_output(False)
    config.with_file_output(_env("LOG_FILE") or TUI_LOG_FILE)
    return config


def _debug_config() -> Any:
    config = _base_config("DEBUG")
    config.with_console_output(True)
    config.with_colored_output(not _env_flag("NO_COLOR", False))
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    return config


def _quiet_config() -> Any:
    config = _base_config("ERROR")
    config.with_console_output(False)
    return config


PRESETS: Dict[str, Callable[[], Any]] = {
    "tui": _tui_config,
    "debug": _debug_config,
    "quiet": _quiet_config,
}


def _env_config() -> Any:
    preset = PRESETS.get((_env("PRESET") or "").strip().lower())
    if preset is not None:
        return preset()

    config = _base_config(_env("LOG_LEVEL") or "WARNING")
    console = not _env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``preset`` names one of :data:`PRESETS`; ``config`` is a ready
    ``telelog.Config``. With neither, the environment is read again.
    Loggers handed out earlier keep their old configuration.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        try:
            config = PRESETS[preset.lower()]()
        except KeyError:
            raise ValueError(
                f"Unknown telemetry preset '{preset}' (expected one of {sorted(PRESETS)})"
            ) from None
    _CONFIG = config if config is not None else _env_config()
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` called ``name``."""

    global _CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        if _CONFIG is None:
            _CONFIG = _env_config()
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return _LOGGERS[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


def _failure_level(exc: BaseException) -> str:
    if getattr(exc, "code", None) or isinstance(exc, ValueError):
        return "warning"
    return "error"


@dataclass
class SpanHandle:
    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, exc: BaseException) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["error"] = getattr(exc, "code", None) or type(exc).__name__
        payload["reason"] = str(exc)
        _emit(self.logger, _failure_level(exc), "span::fail", payload)


def _area(name: str) -> Optional[str]:
    area, sep, _ = name.partition("::")
    return area if sep and area else None


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and track it under its area component.

    ``metadata`` is attached to the logger as context for the duration of
    the block; later :meth:`SpanHandle.add_metadata` calls only show up on
    the failure record.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(
        logger=log,
        name=name,
        component=component or _area(name),
        metadata={key: _text(value) for key, value in (metadata or {}).items()},
    )

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if handle.component:
            stack.enter_context(log.track_component(handle.component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(exc)
            raise


__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
