from __future__ import annotations

from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from text_macros.runtime import telemetry
from text_macros.transform import NoExpressionFound


class FakeLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Dict[str, str]]] = []
        self.context: Dict[str, str] = {}
        self.components: List[str] = []
        self.profiles: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        del self.context[key]

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiles.append(name)
        yield

    def _record(self, level: str, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append((level, message, dict(pairs)))

    def info_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self._record("info", message, pairs)

    def warning_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self._record("warning", message, pairs)

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self._record("error", message, pairs)


class FakeConfig:
    def __init__(self) -> None:
        self.settings: Dict[str, Any] = {}

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("with_"):
            raise AttributeError(name)

        def setter(value: Any) -> None:
            self.settings[name[len("with_") :]] = value

        return setter


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    logger = FakeLogger()
    monkeypatch.setitem(telemetry._LOGGERS, "test", logger)
    return logger


@pytest.fixture
def fake_config(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PRESET", "LOG_LEVEL", "LOG_FILE", "LOG_JSON", "PROFILE"):
        monkeypatch.delenv(f"{telemetry.ENV_PREFIX}{name}", raising=False)
    monkeypatch.setattr(telemetry, "tl", SimpleNamespace(Config=FakeConfig))
    monkeypatch.setattr(telemetry, "_CONFIG", None)


def test_span_tracks_its_area_and_scopes_context(fake_logger: FakeLogger) -> None:
    with telemetry.span(
        "transform::markup", metadata={"tag": "em", "start": 2}, logger_name="test"
    ):
        assert fake_logger.context == {"tag": "em", "start": "2"}

    assert fake_logger.components == ["transform"]
    assert fake_logger.profiles == ["transform::markup"]
    assert fake_logger.context == {}
    assert fake_logger.records == []


def test_span_explicit_component_wins(fake_logger: FakeLogger) -> None:
    with telemetry.span("plain", component="buffer", logger_name="test"):
        pass

    assert fake_logger.components == ["buffer"]


def test_macro_failures_are_warnings(fake_logger: FakeLogger) -> None:
    with pytest.raises(NoExpressionFound):
        with telemetry.span("transform::wrap_expression", logger_name="test") as handle:
            handle.add_metadata("position", 7)
            raise NoExpressionFound(7)

    level, message, payload = fake_logger.records[-1]
    assert (level, message) == ("warning", "span::fail")
    assert payload["error"] == "no_expression"
    assert payload["position"] == "7"
    assert payload["component"] == "transform"
    assert fake_logger.context == {}


def test_unexpected_failures_are_errors(fake_logger: FakeLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("buffer::insert", metadata={"buffer": "b"}, logger_name="test"):
            raise RuntimeError("disk on fire")

    level, _, payload = fake_logger.records[-1]
    assert level == "error"
    assert payload["error"] == "RuntimeError"
    assert payload["reason"] == "disk on fire"
    assert fake_logger.context == {}


def test_record_event_sends_pairs(fake_logger: FakeLogger) -> None:
    telemetry.record_event(
        "config.invalid_int", level="warning", data={"key": "WIDTH"}, logger_name="test"
    )

    assert fake_logger.records == [
        (
            "warning",
            "event::config.invalid_int",
            {"event": "config.invalid_int", "key": "WIDTH"},
        )
    ]


def test_tui_preset_keeps_records_off_the_terminal(fake_config: None) -> None:
    telemetry.configure(preset="tui")

    settings = telemetry._CONFIG.settings
    assert settings["console_output"] is False
    assert settings["file_output"] == telemetry.TUI_LOG_FILE
    assert settings["min_level"] == "INFO"
    assert settings["profiling"] is True


def test_preset_selected_from_environment(
    fake_config: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TEXT_MACROS_PRESET", "quiet")
    monkeypatch.setenv("TEXT_MACROS_PROFILE", "0")

    telemetry.configure()

    settings = telemetry._CONFIG.settings
    assert settings["min_level"] == "ERROR"
    assert settings["console_output"] is False
    assert settings["profiling"] is False


def test_environment_knobs_without_preset(
    fake_config: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TEXT_MACROS_LOG_LEVEL", "debug")
    monkeypatch.setenv("TEXT_MACROS_LOG_FILE", "macros.log")

    telemetry.configure()

    settings = telemetry._CONFIG.settings
    assert settings["min_level"] == "DEBUG"
    assert settings["file_output"] == "macros.log"


def test_unknown_preset_is_rejected(fake_config: None) -> None:
    with pytest.raises(ValueError, match="Unknown telemetry preset"):
        telemetry.configure(preset="loud")
    with pytest.raises(ValueError):
        telemetry.configure(config=FakeConfig(), preset="tui")
