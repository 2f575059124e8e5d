from __future__ import annotations

from contextlib import nullcontext
from typing import Any, List, Tuple

import pytest

from undo_caretaker import CareTaker, match_by
from undo_caretaker.runtime import CareTakerSettings, TelemetrySettings, telemetry


class FakeConfig:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("with_"):
            raise AttributeError(name)

        def record(*args: Any) -> "FakeConfig":
            self.calls.append((name, args))
            return self

        return record


class FakeLogger:
    def __init__(self, name: str, config: FakeConfig) -> None:
        self.name = name
        self.config = config
        self.lines: List[Tuple[str, str]] = []
        self.context: dict[str, str] = {}
        self.components: List[str] = []
        self.profiles: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    def track_component(self, name: str) -> Any:
        self.components.append(name)
        return nullcontext()

    def profile(self, name: str) -> Any:
        self.profiles.append(name)
        return nullcontext()

    def debug(self, message: str) -> None:
        self.lines.append(("debug", message))

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))


class FakeTelelog:
    Config = FakeConfig

    def __init__(self) -> None:
        self.created: List[FakeLogger] = []
        fake = self

        class Logger:
            @staticmethod
            def with_config(name: str, config: FakeConfig) -> FakeLogger:
                logger = FakeLogger(name, config)
                fake.created.append(logger)
                return logger

        self.Logger = Logger


@pytest.fixture
def fake_telelog(monkeypatch: pytest.MonkeyPatch) -> FakeTelelog:
    fake = FakeTelelog()
    monkeypatch.setattr(telemetry, "tl", fake)
    monkeypatch.setattr(telemetry, "_ACTIVE_CONFIG", None)
    monkeypatch.setattr(telemetry, "_LOGGER_CACHE", {})
    monkeypatch.setattr(telemetry, "_DEFAULT_LOGGER_NAME", "undo_caretaker")
    monkeypatch.delenv("UNDO_CARETAKER_HISTORY_DEPTH", raising=False)
    return fake


def active_calls() -> List[Tuple[str, Tuple[Any, ...]]]:
    return telemetry._ACTIVE_CONFIG.calls  # type: ignore[union-attr]


def test_development_preset(fake_telelog: FakeTelelog) -> None:
    telemetry.configure(preset="Development", settings=CareTakerSettings())

    calls = active_calls()
    assert ("with_min_level", ("DEBUG",)) in calls
    assert ("with_console_output", (True,)) in calls
    assert ("with_colored_output", (True,)) in calls
    assert ("with_json_format", (False,)) in calls
    assert ("with_profiling", (True,)) in calls


def test_production_preset_writes_to_configured_file(
    fake_telelog: FakeTelelog, tmp_path: Any
) -> None:
    log_file = str(tmp_path / "caretaker.log")
    settings = CareTakerSettings(telemetry=TelemetrySettings(log_file=log_file))

    telemetry.configure(preset="production", settings=settings)

    calls = active_calls()
    assert ("with_min_level", ("INFO",)) in calls
    assert ("with_console_output", (False,)) in calls
    assert ("with_file_output", (log_file,)) in calls
    assert ("with_buffering", (True,)) in calls


def test_production_preset_falls_back_to_default_file(fake_telelog: FakeTelelog) -> None:
    telemetry.configure(preset="production", settings=CareTakerSettings())

    assert ("with_file_output", ("undo_caretaker.log",)) in active_calls()


def test_quiet_preset_only_reports_errors(fake_telelog: FakeTelelog) -> None:
    telemetry.configure(preset="quiet", settings=CareTakerSettings())

    calls = active_calls()
    assert ("with_min_level", ("ERROR",)) in calls
    assert ("with_console_output", (False,)) in calls
    assert not any(name == "with_file_output" for name, _ in calls)


def test_unknown_preset_raises(fake_telelog: FakeTelelog) -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(preset="chatty", settings=CareTakerSettings())


def test_settings_build_the_config(fake_telelog: FakeTelelog) -> None:
    settings = CareTakerSettings(
        telemetry=TelemetrySettings(
            level="DEBUG",
            log_file="caretaker.log",
            json_format=True,
            console=False,
            buffered=True,
            buffer_size=16,
        )
    )

    telemetry.configure(settings=settings)

    calls = active_calls()
    assert ("with_min_level", ("DEBUG",)) in calls
    assert ("with_console_output", (False,)) in calls
    assert ("with_json_format", (True,)) in calls
    assert ("with_file_output", ("caretaker.log",)) in calls
    assert ("with_buffer_size", (16,)) in calls
    assert not any(name == "with_colored_output" for name, _ in calls)


def test_loggers_are_cached_until_reconfigured(fake_telelog: FakeTelelog) -> None:
    telemetry.configure(settings=CareTakerSettings())
    first = telemetry.get_logger("audit")

    assert telemetry.get_logger("audit") is first

    telemetry.configure(preset="quiet", settings=CareTakerSettings())
    assert telemetry.get_logger("audit") is not first


def test_caretaker_uses_configured_logger_name(fake_telelog: FakeTelelog) -> None:
    settings = CareTakerSettings(telemetry=TelemetrySettings(logger_name="ledger"))
    telemetry.configure(settings=settings)
    rows: List[dict] = []

    CareTaker(match_by("id")).add(rows, {"id": 1})

    assert [logger.name for logger in fake_telelog.created] == ["ledger"]
    logger = fake_telelog.created[0]
    assert logger.components == ["caretaker"]
    assert logger.profiles == ["caretaker::add"]
    assert logger.context == {}
    assert any(message.startswith("event::caretaker.add") for _, message in logger.lines)


def test_caretaker_logger_name_can_be_overridden(fake_telelog: FakeTelelog) -> None:
    telemetry.configure(settings=CareTakerSettings())

    CareTaker(match_by("id"), logger_name="audit").delete([], {"id": 1})

    assert [logger.name for logger in fake_telelog.created] == ["audit"]
    level, message = fake_telelog.created[0].lines[0]
    assert level == "debug"
    assert message.startswith("span::skip")
    assert "not_found" in message


def test_span_reports_failure_and_drops_context(fake_telelog: FakeTelelog) -> None:
    telemetry.configure(settings=CareTakerSettings())

    with pytest.raises(RuntimeError):
        with telemetry.span("work", metadata={"size": 3}):
            raise RuntimeError("broken")

    logger = fake_telelog.created[0]
    assert logger.context == {}
    level, message = logger.lines[-1]
    assert level == "error"
    assert message.startswith("span::fail")
    assert "broken" in message
