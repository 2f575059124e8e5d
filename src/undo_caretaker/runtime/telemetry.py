"""Telemetry services built directly on telelog.

The rest of the package only touches four entry points:

``configure(...)`` -- adopt an explicit telelog config, a named preset, or settings
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- context manager combining profiling + component tracking
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .settings import CareTakerSettings, TelemetrySettings

tl = cast(Any, telelog)

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_DEFAULT_LOGGER_NAME = "undo_caretaker"


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _with_profiling(config: Any) -> Any:
    config.with_profiling(True)
    return config


def _build_preset_config(preset: str, settings: TelemetrySettings) -> Any:
    config = tl.Config()
    key = preset.lower()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
        config.with_json_format(False)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(settings.log_file or "undo_caretaker.log")
        config.with_buffering(True)
    elif key == "quiet":
        config.with_min_level("ERROR")
        config.with_console_output(False)
    else:
        raise ValueError(f"Unknown preset '{preset}'.")

    return _with_profiling(config)


def _build_settings_config(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.json_format:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    return _with_profiling(config)


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[CareTakerSettings] = None,
) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt.
    preset:
        ``"development"``, ``"production"`` or ``"quiet"``.
    settings:
        Settings to build from; defaults to :meth:`CareTakerSettings.from_env`.

    ``config`` and ``preset`` are mutually exclusive. Cached loggers are dropped
    so the next :func:`get_logger` call picks up the new configuration.
    """

    global _ACTIVE_CONFIG, _DEFAULT_LOGGER_NAME
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    resolved = settings or CareTakerSettings.from_env()
    _DEFAULT_LOGGER_NAME = resolved.telemetry.logger_name

    if preset:
        config = _build_preset_config(preset, resolved.telemetry)
    elif config is None:
        config = _build_settings_config(resolved.telemetry)

    _ACTIVE_CONFIG = _with_profiling(config)
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    if _ACTIVE_CONFIG is None:
        configure()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` using the active configuration."""

    config = _ensure_config()
    logger_name = name or _DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, config)
    return _LOGGER_CACHE[logger_name]


def _resolve_level_method(
    logger: Any, level: Any, *, expect_data: bool = False
) -> Tuple[Any, bool]:
    name = str(level).lower()
    if expect_data:
        with_attr = getattr(logger, f"{name}_with", None)
        if with_attr is not None:
            return with_attr, True

    attr = getattr(logger, name, None)
    if attr is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return attr, False


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    method, accepts_data = _resolve_level_method(log, level, expect_data=True)
    message = f"event::{name}"
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-operation."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})

        method, accepts = _resolve_level_method(self.logger, level, expect_data=True)
        if accepts:
            method(message, _format_pairs(payload))
        else:
            method(f"{message} {payload}")

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", {"reason": reason})

    def skip(self, reason: str) -> None:
        self._emit("debug", "span::skip", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and optionally track it as a component.

    ``component=True`` reuses ``name`` as the component identifier, a string
    names it explicitly. ``metadata`` is pushed as logger context for the
    duration of the block and kept on the yielded handle.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    context_keys = []
    metadata_payload: Dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        serialized = _stringify(value)
        metadata_payload[key] = serialized
        log.add_context(key, serialized)
        context_keys.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))

        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(metadata_payload),
        )

        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
