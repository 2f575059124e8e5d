"""Environment-driven settings for telemetry and history bounds."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

ENV_PREFIX = "UNDO_CARETAKER_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _lookup(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _lookup(environ, name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag, got '{raw}'")


def _positive_int(
    environ: Mapping[str, str], name: str, default: Optional[int]
) -> Optional[int]:
    raw = _lookup(environ, name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got '{raw}'") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Knobs forwarded to the telelog configuration."""

    logger_name: str = "undo_caretaker"
    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False
    console: bool = True
    colored: bool = True
    buffered: bool = False
    buffer_size: int = 2048


@dataclass(frozen=True, slots=True)
class CareTakerSettings:
    """Process-wide defaults, usually built with :meth:`from_env`."""

    history_depth: Optional[int] = None
    telemetry: TelemetrySettings = field(default_factory=TelemetrySettings)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CareTakerSettings":
        env = os.environ if environ is None else environ
        telemetry = TelemetrySettings(
            logger_name=_lookup(env, "LOGGER") or "undo_caretaker",
            level=(_lookup(env, "LOG_LEVEL") or "INFO").upper(),
            log_file=_lookup(env, "LOG_FILE") or "",
            json_format=_flag(env, "LOG_JSON", False),
            console=not _flag(env, "DISABLE_CONSOLE", False),
            colored=not _flag(env, "NO_COLOR", False),
            buffered=_flag(env, "LOG_BUFFERED", False),
            buffer_size=_positive_int(env, "LOG_BUFFER_SIZE", 2048) or 2048,
        )
        return cls(
            history_depth=_positive_int(env, "HISTORY_DEPTH", None),
            telemetry=telemetry,
        )


__all__ = ["ENV_PREFIX", "CareTakerSettings", "TelemetrySettings"]
