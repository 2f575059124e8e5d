"""Runtime services: settings and telemetry."""

from .settings import ENV_PREFIX, CareTakerSettings, TelemetrySettings

__all__ = ["ENV_PREFIX", "CareTakerSettings", "TelemetrySettings"]
