"""Runtime services: configuration and telemetry."""

from . import config, telemetry

__all__ = ["config", "telemetry"]
