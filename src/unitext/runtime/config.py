"""Environment-driven defaults for unitext."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

ENV_PREFIX = "UNITEXT_"


def env(name: str, default: str | None = None) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class Settings:
    """Library-wide defaults resolved once from ``UNITEXT_*`` variables."""

    classifier: str = "regex"
    telemetry_events: bool = True
    logger_name: str = "unitext"
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    log_json: bool = False
    log_buffered: bool = False
    log_buffer_size: int = 2048
    console: bool = True
    color: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            classifier=(env("CLASSIFIER") or "regex").strip().lower(),
            telemetry_events=env_flag("TELEMETRY_EVENTS", True),
            logger_name=env("LOGGER") or "unitext",
            log_level=(env("LOG_LEVEL") or "WARNING").strip().upper(),
            log_file=env("LOG_FILE") or None,
            log_json=env_flag("LOG_JSON", False),
            log_buffered=env_flag("LOG_BUFFERED", False),
            log_buffer_size=env_int("LOG_BUFFER_SIZE", 2048),
            console=not env_flag("DISABLE_CONSOLE", False),
            color=not env_flag("NO_COLOR", False),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reload_settings() -> Settings:
    """Drop the cached settings so the next lookup re-reads the environment."""

    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "ENV_PREFIX",
    "Settings",
    "env",
    "env_flag",
    "env_int",
    "get_settings",
    "reload_settings",
]
