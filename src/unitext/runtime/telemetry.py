"""Telemetry for unitext, built directly on telelog.

Buffer edits run inside ``span`` so each one is profiled under the
``buffer`` component; notable conditions (rejected input, stale iterators,
inspector failures) go through ``record_event``. Output is configured from
``Settings`` unless ``configure`` is handed a preset or a ready ``tl.Config``.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .config import Settings, get_settings

tl = cast(Any, telelog)

# preset -> (min level, console, colored, log to file, buffered)
PRESETS: Mapping[str, Tuple[str, bool, bool, bool, bool]] = {
    "development": ("DEBUG", True, True, False, False),
    "production": ("WARNING", False, False, True, True),
    "quiet": ("ERROR", False, False, False, False),
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def config_for_preset(preset: str, settings: Optional[Settings] = None) -> Any:
    """Build a ``tl.Config`` for one of ``PRESETS``."""

    try:
        level, console, colored, to_file, buffered = PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None
    settings = settings or get_settings()
    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(colored)
    if to_file:
        config.with_file_output(settings.log_file or "unitext.log")
    if buffered:
        config.with_buffering(True)
    config.with_profiling(True)
    return config


def config_from_settings(settings: Optional[Settings] = None) -> Any:
    """Build a ``tl.Config`` from ``UNITEXT_LOG_*`` settings."""

    settings = settings or get_settings()
    config = tl.Config()
    config.with_min_level(settings.log_level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.color)
    if settings.log_json:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.log_buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.log_buffer_size)
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    ``config`` adopts an explicit ``tl.Config``; ``preset`` names an entry of
    ``PRESETS``. With neither, settings from the environment apply.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = config_for_preset(preset)
    elif config is None:
        config = config_from_settings()
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = config_from_settings()
    logger_name = name or get_settings().logger_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    method = getattr(logger, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return method, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs.

    Silent when ``UNITEXT_TELEMETRY_EVENTS`` is off.
    """

    if not get_settings().telemetry_events:
        return
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracked under ``component``.

    ``metadata`` sits on the logger context while the block runs. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log, span_name=name, component_name=component, metadata=dict(context)
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


__all__ = [
    "PRESETS",
    "SpanHandle",
    "config_for_preset",
    "config_from_settings",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
