"""Bridge telemetry built on telelog.

Everything that logs goes through this module:

``configure(...)`` -- adopt a telelog config, a named preset or env settings
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block, optionally tracked as a component
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from editor_bridge.config import TelemetrySettings
from editor_bridge.errors import TelemetryConfigError

tl = cast(Any, telelog)

PRESETS = ("development", "production", "quiet")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_SETTINGS: TelemetrySettings = TelemetrySettings()


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return repr(value)
    return str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _config_from_settings(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.log_level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.log_json:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    return config


def _preset_config(preset: str, settings: TelemetrySettings) -> Any:
    config = tl.Config()
    key = preset.lower()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(settings.colored)
        config.with_json_format(False)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(settings.log_file or "editor_bridge.log")
        config.with_buffering(True)
    elif key == "quiet":
        config.with_min_level("WARNING")
        config.with_console_output(settings.console)
    else:
        raise TelemetryConfigError(
            f"Unknown preset '{preset}', expected one of {', '.join(PRESETS)}."
        )
    return config


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[TelemetrySettings] = None,
) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt as-is.
    preset:
        One of ``PRESETS``. Mutually exclusive with ``config``.
    settings:
        Settings to build from; defaults to ``TelemetrySettings.from_env()``.
        A preset named in the settings applies when no ``preset`` is passed.
    """

    global _ACTIVE_CONFIG, _SETTINGS
    if config is not None and preset:
        raise TelemetryConfigError("Provide either `config` or `preset`, not both.")

    _SETTINGS = settings or TelemetrySettings.from_env()
    if config is None:
        chosen = preset or _SETTINGS.preset
        if chosen:
            config = _preset_config(chosen, _SETTINGS)
        else:
            config = _config_from_settings(_SETTINGS)

    # spans rely on logger.profile
    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active config."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or _SETTINGS.logger_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise TelemetryConfigError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach results to the span."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and optionally track it as a telelog component.

    ``component=True`` reuses ``name`` as the component id; a string names it
    explicitly. ``metadata`` entries are pushed as logger context for the
    duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)

    pushed: list[str] = []
    serialized = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in serialized.items():
        log.add_context(key, value)
        pushed.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(serialized),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in pushed:
                log.remove_context(key)


configure()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
