"""Environment-driven settings for the bridge telemetry layer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from editor_bridge.errors import TelemetryConfigError

ENV_PREFIX = "EDITOR_BRIDGE_"
TRUTHY = frozenset({"1", "true", "yes", "on"})
DEFAULT_LOGGER_NAME = "editor_bridge"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_BUFFER_SIZE = 2048


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _lookup(env, name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _lookup(env, name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise TelemetryConfigError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
        ) from exc
    if value <= 0:
        raise TelemetryConfigError(f"{ENV_PREFIX}{name} must be positive")
    return value


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Snapshot of the ``EDITOR_BRIDGE_*`` variables that shape logging."""

    logger_name: str = DEFAULT_LOGGER_NAME
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str = ""
    log_json: bool = False
    console: bool = True
    colored: bool = True
    buffered: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    preset: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        source = os.environ if env is None else env
        preset = (_lookup(source, "PRESET") or "").strip().lower() or None
        return cls(
            logger_name=_lookup(source, "LOGGER") or DEFAULT_LOGGER_NAME,
            log_level=(_lookup(source, "LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            log_file=_lookup(source, "LOG_FILE") or "",
            log_json=_flag(source, "LOG_JSON", False),
            console=not _flag(source, "DISABLE_CONSOLE", False),
            colored=not _flag(source, "NO_COLOR", False),
            buffered=_flag(source, "LOG_BUFFERED", False),
            buffer_size=_positive_int(source, "LOG_BUFFER_SIZE", DEFAULT_BUFFER_SIZE),
            preset=preset,
        )


__all__ = ["ENV_PREFIX", "TelemetrySettings"]
