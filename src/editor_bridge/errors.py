"""Exception hierarchy for the bridge's ambient layers.

Decoding never raises on protocol input; these cover configuration and tooling.
"""

from __future__ import annotations


class BridgeError(RuntimeError):
    """Base class for every error raised by editor_bridge."""


class TelemetryConfigError(BridgeError, ValueError):
    """Raised when telemetry settings or presets cannot be applied."""


class TranscriptFormatError(BridgeError):
    """Raised when a replay transcript line cannot be parsed."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


__all__ = [
    "BridgeError",
    "TelemetryConfigError",
    "TranscriptFormatError",
]
