"""Wire unit and intermediate decode result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .styles import StyleSet


@dataclass(frozen=True, slots=True)
class CallbackMessage:
    """One ``(callback id, params)`` pair delivered by the editing surface."""

    id: str
    params: str = ""


@dataclass(frozen=True, slots=True)
class DecodedCallback:
    """Listener arguments produced from a message.

    ``next_styles`` is set for selection-style callbacks and becomes the
    dispatcher's stored style set once the listener has been called.
    """

    args: tuple[object, ...] = ()
    next_styles: Optional[StyleSet] = None


__all__ = ["CallbackMessage", "DecodedCallback"]
