"""Decode editor surface callbacks into typed listener events."""

from editor_bridge.dispatcher import CallbackDispatcher
from editor_bridge.listener import EditorStateListener
from editor_bridge.protocol import CallbackKind, CallbackMessage

__all__ = [
    "CallbackDispatcher",
    "CallbackKind",
    "CallbackMessage",
    "EditorStateListener",
    "adapters",
    "protocol",
    "runtime",
]

__version__ = "0.1.0"
