"""Listener implementations hosts can plug into the dispatcher."""

from .hooks import EditorHooks, HookListener

__all__ = ["EditorHooks", "HookListener"]
