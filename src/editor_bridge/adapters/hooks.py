"""Listener that forwards decoded editor events to plain callables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from editor_bridge.protocol.styles import StyleSet, apply_changes


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorHooks:
    """Callbacks a host wires to its own widgets or state."""

    dom_loaded: Callable[[], None] = _noop
    selection_style_changed: Callable[[Mapping[str, bool]], None] = _noop
    selection_changed: Callable[[Mapping[str, str]], None] = _noop
    link_tapped: Callable[[Optional[str], Optional[str]], None] = _noop
    html_response: Callable[[Mapping[str, str]], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class HookListener:
    """``EditorStateListener`` backed by an ``EditorHooks`` bundle.

    Keeps ``active_styles`` in step with the change maps it receives.
    """

    def __init__(self, hooks: EditorHooks) -> None:
        self.hooks = hooks
        self.active_styles: StyleSet = frozenset()

    def on_dom_loaded(self) -> None:
        self._log_event("dom_loaded")
        self.hooks.dom_loaded()

    def on_selection_style_changed(self, changes: Mapping[str, bool]) -> None:
        self.active_styles = apply_changes(self.active_styles, dict(changes))
        self._log_event(
            "selection_style_changed",
            changes=dict(changes),
            active=sorted(self.active_styles),
        )
        self.hooks.selection_style_changed(changes)

    def on_selection_changed(self, selection: Mapping[str, str]) -> None:
        self._log_event("selection_changed", selection=dict(selection))
        self.hooks.selection_changed(selection)

    def on_link_tapped(self, url: Optional[str], title: Optional[str]) -> None:
        self._log_event("link_tapped", url=url, title=title)
        self.hooks.link_tapped(url, title)

    def on_get_html_response(self, response: Mapping[str, str]) -> None:
        self._log_event("html_response", keys=sorted(response))
        self.hooks.html_response(response)

    def _log_event(self, name: str, **fields: object) -> None:
        parts = ["event ->", f"name={name!r}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


__all__ = ["EditorHooks", "HookListener"]
