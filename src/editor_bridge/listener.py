"""Capabilities a host must provide to receive decoded editor callbacks."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class EditorStateListener(Protocol):
    """Receives structured events produced by ``CallbackDispatcher``."""

    def on_dom_loaded(self) -> None:
        """The editing surface finished loading its document."""
        ...

    def on_selection_style_changed(self, changes: Mapping[str, bool]) -> None:
        """Styles that became active (``True``) or inactive (``False``)."""
        ...

    def on_selection_changed(self, selection: Mapping[str, str]) -> None:
        """Focused field or caret/selection moved; ``key=value`` pairs as sent."""
        ...

    def on_link_tapped(self, url: Optional[str], title: Optional[str]) -> None:
        """A link was tapped; either value is ``None`` when not reported."""
        ...

    def on_get_html_response(self, response: Mapping[str, str]) -> None:
        """Fields returned by a ``function=`` request; empty if none decode."""
        ...


__all__ = ["EditorStateListener"]
