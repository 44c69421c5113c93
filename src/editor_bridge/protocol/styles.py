"""Formatting style sets reported by the editing surface."""

from __future__ import annotations

from typing import AbstractSet, Dict, Iterable

LINK_STYLE = "link"
LINK_URL_PREFIX = "link:"
LINK_TITLE_PREFIX = "link-title:"

StyleSet = frozenset[str]
StyleChangeMap = Dict[str, bool]


def normalize_styles(tokens: Iterable[str]) -> StyleSet:
    """Collapse ``link:<url>`` to ``link`` and drop ``link-title:<text>``."""

    styles: set[str] = set()
    for token in tokens:
        if token.startswith(LINK_URL_PREFIX):
            styles.add(LINK_STYLE)
        elif not token.startswith(LINK_TITLE_PREFIX):
            styles.add(token)
    return frozenset(styles)


def diff_styles(previous: AbstractSet[str], current: AbstractSet[str]) -> StyleChangeMap:
    """Map newly active styles to ``True`` and dropped ones to ``False``."""

    changes: StyleChangeMap = {style: True for style in sorted(current - previous)}
    changes.update({style: False for style in sorted(previous - current)})
    return changes


def apply_changes(styles: AbstractSet[str], changes: StyleChangeMap) -> StyleSet:
    """Return ``styles`` with a change map applied."""

    added = {style for style, active in changes.items() if active}
    removed = {style for style, active in changes.items() if not active}
    return frozenset((set(styles) - removed) | added)


__all__ = [
    "LINK_STYLE",
    "StyleSet",
    "StyleChangeMap",
    "normalize_styles",
    "diff_styles",
    "apply_changes",
]
