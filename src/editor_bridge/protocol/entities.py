"""HTML character reference decoding for text pulled out of callbacks."""

from __future__ import annotations

import html


def decode_html(text: str) -> str:
    """Replace named and numeric character references with literal characters.

    Text without references is returned unchanged.
    """

    if "&" not in text:
        return text
    return html.unescape(text)


__all__ = ["decode_html"]
