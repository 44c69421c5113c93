"""Tokenizers for the delimiter-separated callback parameter grammar.

Two decoding modes share the protocol delimiter:

* set mode -- ``split_delimited`` yields the raw tokens as a set; ``build_map``
  turns such a set into ``key=value`` pairs when a map is wanted.
* field mode -- ``split_fields`` + ``zip_fields`` assign tokens to an ordered
  list of expected field names, by their ``name=`` marker when present and by
  position otherwise.

Neither mode raises on malformed input.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence

DELIMITER = "~"
KEY_VALUE_SEPARATOR = "="


def split_delimited(text: str, delimiter: str = DELIMITER) -> frozenset[str]:
    """Split ``text`` into the set of its non-empty tokens."""

    if not text:
        return frozenset()
    return frozenset(token for token in text.split(delimiter) if token)


def build_map(tokens: Iterable[str]) -> Dict[str, str]:
    """Build a map from ``key=value`` tokens.

    A token without ``=`` is a value-only entry keyed by its own text.
    """

    result: Dict[str, str] = {}
    for token in sorted(tokens):
        key, separator, value = token.partition(KEY_VALUE_SEPARATOR)
        result[key] = value if separator else token
    return result


def _has_field_markers(text: str, field_names: Sequence[str], delimiter: str) -> bool:
    for name in field_names:
        marker = f"{name}{KEY_VALUE_SEPARATOR}"
        if text.startswith(marker) or f"{delimiter}{marker}" in text:
            return True
    return False


def split_fields(
    text: str, field_names: Sequence[str], delimiter: str = DELIMITER
) -> List[str]:
    """Split ``text`` into ordered tokens for field decoding.

    When the text carries ``name=`` markers for the expected fields, only a
    delimiter directly followed by one of them separates tokens, so field
    values may themselves contain the delimiter.
    """

    if not text:
        return []
    if field_names and _has_field_markers(text, field_names, delimiter):
        names = "|".join(re.escape(name) for name in field_names)
        pattern = f"{re.escape(delimiter)}(?=(?:{names}){KEY_VALUE_SEPARATOR})"
        return re.split(pattern, text)
    return text.split(delimiter)


def _field_key(token: str, field_names: Sequence[str]) -> Optional[str]:
    key, separator, _ = token.partition(KEY_VALUE_SEPARATOR)
    if separator and key in field_names:
        return key
    return None


def zip_fields(tokens: Sequence[str], field_names: Sequence[str]) -> Dict[str, str]:
    """Assign tokens to field names.

    Tokens carrying an expected ``name=`` marker are assigned by that name,
    whatever their order; other tokens are ignored then. Bare tokens pair by
    position. Extra tokens are ignored; fields without a token, or paired with
    an empty bare token, stay absent.
    """

    result: Dict[str, str] = {}
    if any(_field_key(token, field_names) for token in tokens):
        for token in tokens:
            key = _field_key(token, field_names)
            if key is not None and key not in result:
                result[key] = token[len(key) + len(KEY_VALUE_SEPARATOR):]
        return result

    for name, token in zip(field_names, tokens):
        if token:
            result[name] = token
    return result


def parse_positional(
    text: str, field_names: Sequence[str], delimiter: str = DELIMITER
) -> Dict[str, str]:
    return zip_fields(split_fields(text, field_names, delimiter), field_names)


__all__ = [
    "DELIMITER",
    "KEY_VALUE_SEPARATOR",
    "split_delimited",
    "build_map",
    "split_fields",
    "zip_fields",
    "parse_positional",
]
