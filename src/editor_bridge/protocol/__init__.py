"""Decoders for the editor callback wire protocol."""

from .entities import decode_html
from .kinds import (
    DESCRIPTORS,
    CallbackKind,
    DecodeDescriptor,
    Grammar,
    RESPONSE_FIELDS,
    descriptor_for,
)
from .models import CallbackMessage, DecodedCallback
from .params import (
    DELIMITER,
    build_map,
    parse_positional,
    split_delimited,
    split_fields,
    zip_fields,
)
from .styles import (
    LINK_STYLE,
    StyleChangeMap,
    StyleSet,
    apply_changes,
    diff_styles,
    normalize_styles,
)

__all__ = [
    "DELIMITER",
    "DESCRIPTORS",
    "LINK_STYLE",
    "RESPONSE_FIELDS",
    "CallbackKind",
    "CallbackMessage",
    "DecodeDescriptor",
    "DecodedCallback",
    "Grammar",
    "StyleChangeMap",
    "StyleSet",
    "apply_changes",
    "build_map",
    "decode_html",
    "descriptor_for",
    "diff_styles",
    "normalize_styles",
    "parse_positional",
    "split_delimited",
    "split_fields",
    "zip_fields",
]
