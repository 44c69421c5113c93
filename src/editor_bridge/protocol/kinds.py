"""Closed vocabulary of editor callbacks and how each one is decoded."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

WIRE_PREFIX = "callback-"
FUNCTION_PREFIX = "function="
LOG_PREFIX = "msg="


class CallbackKind(str, Enum):
    """Callback ids the editing surface emits (without the wire prefix)."""

    DOM_LOADED = "dom-loaded"
    SELECTION_STYLE = "selection-style"
    SELECTION_CHANGED = "selection-changed"
    INPUT = "input"
    FOCUS_IN = "focus-in"
    FOCUS_OUT = "focus-out"
    NEW_FIELD = "new-field"
    IMAGE_REPLACED = "image-replaced"
    IMAGE_TAP = "image-tap"
    LINK_TAP = "link-tap"
    LOG = "log"
    RESPONSE_STRING = "response-string"

    @property
    def wire_id(self) -> str:
        return f"{WIRE_PREFIX}{self.value}"

    @classmethod
    def from_wire(cls, callback_id: str) -> Optional["CallbackKind"]:
        """Resolve ``callback-<name>`` or bare ``<name>``; ``None`` if unknown."""

        name = callback_id
        if name.startswith(WIRE_PREFIX):
            name = name[len(WIRE_PREFIX):]
        try:
            return cls(name)
        except ValueError:
            return None


class Grammar(str, Enum):
    """Parameter grammars a descriptor can select."""

    NONE = "none"
    STYLE_SET = "style_set"
    KEY_VALUE = "key_value"
    POSITIONAL = "positional"
    LOG_MESSAGE = "log_message"
    FUNCTION_RESPONSE = "function_response"


@dataclass(frozen=True, slots=True)
class DecodeDescriptor:
    """Declarative decode + forward rule for one callback kind.

    ``listener_method`` names the ``EditorStateListener`` method to call, or is
    ``None`` for callbacks that only produce diagnostics. ``log_label`` is the
    debug line written on receipt; ``log_params`` appends the raw params to it
    after ``log_separator``.
    """

    kind: CallbackKind
    grammar: Grammar = Grammar.NONE
    fields: tuple[str, ...] = ()
    decode_html: bool = False
    listener_method: Optional[str] = None
    log_label: Optional[str] = None
    log_params: bool = False
    log_separator: str = ", "


LINK_FIELDS = ("url", "title")

RESPONSE_FIELDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "getHTMLForCallback": ("id", "contents"),
        "getSelectedText": ("result",),
    }
)

DESCRIPTORS: Mapping[CallbackKind, DecodeDescriptor] = MappingProxyType(
    {
        descriptor.kind: descriptor
        for descriptor in (
            DecodeDescriptor(CallbackKind.DOM_LOADED, listener_method="on_dom_loaded"),
            DecodeDescriptor(
                CallbackKind.SELECTION_STYLE,
                grammar=Grammar.STYLE_SET,
                listener_method="on_selection_style_changed",
            ),
            DecodeDescriptor(
                CallbackKind.SELECTION_CHANGED,
                grammar=Grammar.KEY_VALUE,
                listener_method="on_selection_changed",
            ),
            # reserved: fired on every key press
            DecodeDescriptor(CallbackKind.INPUT),
            DecodeDescriptor(
                CallbackKind.FOCUS_IN, log_label="Focus in callback received"
            ),
            DecodeDescriptor(
                CallbackKind.FOCUS_OUT, log_label="Focus out callback received"
            ),
            DecodeDescriptor(
                CallbackKind.NEW_FIELD, log_label="New field created", log_params=True
            ),
            DecodeDescriptor(
                CallbackKind.IMAGE_REPLACED, log_label="Image replaced", log_params=True
            ),
            DecodeDescriptor(
                CallbackKind.IMAGE_TAP, log_label="Image tapped", log_params=True
            ),
            DecodeDescriptor(
                CallbackKind.LINK_TAP,
                grammar=Grammar.POSITIONAL,
                fields=LINK_FIELDS,
                decode_html=True,
                listener_method="on_link_tapped",
                log_label="Link tapped",
                log_params=True,
            ),
            DecodeDescriptor(CallbackKind.LOG, grammar=Grammar.LOG_MESSAGE),
            DecodeDescriptor(
                CallbackKind.RESPONSE_STRING,
                grammar=Grammar.FUNCTION_RESPONSE,
                listener_method="on_get_html_response",
                log_label=CallbackKind.RESPONSE_STRING.wire_id,
                log_params=True,
                log_separator=": ",
            ),
        )
    }
)


def descriptor_for(kind: CallbackKind) -> DecodeDescriptor:
    return DESCRIPTORS[kind]


__all__ = [
    "WIRE_PREFIX",
    "FUNCTION_PREFIX",
    "LOG_PREFIX",
    "CallbackKind",
    "Grammar",
    "DecodeDescriptor",
    "LINK_FIELDS",
    "RESPONSE_FIELDS",
    "DESCRIPTORS",
    "descriptor_for",
]
