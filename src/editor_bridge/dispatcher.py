"""Routes editor callbacks to decoders and forwards results to the listener."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from editor_bridge.listener import EditorStateListener
from editor_bridge.protocol import params as wire
from editor_bridge.protocol.entities import decode_html
from editor_bridge.protocol.kinds import (
    FUNCTION_PREFIX,
    LOG_PREFIX,
    RESPONSE_FIELDS,
    CallbackKind,
    DecodeDescriptor,
    Grammar,
    descriptor_for,
)
from editor_bridge.protocol.models import CallbackMessage, DecodedCallback
from editor_bridge.protocol.styles import StyleSet, diff_styles, normalize_styles
from editor_bridge.runtime import telemetry

Decoder = Callable[[DecodeDescriptor, str], DecodedCallback]


class CallbackDispatcher:
    """Decodes ``(callback id, params)`` pairs into listener calls.

    Owns the style set last reported by the editing surface so selection-style
    callbacks can be forwarded as change maps. Calls must be serialized.
    """

    def __init__(
        self,
        listener: EditorStateListener,
        *,
        delimiter: str = wire.DELIMITER,
        logger_name: str = "editor_bridge.dispatch",
    ) -> None:
        self.listener = listener
        self.delimiter = delimiter
        self.logger = telemetry.get_logger(logger_name)
        self._logger_name = logger_name
        self._previous_styles: StyleSet = frozenset()
        self._decoders: Dict[Grammar, Decoder] = {
            Grammar.NONE: self._decode_nothing,
            Grammar.STYLE_SET: self._decode_style_set,
            Grammar.KEY_VALUE: self._decode_key_values,
            Grammar.POSITIONAL: self._decode_positional,
            Grammar.LOG_MESSAGE: self._decode_log_message,
            Grammar.FUNCTION_RESPONSE: self._decode_function_response,
        }

    @property
    def previous_styles(self) -> StyleSet:
        return self._previous_styles

    def handle_message(self, message: CallbackMessage) -> None:
        self.handle(message.id, message.params)

    def handle(self, callback_id: str, params: Optional[str]) -> None:
        raw = params or ""
        kind = CallbackKind.from_wire(callback_id)
        if kind is None:
            self.logger.debug(f"Unhandled callback: {callback_id}:{raw}")
            telemetry.record_event(
                "callback.unhandled",
                level="debug",
                data={"callback_id": callback_id},
                logger_name=self._logger_name,
            )
            return

        descriptor = descriptor_for(kind)
        with telemetry.span(
            f"callback::{kind.value}",
            logger_name=self._logger_name,
            component="dispatch",
            metadata={"callback_id": callback_id, "grammar": descriptor.grammar.value},
        ) as handle:
            if descriptor.log_label:
                line = descriptor.log_label
                if descriptor.log_params:
                    line = f"{line}{descriptor.log_separator}{raw}"
                self.logger.debug(line)

            decoded = self._decoders[descriptor.grammar](descriptor, raw)
            if descriptor.listener_method is not None:
                handle.add_metadata("listener_method", descriptor.listener_method)
                getattr(self.listener, descriptor.listener_method)(*decoded.args)
            if decoded.next_styles is not None:
                self._previous_styles = decoded.next_styles

    def _decode_nothing(self, descriptor: DecodeDescriptor, raw: str) -> DecodedCallback:
        del descriptor, raw
        return DecodedCallback()

    def _decode_style_set(
        self, descriptor: DecodeDescriptor, raw: str
    ) -> DecodedCallback:
        del descriptor
        current = normalize_styles(wire.split_delimited(raw, self.delimiter))
        changes = diff_styles(self._previous_styles, current)
        return DecodedCallback(args=(changes,), next_styles=current)

    def _decode_key_values(
        self, descriptor: DecodeDescriptor, raw: str
    ) -> DecodedCallback:
        del descriptor
        tokens = wire.split_delimited(raw, self.delimiter)
        return DecodedCallback(args=(wire.build_map(tokens),))

    def _decode_positional(
        self, descriptor: DecodeDescriptor, raw: str
    ) -> DecodedCallback:
        values = wire.parse_positional(raw, descriptor.fields, self.delimiter)
        args = []
        for name in descriptor.fields:
            value = values.get(name)
            if value is not None and descriptor.decode_html:
                value = decode_html(value)
            args.append(value)
        return DecodedCallback(args=tuple(args))

    def _decode_log_message(
        self, descriptor: DecodeDescriptor, raw: str
    ) -> DecodedCallback:
        message = raw[len(LOG_PREFIX):]
        self.logger.debug(f"{descriptor.kind.wire_id}: {message}")
        return DecodedCallback()

    def _decode_function_response(
        self, descriptor: DecodeDescriptor, raw: str
    ) -> DecodedCallback:
        del descriptor
        if not raw.startswith(FUNCTION_PREFIX):
            tokens = wire.split_delimited(raw, self.delimiter)
            return DecodedCallback(args=(wire.build_map(tokens),))

        body = raw[len(FUNCTION_PREFIX):]
        function_name, _, remainder = body.partition(self.delimiter)
        fields = RESPONSE_FIELDS.get(function_name, ())
        if not fields:
            self.logger.debug(f"No response fields known for '{function_name}'")
        response = wire.parse_positional(remainder, fields, self.delimiter)
        return DecodedCallback(args=(response,))


__all__ = ["CallbackDispatcher"]
