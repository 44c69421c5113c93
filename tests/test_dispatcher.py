from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

import pytest

from editor_bridge import CallbackDispatcher, CallbackMessage


class RecordingListener:
    def __init__(self) -> None:
        self.calls: List[Tuple[object, ...]] = []

    def on_dom_loaded(self) -> None:
        self.calls.append(("dom_loaded",))

    def on_selection_style_changed(self, changes: Mapping[str, bool]) -> None:
        self.calls.append(("style", dict(changes)))

    def on_selection_changed(self, selection: Mapping[str, str]) -> None:
        self.calls.append(("selection", dict(selection)))

    def on_link_tapped(self, url: Optional[str], title: Optional[str]) -> None:
        self.calls.append(("link", url, title))

    def on_get_html_response(self, response: Mapping[str, str]) -> None:
        self.calls.append(("response", dict(response)))


class RecordingLogger:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def debug(self, message: str) -> None:
        self.lines.append(message)


def make_dispatcher(
    listener: object | None = None,
) -> tuple[CallbackDispatcher, RecordingListener, RecordingLogger]:
    recorder = listener or RecordingListener()
    dispatcher = CallbackDispatcher(recorder)  # type: ignore[arg-type]
    logger = RecordingLogger()
    dispatcher.logger = logger
    return dispatcher, recorder, logger  # type: ignore[return-value]


@pytest.mark.parametrize("callback_id", ["callback-dom-loaded", "dom-loaded"])
def test_dom_loaded_notifies_listener(callback_id: str) -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle(callback_id, "")

    assert listener.calls == [("dom_loaded",)]


def test_selection_style_emits_incremental_changes() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-selection-style", "bold~italic")
    dispatcher.handle("callback-selection-style", "bold~link:http://x~link-title:X")

    assert listener.calls == [
        ("style", {"bold": True, "italic": True}),
        ("style", {"italic": False, "link": True}),
    ]
    assert dispatcher.previous_styles == frozenset({"bold", "link"})


def test_repeated_style_set_yields_empty_change_map() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-selection-style", "bold~underline")
    dispatcher.handle("callback-selection-style", "underline~bold")

    assert listener.calls[-1] == ("style", {})
    assert dispatcher.previous_styles == frozenset({"bold", "underline"})


def test_listener_sees_previous_styles_during_notification() -> None:
    observed: List[frozenset[str]] = []

    class ObservingListener(RecordingListener):
        def on_selection_style_changed(self, changes: Mapping[str, bool]) -> None:
            observed.append(dispatcher.previous_styles)
            super().on_selection_style_changed(changes)

    dispatcher, _, _ = make_dispatcher(ObservingListener())

    dispatcher.handle("callback-selection-style", "bold")
    dispatcher.handle("callback-selection-style", "italic")

    assert observed == [frozenset(), frozenset({"bold"})]
    assert dispatcher.previous_styles == frozenset({"italic"})


def test_empty_style_params_clear_all_styles() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-selection-style", "bold")
    dispatcher.handle("callback-selection-style", "")

    assert listener.calls[-1] == ("style", {"bold": False})
    assert dispatcher.previous_styles == frozenset()


def test_selection_changed_builds_key_value_map() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle(
        "callback-selection-changed", "id=zss_field_content~yOffset=120~height=18"
    )

    assert listener.calls == [
        ("selection", {"id": "zss_field_content", "yOffset": "120", "height": "18"})
    ]


def test_link_tap_decodes_html_in_url_and_title() -> None:
    dispatcher, listener, logger = make_dispatcher()
    params = "url=http://x.example/?a=1&amp;b=2~title=Tom &amp; Jerry"

    dispatcher.handle("callback-link-tap", params)

    assert listener.calls == [("link", "http://x.example/?a=1&b=2", "Tom & Jerry")]
    assert logger.lines == [f"Link tapped, {params}"]


def test_link_tap_passes_missing_title_as_none() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-link-tap", "url=http://x")

    assert listener.calls == [("link", "http://x", None)]


def test_link_tap_with_empty_params_passes_none_for_both() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-link-tap", "")

    assert listener.calls == [("link", None, None)]


def test_log_callback_strips_message_prefix() -> None:
    dispatcher, listener, logger = make_dispatcher()

    dispatcher.handle("callback-log", "msg=hello")

    assert listener.calls == []
    assert logger.lines == ["callback-log: hello"]


def test_response_for_selected_text() -> None:
    dispatcher, listener, logger = make_dispatcher()

    dispatcher.handle("callback-response-string", "function=getSelectedText~result=foo")

    assert listener.calls == [("response", {"result": "foo"})]
    assert logger.lines[0] == (
        "callback-response-string: function=getSelectedText~result=foo"
    )


def test_response_for_html_callback() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle(
        "callback-response-string",
        "function=getHTMLForCallback~id=1~contents=<p>hi</p>",
    )

    assert listener.calls == [("response", {"id": "1", "contents": "<p>hi</p>"})]


def test_response_contents_may_contain_delimiter() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle(
        "callback-response-string",
        "function=getHTMLForCallback~id=zss_field_content~contents=<p>a~b</p>",
    )

    assert listener.calls == [
        ("response", {"id": "zss_field_content", "contents": "<p>a~b</p>"})
    ]


def test_response_for_unknown_function_is_empty() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-response-string", "function=getWordCount~count=3")

    assert listener.calls == [("response", {})]


def test_response_with_function_name_only_is_empty() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-response-string", "function=getSelectedText")

    assert listener.calls == [("response", {})]


def test_response_without_function_uses_key_value_pairs() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-response-string", "id=3~contents=x")

    assert listener.calls == [("response", {"id": "3", "contents": "x"})]


@pytest.mark.parametrize(
    "callback_id, params, expected",
    [
        ("callback-focus-in", "", ["Focus in callback received"]),
        ("callback-focus-out", "", ["Focus out callback received"]),
        ("callback-new-field", "id=zss_field_title", ["New field created, id=zss_field_title"]),
        ("callback-image-replaced", "id=7", ["Image replaced, id=7"]),
        ("callback-image-tap", "id=7~url=x", ["Image tapped, id=7~url=x"]),
        ("callback-input", "id=zss_field_content", []),
    ],
)
def test_diagnostic_callbacks_only_log(
    callback_id: str, params: str, expected: List[str]
) -> None:
    dispatcher, listener, logger = make_dispatcher()

    dispatcher.handle(callback_id, params)

    assert listener.calls == []
    assert logger.lines == expected


def test_unknown_callback_is_logged_and_dropped() -> None:
    dispatcher, listener, logger = make_dispatcher()

    dispatcher.handle("callback-bogus", "a=1")

    assert listener.calls == []
    assert logger.lines == ["Unhandled callback: callback-bogus:a=1"]
    assert dispatcher.previous_styles == frozenset()


def test_none_params_are_treated_as_empty() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-selection-changed", None)

    assert listener.calls == [("selection", {})]


def test_handle_message_dispatches_wire_unit() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle_message(CallbackMessage(id="callback-selection-style", params="bold"))

    assert listener.calls == [("style", {"bold": True})]


def test_listener_errors_propagate_and_keep_previous_styles() -> None:
    class FailingListener(RecordingListener):
        def on_selection_style_changed(self, changes: Mapping[str, bool]) -> None:
            raise RuntimeError("host failure")

    dispatcher, _, _ = make_dispatcher(FailingListener())

    with pytest.raises(RuntimeError, match="host failure"):
        dispatcher.handle("callback-selection-style", "bold")

    assert dispatcher.previous_styles == frozenset()


def test_link_tap_with_title_only_passes_url_as_none() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-link-tap", "title=Home &amp; Away")

    assert listener.calls == [("link", None, "Home & Away")]


def test_link_tap_accepts_keys_in_any_order() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle("callback-link-tap", "title=T~url=http://x")

    assert listener.calls == [("link", "http://x", "T")]


def test_html_response_with_contents_only() -> None:
    dispatcher, listener, _ = make_dispatcher()

    dispatcher.handle(
        "callback-response-string", "function=getHTMLForCallback~contents=<p>x</p>"
    )

    assert listener.calls == [("response", {"contents": "<p>x</p>"})]
