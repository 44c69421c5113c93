"""Replay a captured callback transcript through the dispatcher."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Iterable, Iterator, Optional, Sequence, TextIO

from editor_bridge.adapters import EditorHooks, HookListener
from editor_bridge.dispatcher import CallbackDispatcher
from editor_bridge.errors import TelemetryConfigError, TranscriptFormatError
from editor_bridge.protocol import CallbackMessage
from editor_bridge.runtime import telemetry


def read_transcript(lines: Iterable[str]) -> Iterator[CallbackMessage]:
    """Yield messages from JSON lines shaped ``{"id": ..., "params": ...}``.

    Blank lines and lines starting with ``#`` are skipped.
    """

    for number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        try:
            entry = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TranscriptFormatError(
                f"invalid JSON ({exc.msg})", line_number=number
            ) from exc
        if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
            raise TranscriptFormatError(
                "expected an object with a string 'id'", line_number=number
            )
        params = entry.get("params")
        if params is not None and not isinstance(params, str):
            raise TranscriptFormatError("'params' must be a string", line_number=number)
        yield CallbackMessage(id=entry["id"], params=params or "")


def _json_hooks(out: TextIO, *, verbose: bool) -> EditorHooks:
    def write(event: str, **payload: Any) -> None:
        out.write(json.dumps({"event": event, **payload}, sort_keys=True) + "\n")

    return EditorHooks(
        dom_loaded=lambda: write("dom_loaded"),
        selection_style_changed=lambda changes: write(
            "selection_style_changed", changes=dict(changes)
        ),
        selection_changed=lambda selection: write(
            "selection_changed", selection=dict(selection)
        ),
        link_tapped=lambda url, title: write("link_tapped", url=url, title=title),
        html_response=lambda response: write("html_response", response=dict(response)),
        log=(lambda line: sys.stderr.write(line + "\n")) if verbose else (lambda _: None),
    )


def replay(source: TextIO, out: TextIO, *, verbose: bool = False) -> int:
    """Dispatch every transcript message; returns the number dispatched."""

    dispatcher = CallbackDispatcher(HookListener(_json_hooks(out, verbose=verbose)))
    count = 0
    for message in read_transcript(source):
        dispatcher.handle_message(message)
        count += 1
    return count


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="editor-bridge",
        description="Decode editor callback transcripts into listener events.",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)
    replay_parser = subcommands.add_parser(
        "replay", help="Dispatch a JSON-lines transcript and print listener events"
    )
    replay_parser.add_argument(
        "transcript", help="Path to the transcript file, or '-' for stdin"
    )
    replay_parser.add_argument(
        "--preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset (default: from EDITOR_BRIDGE_* variables)",
    )
    replay_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Echo listener event lines to stderr",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        if args.preset:
            telemetry.configure(preset=args.preset)
        if args.transcript == "-":
            count = replay(sys.stdin, sys.stdout, verbose=args.verbose)
        else:
            with open(args.transcript, encoding="utf-8") as source:
                count = replay(source, sys.stdout, verbose=args.verbose)
    except (TranscriptFormatError, TelemetryConfigError) as exc:
        sys.stderr.write(f"editor-bridge: {exc}\n")
        return 2
    except OSError as exc:
        sys.stderr.write(f"editor-bridge: cannot read transcript: {exc}\n")
        return 1
    if args.verbose:
        sys.stderr.write(f"replayed {count} callbacks\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
