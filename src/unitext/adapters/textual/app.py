"""Executable Textual app for inspecting and editing a ``Text``."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when the inspector is run
    from textual.app import App, ComposeResult
    from textual.widgets import DataTable, Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use unitext.adapters.textual.app"
    ) from exc

from unitext.iterators import get_classifier
from unitext.runtime import telemetry
from unitext.text import Text

from .controller import GraphemeRow, InspectorHooks, TextualInspectorAdapter

COLUMNS = ("#", "grapheme", "offset", "len", "code points", "bytes")


class InspectorApp(App[None]):
    """Grapheme table, summary line and a command prompt."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#graphemes {
		height: 1fr;
		border: round $accent;
	}

	#summary-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, text: Text) -> None:
        super().__init__()
        self.text = text
        self.adapter: TextualInspectorAdapter | None = None
        self._table: DataTable | None = None
        self._summary_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._table = DataTable(id="graphemes", zebra_stripes=True)
        yield self._table
        self._summary_widget = Static("", id="summary-line")
        self._status_widget = Static("", id="status-line")
        yield self._summary_widget
        yield self._status_widget
        yield Input(placeholder="reverse | upper | insert 0 text | replace a b ...")
        yield Footer()

    def on_mount(self) -> None:
        if self._table is not None:
            self._table.add_columns(*COLUMNS)
        hooks = InspectorHooks(
            update_rows=self._update_rows,
            update_summary=self._update_summary,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualInspectorAdapter(self.text, hooks)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter:
            self.adapter.submit(event.value)
        event.input.value = ""

    def _update_rows(self, rows: List[GraphemeRow]) -> None:
        if self._table is None:
            return
        self._table.clear()
        for row in rows:
            self._table.add_row(
                str(row.index),
                repr(row.text),
                str(row.offset),
                str(row.length),
                " ".join(row.code_points),
                row.hex_bytes,
            )

    def _update_summary(self, summary: str) -> None:
        if self._summary_widget:
            self._summary_widget.update(summary)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("inspector.log", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Inspect text as bytes, code points, and grapheme clusters."
    )
    parser.add_argument("text", nargs="?", help="Initial text (default: read stdin)")
    parser.add_argument(
        "--classifier",
        default=None,
        help="Grapheme classifier: regex, combining or codepoint",
    )
    parser.add_argument(
        "--telemetry",
        choices=("development", "production", "quiet"),
        default="quiet",
        help="Telemetry preset while the UI runs (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.telemetry)
    content = args.text if args.text is not None else sys.stdin.read()
    text = Text(content, classifier=get_classifier(args.classifier))
    InspectorApp(text).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
