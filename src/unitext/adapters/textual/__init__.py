"""Textual inspector: controller plus an optional Textual app."""

from .controller import (
    CommandResult,
    GraphemeRow,
    InspectorHooks,
    TextualInspectorAdapter,
    grapheme_rows,
    summary_line,
)

__all__ = [
    "CommandResult",
    "GraphemeRow",
    "InspectorHooks",
    "TextualInspectorAdapter",
    "grapheme_rows",
    "summary_line",
]
