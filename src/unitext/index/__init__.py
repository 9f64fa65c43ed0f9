"""Logical index to byte offset translation."""

from .translator import (
    Span,
    Unit,
    count,
    iter_spans,
    normalize,
    ordinal_at,
    resolve,
    resolve_range,
)

__all__ = [
    "Span",
    "Unit",
    "count",
    "iter_spans",
    "normalize",
    "ordinal_at",
    "resolve",
    "resolve_range",
]
