"""Unicode-aware text addressable by byte, code point, or grapheme cluster."""

from .buffer import (
    AllocationFailure,
    IndexOutOfRange,
    InvalidEncoding,
    ParseError,
    StaleIteratorError,
    TextBuffer,
    UnitextError,
)
from .index import Unit
from .iterators import CodePoint, Grapheme, get_classifier, segment
from .text import Text

__all__ = [
    "AllocationFailure",
    "CodePoint",
    "Grapheme",
    "IndexOutOfRange",
    "InvalidEncoding",
    "ParseError",
    "StaleIteratorError",
    "Text",
    "TextBuffer",
    "Unit",
    "UnitextError",
    "get_classifier",
    "segment",
]

__version__ = "0.1.0"
