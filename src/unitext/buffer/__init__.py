"""UTF-8 byte storage, validation helpers, and the error hierarchy."""

from .buffer import TextBuffer, Transaction
from .errors import (
    AllocationFailure,
    IndexOutOfRange,
    InvalidEncoding,
    ParseError,
    StaleIteratorError,
    UnitextError,
)
from .validation import as_bytes, encode_scalar, ensure_scalar, ensure_utf8

__all__ = [
    "TextBuffer",
    "Transaction",
    "UnitextError",
    "InvalidEncoding",
    "IndexOutOfRange",
    "AllocationFailure",
    "ParseError",
    "StaleIteratorError",
    "as_bytes",
    "encode_scalar",
    "ensure_scalar",
    "ensure_utf8",
]
