"""Exception types raised across unitext."""

from __future__ import annotations


class UnitextError(RuntimeError):
    """Base class for every failure unitext reports."""


class InvalidEncoding(UnitextError):
    """Raised when bytes are not well-formed UTF-8 or a scalar is not encodable."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class IndexOutOfRange(UnitextError, IndexError):
    """Raised when a logical index or range falls outside the text."""

    def __init__(
        self, message: str, *, index: int | None = None, count: int | None = None
    ) -> None:
        super().__init__(message)
        self.index = index
        self.count = count


class AllocationFailure(UnitextError, MemoryError):
    """Raised when growing a buffer runs out of memory."""

    def __init__(self, message: str, *, requested: int | None = None) -> None:
        super().__init__(message)
        self.requested = requested


class ParseError(UnitextError, ValueError):
    """Raised when content does not match a numeric or boolean grammar."""

    def __init__(self, message: str, *, value: str | None = None) -> None:
        super().__init__(message)
        self.value = value


class StaleIteratorError(UnitextError):
    """Raised when an iterator is used after its buffer was edited."""

    def __init__(
        self, message: str, *, expected: int | None = None, actual: int | None = None
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


__all__ = [
    "UnitextError",
    "InvalidEncoding",
    "IndexOutOfRange",
    "AllocationFailure",
    "ParseError",
    "StaleIteratorError",
]
