"""UTF-8 byte storage with ownership tracking and generation stamps."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional, Union

from unitext.runtime import telemetry

from .errors import (
    AllocationFailure,
    IndexOutOfRange,
    InvalidEncoding,
    StaleIteratorError,
)
from .validation import BytesLike, as_bytes, encode_scalar, ensure_utf8


class TextBuffer:
    """Owns or borrows a byte sequence that is always valid UTF-8.

    Borrowed buffers keep a read-only view of the caller's bytes and copy them
    into owned storage on the first edit, so the caller's object is never
    written to. ``generation`` increases on every edit; iterators capture it
    and refuse to continue once it moves.
    """

    def __init__(
        self,
        data: BytesLike = b"",
        *,
        owns: bool = True,
        name: str = "text",
        validate: bool = True,
    ) -> None:
        if validate:
            try:
                ensure_utf8(data)
            except InvalidEncoding as exc:
                telemetry.record_event(
                    "buffer.invalid_encoding",
                    level="warning",
                    data={"buffer": name, "offset": exc.offset},
                )
                raise
        self._data: Union[bytearray, memoryview, bytes]
        if owns:
            self._data = data if isinstance(data, bytearray) else bytearray(data)
        elif isinstance(data, bytes):
            self._data = data
        else:
            self._data = memoryview(data).toreadonly()
        self.owns = owns
        self.name = name
        self.generation = 0
        self.released = False

    @classmethod
    def from_bytes(cls, data: BytesLike, *, name: str = "text") -> "TextBuffer":
        """Borrow ``data`` without copying it."""

        return cls(data, owns=False, name=name)

    @classmethod
    def from_owned_bytes(cls, data: BytesLike, *, name: str = "text") -> "TextBuffer":
        """Take ownership of ``data``; a ``bytearray`` is adopted as-is."""

        return cls(data, owns=True, name=name)

    @classmethod
    def from_code_points(
        cls, scalars: Iterable[int], *, name: str = "text"
    ) -> "TextBuffer":
        data = bytearray()
        for scalar in scalars:
            data += encode_scalar(scalar)
        return cls(data, owns=True, name=name, validate=False)

    @classmethod
    def from_joined(
        cls,
        parts: Iterable[Union[str, BytesLike]],
        separator: Union[str, BytesLike] = b"",
        *,
        name: str = "text",
    ) -> "TextBuffer":
        joined = as_bytes(separator).join(as_bytes(part) for part in parts)
        return cls(bytearray(joined), owns=True, name=name, validate=False)

    # -- read access -----------------------------------------------------

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def ensure_generation(self, expected: int) -> None:
        if expected != self.generation:
            telemetry.record_event(
                "buffer.stale_iterator",
                level="warning",
                data={"buffer": self.name, "expected": expected, "actual": self.generation},
            )
            raise StaleIteratorError(
                f"Buffer '{self.name}' changed since the iterator was created",
                expected=expected,
                actual=self.generation,
            )

    # -- edits -----------------------------------------------------------

    def replace_range(self, start: int, end: int, new_bytes: BytesLike) -> None:
        """Splice ``new_bytes`` over ``[start, end)``.

        Callers are trusted to pass code-point boundaries and UTF-8 content.
        """

        if not 0 <= start <= end <= len(self._data):
            raise IndexOutOfRange(
                f"Byte range [{start}, {end}) outside buffer of {len(self._data)}",
                index=start,
                count=len(self._data),
            )
        try:
            self._ensure_owned()
            self._data[start:end] = new_bytes  # type: ignore[index]
        except MemoryError as exc:
            raise AllocationFailure(
                f"Could not grow buffer '{self.name}'",
                requested=len(self._data) - (end - start) + len(new_bytes),
            ) from exc
        self.generation += 1

    def reset(self, content: Union[str, BytesLike]) -> None:
        """Replace the whole content with an owned copy of ``content``."""

        data = as_bytes(content)
        try:
            replacement = bytearray(data)
        except MemoryError as exc:
            raise AllocationFailure("Could not allocate reset content", requested=len(data)) from exc
        self._data = replacement
        self.owns = True
        self.released = False
        self.generation += 1

    def to_owned_slice(self) -> bytearray:
        """Detach the bytes as an owned ``bytearray`` and leave the buffer empty."""

        self._ensure_owned()
        detached = self._data
        self._data = bytearray()
        self.generation += 1
        return detached  # type: ignore[return-value]

    def copy(self, *, name: Optional[str] = None) -> "TextBuffer":
        return TextBuffer(
            bytearray(self._data), owns=True, name=name or self.name, validate=False
        )

    def release(self) -> None:
        """Free owned storage; borrowed storage is only dropped. Idempotent."""

        if self.released:
            return
        if isinstance(self._data, memoryview):
            self._data.release()
        elif self.owns and isinstance(self._data, bytearray):
            self._data.clear()
        self._data = b""
        self.owns = False
        self.released = True
        self.generation += 1

    def edit(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def _ensure_owned(self) -> None:
        if not isinstance(self._data, bytearray):
            borrowed = self._data
            self._data = bytearray(borrowed)
            if isinstance(borrowed, memoryview):
                borrowed.release()
            self.owns = True
            self.released = False

    def __enter__(self) -> "TextBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    def __repr__(self) -> str:
        mode = "owned" if self.owns else "borrowed"
        return f"TextBuffer({bytes(self._data)!r}, {mode}, generation={self.generation})"


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one logical edit in a telemetry span.

    Mutation routines compute their result first and then call ``splice``
    once, so an edit either lands completely or not at all.
    """

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.applied = False
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._before_size = 0

    def __enter__(self) -> "Transaction":
        self._before_size = len(self.buffer)
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def splice(self, start: int, end: int, new_bytes: BytesLike) -> None:
        self.buffer.replace_range(start, end, new_bytes)
        self.applied = True

    def replace_all(self, new_bytes: BytesLike) -> None:
        self.splice(0, len(self.buffer), new_bytes)

    def reset(self, content: Union[str, BytesLike]) -> None:
        self.buffer.reset(content)
        self.applied = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._handle is not None:
            self._handle.add_metadata("applied", self.applied)
            self._handle.add_metadata("delta", len(self.buffer) - self._before_size)
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        if exc_type is None and self.applied:
            telemetry.record_event(
                f"buffer.{self.label}",
                data={
                    "buffer": self.buffer.name,
                    "generation": self.buffer.generation,
                    "size": len(self.buffer),
                },
            )
        return False


__all__ = ["TextBuffer", "Transaction"]
