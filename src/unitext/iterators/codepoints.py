"""Lazy UTF-8 decoding into code points with byte positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from unitext.buffer import InvalidEncoding, TextBuffer

# (lead mask, lead value, sequence length, minimum scalar)
_LEADS: Tuple[Tuple[int, int, int, int], ...] = (
    (0x80, 0x00, 1, 0x0),
    (0xE0, 0xC0, 2, 0x80),
    (0xF0, 0xE0, 3, 0x800),
    (0xF8, 0xF0, 4, 0x10000),
)


@dataclass(frozen=True, slots=True)
class CodePoint:
    """One decoded scalar and where its bytes sit in the buffer."""

    scalar: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def char(self) -> str:
        return chr(self.scalar)


def decode_at(data: Sequence[int], offset: int) -> Tuple[int, int]:
    """Decode the scalar starting at ``offset``; return ``(scalar, length)``."""

    lead = data[offset]
    for mask, value, length, minimum in _LEADS:
        if lead & mask == value:
            break
    else:
        raise InvalidEncoding(f"Invalid lead byte 0x{lead:02X}", offset=offset)

    if offset + length > len(data):
        raise InvalidEncoding("Truncated UTF-8 sequence", offset=offset)

    scalar = lead & (0xFF >> (length + 1)) if length > 1 else lead
    for position in range(offset + 1, offset + length):
        byte = data[position]
        if byte & 0xC0 != 0x80:
            raise InvalidEncoding(
                f"Expected continuation byte, found 0x{byte:02X}", offset=position
            )
        scalar = (scalar << 6) | (byte & 0x3F)

    if scalar < minimum:
        raise InvalidEncoding("Overlong UTF-8 sequence", offset=offset)
    if 0xD800 <= scalar <= 0xDFFF:
        raise InvalidEncoding(f"Encoded surrogate U+{scalar:04X}", offset=offset)
    if scalar > 0x10FFFF:
        raise InvalidEncoding("Scalar above U+10FFFF", offset=offset)
    return scalar, length


class CodePointIterator(Iterator[CodePoint]):
    """Forward-only decoder bound to one generation of a ``TextBuffer``.

    Malformed bytes raise ``InvalidEncoding``; an edit to the buffer after the
    iterator was created makes the next step raise ``StaleIteratorError``.
    """

    def __init__(self, buffer: TextBuffer, offset: int = 0) -> None:
        self.buffer = buffer
        self.generation = buffer.generation
        self._data = buffer.data
        self._offset = offset
        self._pending: Optional[CodePoint] = None

    def __iter__(self) -> "CodePointIterator":
        return self

    def __next__(self) -> CodePoint:
        self.buffer.ensure_generation(self.generation)
        if self._pending is not None:
            point, self._pending = self._pending, None
            return point
        if self._offset >= len(self._data):
            raise StopIteration
        scalar, length = decode_at(self._data, self._offset)
        point = CodePoint(scalar=scalar, offset=self._offset, length=length)
        self._offset += length
        return point

    def peek(self) -> Optional[CodePoint]:
        """Return the next code point without consuming it, or ``None``."""

        if self._pending is None:
            try:
                self._pending = next(self)
            except StopIteration:
                return None
        return self._pending

    @property
    def data(self) -> bytes:
        """The bytes this iterator decodes, as captured at creation."""

        return self._data

    @property
    def offset(self) -> int:
        if self._pending is not None:
            return self._pending.offset
        return self._offset


def encode(points: Iterator[CodePoint] | Sequence[CodePoint]) -> bytes:
    return "".join(point.char for point in points).encode("utf-8")


__all__ = ["CodePoint", "CodePointIterator", "decode_at", "encode"]
