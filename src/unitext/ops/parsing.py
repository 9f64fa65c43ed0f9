"""Numeric and boolean parsing of text content."""

from __future__ import annotations

import struct
from typing import Optional

from unitext.buffer import ParseError

TRUTHY = frozenset({"true", "t", "yes", "y", "on"})
FALSY = frozenset({"false", "f", "no", "n", "off"})


def _strict(text: str, kind: str) -> str:
    if not text or text != text.strip() or not text.isascii():
        raise ParseError(f"{text!r} is not a valid {kind}", value=text)
    return text


def parse_int(
    text: str, base: int = 10, *, bits: Optional[int] = None, signed: bool = True
) -> int:
    """Parse an integer, optionally range-checked against a ``bits``-wide type.

    ``base=0`` honours ``0x``/``0o``/``0b`` prefixes; underscores between
    digits are accepted.
    """

    _strict(text, "integer")
    try:
        value = int(text, base)
    except ValueError as exc:
        raise ParseError(f"{text!r} is not a base-{base} integer", value=text) from exc

    if bits is not None:
        if bits <= 0:
            raise ValueError(f"bits must be positive, got {bits}")
        low, high = (
            (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)
        )
        if not low <= value <= high:
            kind = f"{'i' if signed else 'u'}{bits}"
            raise ParseError(f"{text!r} overflows {kind}", value=text)
    return value


def parse_float(text: str, *, bits: int = 64) -> float:
    """Parse a float; ``bits=32`` rounds to single precision and checks range."""

    if bits not in (32, 64):
        raise ValueError(f"bits must be 32 or 64, got {bits}")
    _strict(text, "float")
    try:
        value = float(text)
    except ValueError as exc:
        raise ParseError(f"{text!r} is not a float", value=text) from exc
    if bits == 32:
        try:
            (value,) = struct.unpack("<f", struct.pack("<f", value))
        except OverflowError as exc:
            raise ParseError(f"{text!r} overflows f32", value=text) from exc
    return value


def parse_bool(text: str) -> bool:
    """Accept ``true``/``false`` in any letter case."""

    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ParseError(f"{text!r} is not a boolean", value=text)


def parse_truthy(text: str) -> bool:
    """Accept the truthy/falsy vocabulary (``yes``, ``off``, ``t``...) in any case."""

    lowered = text.lower()
    if lowered in TRUTHY:
        return True
    if lowered in FALSY:
        return False
    raise ParseError(f"{text!r} is neither truthy nor falsy", value=text)


__all__ = ["FALSY", "TRUTHY", "parse_bool", "parse_float", "parse_int", "parse_truthy"]
