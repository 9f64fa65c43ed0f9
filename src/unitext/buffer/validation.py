"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Union

from .errors import InvalidEncoding

BytesLike = Union[bytes, bytearray, memoryview]

MAX_SCALAR = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


def ensure_utf8(data: BytesLike) -> None:
    """Raise ``InvalidEncoding`` unless ``data`` is well-formed UTF-8."""

    try:
        bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncoding(
            f"Invalid UTF-8 at byte {exc.start}: {exc.reason}", offset=exc.start
        ) from exc


def ensure_scalar(scalar: int) -> int:
    if scalar < 0 or scalar > MAX_SCALAR or scalar in SURROGATES:
        raise InvalidEncoding(f"U+{scalar:04X} is not a Unicode scalar value")
    return scalar


def encode_scalar(scalar: int) -> bytes:
    return chr(ensure_scalar(scalar)).encode("utf-8")


def as_bytes(value: Union[str, BytesLike]) -> bytes:
    """Normalize pattern or content arguments to validated UTF-8 bytes."""

    if isinstance(value, str):
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidEncoding(
                f"Lone surrogate at index {exc.start}", offset=exc.start
            ) from exc
    data = bytes(value)
    ensure_utf8(data)
    return data


__all__ = [
    "BytesLike",
    "MAX_SCALAR",
    "as_bytes",
    "encode_scalar",
    "ensure_scalar",
    "ensure_utf8",
]
