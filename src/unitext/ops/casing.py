"""Per-code-point case mapping tables."""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class CaseMapper(Protocol):
    """Maps one scalar to its lower/upper case form (possibly several scalars)."""

    def lower(self, scalar: int) -> str:
        ...

    def upper(self, scalar: int) -> str:
        ...


class UnicodeCaseMapper:
    """Full case mapping from the interpreter's Unicode database.

    Sharp s (U+00DF) upper-cases to ``"SS"``; dotted capital I (U+0130)
    lower-cases to ``i`` followed by U+0307.
    """

    def lower(self, scalar: int) -> str:
        return chr(scalar).lower()

    def upper(self, scalar: int) -> str:
        return chr(scalar).upper()


class SimpleCaseMapper(UnicodeCaseMapper):
    """Simple (one-to-one) case mapping; multi-scalar results leave the input as is."""

    def lower(self, scalar: int) -> str:
        return _single(super().lower(scalar), scalar)

    def upper(self, scalar: int) -> str:
        return _single(super().upper(scalar), scalar)


def _single(mapped: str, scalar: int) -> str:
    return mapped if len(mapped) == 1 else chr(scalar)


DEFAULT_CASE_MAPPER = UnicodeCaseMapper()


def map_lower(scalars: Iterable[int], mapper: CaseMapper) -> str:
    return "".join(mapper.lower(scalar) for scalar in scalars)


def map_upper(scalars: Iterable[int], mapper: CaseMapper) -> str:
    return "".join(mapper.upper(scalar) for scalar in scalars)


def map_title(scalars: Iterable[int], mapper: CaseMapper) -> str:
    """Upper-case the first code point of each whitespace-delimited word, lower the rest."""

    parts = []
    word_start = True
    for scalar in scalars:
        char = chr(scalar)
        if char.isspace():
            parts.append(char)
            word_start = True
        elif word_start:
            parts.append(mapper.upper(scalar))
            word_start = False
        else:
            parts.append(mapper.lower(scalar))
    return "".join(parts)


__all__ = [
    "CaseMapper",
    "DEFAULT_CASE_MAPPER",
    "SimpleCaseMapper",
    "UnicodeCaseMapper",
    "map_lower",
    "map_title",
    "map_upper",
]
