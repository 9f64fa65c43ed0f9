"""Grapheme-boundary classifiers.

A classifier answers one question: given the code points already collected
into the current cluster and the next code point, does a cluster boundary fall
between them? The iterator never looks at break tables itself, so any data
source can be plugged in.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

import regex

from unitext.runtime.config import get_settings

ZWJ = 0x200D
CR = 0x0D
LF = 0x0A


@dataclass(frozen=True, slots=True)
class BoundaryContext:
    """State handed to a classifier for one candidate boundary."""

    cluster: Tuple[int, ...]
    current: int

    @property
    def previous(self) -> int:
        return self.cluster[-1]

    @property
    def cluster_text(self) -> str:
        return "".join(map(chr, self.cluster))


@runtime_checkable
class BoundaryClassifier(Protocol):
    name: str

    def is_boundary(self, context: BoundaryContext) -> bool:
        """Return ``True`` when ``context.current`` starts a new cluster."""
        ...


class RegexClassifier:
    """Extended grapheme clusters (UAX #29) using the ``regex`` module's ``\\X``.

    The cluster collected so far is extended with the candidate code point and
    re-matched; if ``\\X`` no longer reaches the candidate, it opens a new
    cluster.
    """

    name = "regex"
    _pattern = regex.compile(r"\X")

    def is_boundary(self, context: BoundaryContext) -> bool:
        prefix = context.cluster_text
        match = self._pattern.match(prefix + chr(context.current))
        return match is None or match.end() <= len(prefix)


class CombiningClassifier:
    """Table-free approximation built on ``unicodedata``.

    Keeps CR LF together, attaches marks, ZWJ, variation selectors and
    emoji modifiers to the preceding code point, joins the code point after
    a ZWJ, and pairs regional indicators.
    """

    name = "combining"

    def is_boundary(self, context: BoundaryContext) -> bool:
        previous, current = context.previous, context.current
        if previous == CR and current == LF:
            return False
        if previous in (CR, LF) or current in (CR, LF):
            return True
        if _is_extending(current):
            return False
        if previous == ZWJ and len(context.cluster) > 1:
            return False
        if _is_regional_indicator(current) and _is_regional_indicator(previous):
            run = 0
            for scalar in reversed(context.cluster):
                if not _is_regional_indicator(scalar):
                    break
                run += 1
            return run % 2 == 0
        return True


class CodePointClassifier:
    """Every code point is its own cluster."""

    name = "codepoint"

    def is_boundary(self, context: BoundaryContext) -> bool:
        del context
        return True


def _is_extending(scalar: int) -> bool:
    if scalar == ZWJ or 0xFE00 <= scalar <= 0xFE0F or 0x1F3FB <= scalar <= 0x1F3FF:
        return True
    if 0xE0020 <= scalar <= 0xE007F:
        return True
    return unicodedata.category(chr(scalar)) in {"Mn", "Me", "Mc"}


def _is_regional_indicator(scalar: int) -> bool:
    return 0x1F1E6 <= scalar <= 0x1F1FF


_FACTORIES: Dict[str, Callable[[], BoundaryClassifier]] = {
    RegexClassifier.name: RegexClassifier,
    CombiningClassifier.name: CombiningClassifier,
    CodePointClassifier.name: CodePointClassifier,
}
_INSTANCES: Dict[str, BoundaryClassifier] = {}


def register_classifier(name: str, factory: Callable[[], BoundaryClassifier]) -> None:
    if name in _FACTORIES:
        raise ValueError(f"Classifier '{name}' already registered")
    _FACTORIES[name] = factory


def get_classifier(name: Optional[str] = None) -> BoundaryClassifier:
    """Return the shared classifier registered under ``name``.

    Without a name the ``UNITEXT_CLASSIFIER`` setting decides.
    """

    key = (name or get_settings().classifier).lower()
    if key not in _FACTORIES:
        raise KeyError(f"Unknown grapheme classifier '{key}'")
    if key not in _INSTANCES:
        _INSTANCES[key] = _FACTORIES[key]()
    return _INSTANCES[key]


def available_classifiers() -> List[str]:
    return sorted(_FACTORIES)


__all__ = [
    "BoundaryClassifier",
    "BoundaryContext",
    "CodePointClassifier",
    "CombiningClassifier",
    "RegexClassifier",
    "available_classifiers",
    "get_classifier",
    "register_classifier",
]
