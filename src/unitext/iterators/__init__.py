"""Lazy code point and grapheme iteration over text buffers."""

from .classifiers import (
    BoundaryClassifier,
    BoundaryContext,
    CodePointClassifier,
    CombiningClassifier,
    RegexClassifier,
    available_classifiers,
    get_classifier,
    register_classifier,
)
from .codepoints import CodePoint, CodePointIterator, decode_at, encode
from .graphemes import Grapheme, GraphemeIterator, segment

__all__ = [
    "BoundaryClassifier",
    "BoundaryContext",
    "CodePoint",
    "CodePointClassifier",
    "CodePointIterator",
    "CombiningClassifier",
    "Grapheme",
    "GraphemeIterator",
    "RegexClassifier",
    "available_classifiers",
    "decode_at",
    "encode",
    "get_classifier",
    "register_classifier",
    "segment",
]
