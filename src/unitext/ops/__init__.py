"""Mutation, search, case mapping and parsing over text buffers."""

from . import mutation, parsing, patterns
from .casing import CaseMapper, SimpleCaseMapper, UnicodeCaseMapper
from .parsing import parse_bool, parse_float, parse_int, parse_truthy

__all__ = [
    "CaseMapper",
    "SimpleCaseMapper",
    "UnicodeCaseMapper",
    "mutation",
    "parse_bool",
    "parse_float",
    "parse_int",
    "parse_truthy",
    "parsing",
    "patterns",
]
