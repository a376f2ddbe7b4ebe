"""Parsing of dotted column specifications."""

from typed_export.parsing.spec_lexer import SpecLexer
from typed_export.parsing.spec_parser import SpecParser

__all__ = [
    "SpecLexer",
    "SpecParser",
]
