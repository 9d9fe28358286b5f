"""Parsing engine for strict markup.

Key Components:
    Cursor: Scanning primitives over the input string
    MarkupParser: Recursive-descent grammar producing a document tree
    parse_document: Convenience entry point returning the root node
    ParseError: Base of the malformed-input exceptions
"""

from .cursor import NAME_CHARACTERS, Cursor
from .errors import (
    ParseError,
    ParseErrorKind,
    TagMismatchError,
    UnexpectedCharError,
    UnexpectedEofError,
)
from .parser import MarkupParser, parse_document

__all__ = [
    "NAME_CHARACTERS",
    "Cursor",
    "MarkupParser",
    "ParseError",
    "ParseErrorKind",
    "TagMismatchError",
    "UnexpectedCharError",
    "UnexpectedEofError",
    "parse_document",
]
