"""Strict Markup Parser.

A small recursive-descent parser that turns well-formed markup into an
immutable document tree. Malformed markup is rejected with a typed error
rather than repaired.

Progressive API Disclosure:
- Level 1: Simple functions - parse_document(), parse(), parse_string(), parse_file()
- Level 2: Configured parser - StrictMarkupParser class with ParserConfig
- Level 3: Grammar access - MarkupParser and Cursor from strict_markup_parser.parsing
"""

__version__ = "0.1.0"
__author__ = "Strict Markup Parser Team"

from .api import (
    ParseResult,
    StrictMarkupParser,
    parse,
    parse_document,
    parse_file,
    parse_string,
)
from .parsing import (
    ParseError,
    ParseErrorKind,
    TagMismatchError,
    UnexpectedCharError,
    UnexpectedEofError,
)
from .shared.config import ParserConfig
from .tree import (
    ElementData,
    Node,
    TextData,
    format_tree,
    make_element,
    make_text,
    to_markup,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse_document",
    "parse",
    "parse_string",
    "parse_file",

    # Level 2: Configured parser
    "StrictMarkupParser",
    "ParserConfig",

    # Document tree
    "Node",
    "TextData",
    "ElementData",
    "make_text",
    "make_element",
    "to_markup",
    "format_tree",

    # Results and errors
    "ParseResult",
    "ParseError",
    "ParseErrorKind",
    "UnexpectedEofError",
    "UnexpectedCharError",
    "TagMismatchError",
]
