"""Public API for strict markup parsing."""

from .parser import (
    StrictMarkupParser,
    parse,
    parse_document,
    parse_file,
    parse_string,
)
from .result import ParseResult

__all__ = [
    "ParseResult",
    "StrictMarkupParser",
    "parse",
    "parse_document",
    "parse_file",
    "parse_string",
]
