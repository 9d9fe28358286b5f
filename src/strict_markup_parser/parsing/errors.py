"""Exceptions raised when markup is not well-formed."""

from enum import Enum, auto
from typing import Any, Dict, Optional


class ParseErrorKind(Enum):
    """Categories of malformed input."""

    UNEXPECTED_EOF = auto()     # Input ended while the grammar expected more
    UNEXPECTED_CHAR = auto()    # A required literal was not found
    TAG_MISMATCH = auto()       # Closing tag name differs from opening tag name


class ParseError(Exception):
    """Base exception for malformed markup.

    Attributes:
        kind: Error category
        offset: Zero-based character offset where the error was detected
        line: One-based line number of ``offset``
        column: One-based column number of ``offset``
    """

    kind: ParseErrorKind

    def __init__(self, message: str, offset: int, line: int, column: int) -> None:
        super().__init__(f"{message} at line {line}, column {column}")
        self.offset = offset
        self.line = line
        self.column = column

    @property
    def position(self) -> Dict[str, int]:
        return {"offset": self.offset, "line": self.line, "column": self.column}

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.name, **self.position}


class UnexpectedEofError(ParseError):
    """Input ended while a grammar rule still expected more characters."""

    kind = ParseErrorKind.UNEXPECTED_EOF

    def __init__(self, expected: str, offset: int, line: int, column: int) -> None:
        super().__init__(
            f"Unexpected end of input, expected {expected}", offset, line, column
        )
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "expected": self.expected}


class UnexpectedCharError(ParseError):
    """A required character was not found where the grammar needed it."""

    kind = ParseErrorKind.UNEXPECTED_CHAR

    def __init__(
        self,
        expected: str,
        found: str,
        offset: int,
        line: int,
        column: int
    ) -> None:
        super().__init__(
            f"Expected {expected}, found {found!r}", offset, line, column
        )
        self.expected = expected
        self.found = found

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "expected": self.expected, "found": self.found}


class TagMismatchError(ParseError):
    """A closing tag name does not match the open element's tag name."""

    kind = ParseErrorKind.TAG_MISMATCH

    def __init__(
        self,
        expected: str,
        found: str,
        offset: int,
        line: int,
        column: int,
        opened_at: Optional[Dict[str, int]] = None
    ) -> None:
        super().__init__(
            f"Closing tag </{found}> does not match <{expected}>", offset, line, column
        )
        self.expected = expected
        self.found = found
        self.opened_at = opened_at

    def to_dict(self) -> Dict[str, Any]:
        result = {**super().to_dict(), "expected": self.expected, "found": self.found}
        if self.opened_at is not None:
            result["opened_at"] = dict(self.opened_at)
        return result
