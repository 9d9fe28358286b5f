"""Character cursor over an in-memory markup string.

The cursor is the only mutable state of a parse. Every scanning method either
advances the offset or leaves it unchanged; the offset never moves backwards.
"""

import bisect
import string
from typing import Callable, Dict, List, Optional

from .errors import UnexpectedCharError, UnexpectedEofError

NAME_CHARACTERS = frozenset(string.ascii_letters + string.digits)


class Cursor:
    """Scanner with lookahead and consumption primitives."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self._line_starts: Optional[List[int]] = None

    def __repr__(self) -> str:
        return f"Cursor(position={self.position}, length={len(self.source)})"

    def eof(self) -> bool:
        """Return True if all input is consumed."""
        return self.position >= len(self.source)

    def peek(self) -> str:
        """Return the current character without consuming it."""
        if self.eof():
            raise self.eof_error("a character")
        return self.source[self.position]

    def starts_with(self, literal: str) -> bool:
        """Check whether the remaining input starts with ``literal``."""
        return self.source.startswith(literal, self.position)

    def consume_char(self) -> str:
        """Return the current character and advance past it."""
        char = self.peek()
        self.position += 1
        return char

    def consume_while(self, test: Callable[[str], bool]) -> str:
        """Consume the maximal run of characters satisfying ``test``."""
        start = self.position
        end = len(self.source)
        while self.position < end and test(self.source[self.position]):
            self.position += 1
        return self.source[start:self.position]

    def consume_whitespace(self) -> None:
        """Consume and discard zero or more whitespace characters."""
        self.consume_while(str.isspace)

    def consume_name(self) -> str:
        """Consume a possibly empty run of ASCII letters and digits."""
        return self.consume_while(NAME_CHARACTERS.__contains__)

    def expect(self, literal: str, description: Optional[str] = None) -> None:
        """Consume ``literal`` or raise if a different character is found."""
        for expected in literal:
            if self.eof():
                raise self.eof_error(description or repr(expected))
            if self.source[self.position] != expected:
                raise self.char_error(description or repr(expected))
            self.position += 1

    def location(self, offset: Optional[int] = None) -> Dict[str, int]:
        """Return one-based line and column for ``offset`` (default: current)."""
        if offset is None:
            offset = self.position
        if self._line_starts is None:
            self._line_starts = [0] + [
                index + 1 for index, char in enumerate(self.source) if char == "\n"
            ]
        line_index = bisect.bisect_right(self._line_starts, offset) - 1
        return {
            "offset": offset,
            "line": line_index + 1,
            "column": offset - self._line_starts[line_index] + 1,
        }

    def eof_error(self, expected: str) -> UnexpectedEofError:
        return UnexpectedEofError(expected, **self.location())

    def char_error(
        self, expected: str, offset: Optional[int] = None
    ) -> UnexpectedCharError:
        where = self.location(offset)
        return UnexpectedCharError(expected, self.source[where["offset"]], **where)
