"""Recursive-descent parser for strict markup.

This module converts a complete markup string into a tree of immutable nodes.
Every grammar rule is a method of :class:`MarkupParser`. Nested elements are
kept on an explicit stack of open elements inside ``parse_children`` instead
of the call stack, so nesting depth is not limited by the interpreter.
Malformed input aborts the parse with a
:class:`~strict_markup_parser.parsing.errors.ParseError` subclass.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from strict_markup_parser.shared import ParserConfig, get_logger
from strict_markup_parser.tree import Node, make_element, make_text

from .cursor import Cursor
from .errors import TagMismatchError

QUOTE_CHARACTERS = ('"', "'")
CLOSING_TAG_MARKER = "</"


@dataclass
class _OpenElement:
    """An element whose opening tag has been read but not its closing tag."""

    tag_name: str
    attributes: Dict[str, str]
    opened_at: Dict[str, int]
    children: List[Node] = field(default_factory=list)


class MarkupParser:
    """Single-use parser holding the cursor over one input string."""

    def __init__(
        self,
        source: str,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the parser.

        Args:
            source: Complete markup document
            config: Parser configuration (defaults to ``ParserConfig()``)
            correlation_id: Optional correlation ID for log records
        """
        self.cursor = Cursor(source)
        self.config = config or ParserConfig()
        self.logger = get_logger(
            __name__, correlation_id, "parser", self.config.logging_level
        )
        self.nodes_created = 0
        self.elements_created = 0

    def parse_document(self) -> Node:
        """Parse the whole input and return the root node.

        A single top-level node is returned as is; zero or several top-level
        nodes are wrapped in a synthesized ``config.root_tag`` element.
        """
        if self.cursor.position:
            raise RuntimeError("MarkupParser instances can only parse once")

        self.logger.debug(
            "Starting document parse",
            extra={"content_length": len(self.cursor.source)}
        )

        nodes = self.parse_children()
        if not self.cursor.eof():
            # Only an unmatched closing tag stops the top-level sequence early
            raise self.cursor.char_error("a node or end of input")

        if len(nodes) == 1:
            root = nodes[0]
        else:
            root = self._element(self.config.root_tag, {}, nodes)

        self.logger.debug(
            "Document parse complete",
            extra={
                "top_level_nodes": len(nodes),
                "nodes_created": self.nodes_created,
                "synthesized_root": len(nodes) != 1,
            }
        )
        return root

    def parse_children(self) -> List[Node]:
        """Parse a sequence of sibling nodes up to end of input or ``</``.

        Nested elements are tracked on an explicit stack of open elements, so
        nesting depth is bounded by memory rather than the interpreter stack.
        """
        siblings: List[Node] = []
        open_elements: List[_OpenElement] = []
        while True:
            self.cursor.consume_whitespace()
            # Every branch below consumes at least one character
            if self.cursor.eof() or self.cursor.starts_with(CLOSING_TAG_MARKER):
                if not open_elements:
                    return siblings
                element = open_elements.pop()
                self.parse_closing_tag(element)
                node = self._element(
                    element.tag_name, element.attributes, element.children
                )
            elif self.cursor.peek() == "<":
                open_elements.append(self.parse_opening_tag())
                continue
            else:
                node = self.parse_text()

            if open_elements:
                open_elements[-1].children.append(node)
            else:
                siblings.append(node)

    def parse_node(self) -> Node:
        """Parse an element if the next character is ``<``, otherwise text."""
        if self.cursor.eof():
            raise self.cursor.eof_error("a node")
        if self.cursor.peek() == "<":
            return self.parse_element()
        return self.parse_text()

    def parse_text(self) -> Node:
        """Parse character data up to the next ``<`` or end of input."""
        self.nodes_created += 1
        return make_text(self.cursor.consume_while(lambda char: char != "<"))

    def parse_element(self) -> Node:
        """Parse an element with its opening tag, contents and closing tag."""
        element = self.parse_opening_tag()
        element.children.extend(self.parse_children())
        self.parse_closing_tag(element)
        return self._element(element.tag_name, element.attributes, element.children)

    def parse_opening_tag(self) -> _OpenElement:
        """Parse ``<name attr="value"...>`` and return the element left open."""
        opened_at = self.cursor.location()
        self.cursor.expect("<")
        tag_name = self._parse_name("tag name")
        attributes = self.parse_attributes()
        self.cursor.expect(">")
        return _OpenElement(tag_name, attributes, opened_at)

    def parse_closing_tag(self, element: _OpenElement) -> None:
        """Parse ``</name>``, which must repeat the open element's tag name."""
        tag_name = element.tag_name
        self.cursor.expect(CLOSING_TAG_MARKER, f"closing tag </{tag_name}>")
        closing_at = self.cursor.location()
        closing_name = self.cursor.consume_name()
        if self.cursor.eof():
            raise self.cursor.eof_error(f"closing tag </{tag_name}>")
        if closing_name != tag_name:
            raise TagMismatchError(
                tag_name, closing_name, opened_at=element.opened_at, **closing_at
            )
        self.cursor.expect(">")

    def parse_attributes(self) -> Dict[str, str]:
        """Parse whitespace-separated ``name="value"`` pairs up to ``>``."""
        attributes: Dict[str, str] = {}
        while True:
            self.cursor.consume_whitespace()
            if self.cursor.eof():
                raise self.cursor.eof_error("'>'")
            if self.cursor.peek() == ">":
                break
            name, value = self.parse_attribute()
            attributes[name] = value
        return attributes

    def parse_attribute(self) -> Tuple[str, str]:
        """Parse a single ``name="value"`` pair."""
        name = self._parse_name("attribute name")
        self.cursor.expect("=")
        return name, self.parse_attribute_value()

    def parse_attribute_value(self) -> str:
        """Parse a value delimited by matching single or double quotes."""
        if self.cursor.eof():
            raise self.cursor.eof_error("opening quote")
        open_quote = self.cursor.peek()
        if open_quote not in QUOTE_CHARACTERS:
            raise self.cursor.char_error("opening quote")
        self.cursor.consume_char()

        value = self.cursor.consume_while(lambda char: char != open_quote)
        self.cursor.expect(open_quote, "closing quote")
        return value

    def _parse_name(self, description: str) -> str:
        name = self.cursor.consume_name()
        if not name:
            if self.cursor.eof():
                raise self.cursor.eof_error(description)
            raise self.cursor.char_error(description)
        return name

    def _element(
        self, tag_name: str, attributes: Dict[str, str], children: List[Node]
    ) -> Node:
        self.nodes_created += 1
        self.elements_created += 1
        return make_element(tag_name, attributes, children)


def parse_document(
    source: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> Node:
    """Parse a complete markup document into its root node.

    Raises:
        UnexpectedEofError: Input ended inside a construct
        UnexpectedCharError: A required character was missing
        TagMismatchError: A closing tag did not match its opening tag

    Examples:
        >>> root = parse_document('<div><p>Hello</p><p>World</p></div>')
        >>> [child.tag_name for child in root.children]
        ['p', 'p']
    """
    return MarkupParser(source, config, correlation_id).parse_document()
