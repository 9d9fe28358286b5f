"""Document tree model for strict markup parsing.

A document is a tree of immutable :class:`Node` values. Each node carries an
ordered tuple of children and exactly one payload: :class:`TextData` for
character data or :class:`ElementData` for a tag with its attributes. Trees
are built bottom-up with :func:`make_text` and :func:`make_element`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class TextData:
    """Payload of a text node: raw character data."""

    text: str


@dataclass(frozen=True)
class ElementData:
    """Payload of an element node: tag name and attribute mapping."""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict, hash=False)


NodeData = Union[TextData, ElementData]


@dataclass(frozen=True)
class Node:
    """A single document tree unit, either text or element."""

    node_type: NodeData
    children: Tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        """Enforce the two-variant shape of a node."""
        if not isinstance(self.node_type, (TextData, ElementData)):
            raise TypeError("node_type must be TextData or ElementData")
        if isinstance(self.node_type, TextData) and self.children:
            raise ValueError("Text nodes cannot have children")

    @property
    def is_text(self) -> bool:
        return isinstance(self.node_type, TextData)

    @property
    def is_element(self) -> bool:
        return isinstance(self.node_type, ElementData)

    @property
    def tag_name(self) -> Optional[str]:
        """Tag name for elements, None for text nodes."""
        if isinstance(self.node_type, ElementData):
            return self.node_type.tag_name
        return None

    @property
    def text(self) -> Optional[str]:
        """Character data for text nodes, None for elements."""
        if isinstance(self.node_type, TextData):
            return self.node_type.text
        return None

    @property
    def attributes(self) -> Dict[str, str]:
        """Copy of the attribute mapping; empty for text nodes."""
        if isinstance(self.node_type, ElementData):
            return dict(self.node_type.attributes)
        return {}

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        if isinstance(self.node_type, ElementData):
            return self.node_type.attributes.get(name, default)
        return default

    def iter_nodes(self) -> Iterator["Node"]:
        """Iterate over this node and all descendants in document order."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_elements(self) -> Iterator["Node"]:
        """Iterate over element nodes in document order."""
        return (node for node in self.iter_nodes() if node.is_element)

    def find(self, tag_name: str) -> Optional["Node"]:
        """Find first element (including this one) with matching tag name."""
        return next(
            (node for node in self.iter_elements() if node.tag_name == tag_name),
            None,
        )

    def find_all(self, tag_name: str) -> List["Node"]:
        """Find all elements (including this one) with matching tag name."""
        return [node for node in self.iter_elements() if node.tag_name == tag_name]

    @property
    def text_content(self) -> str:
        """Concatenated character data of all descendant text nodes."""
        return "".join(node.text or "" for node in self.iter_nodes() if node.is_text)

    def depth(self) -> int:
        """Number of levels in the subtree rooted here (a leaf has depth 1)."""
        deepest = 0
        stack: List[Tuple[Node, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        result = self._shallow_dict()
        stack: List[Tuple[Node, Dict[str, Any]]] = [(self, result)]
        while stack:
            node, data = stack.pop()
            if node.children:
                data["children"] = [child._shallow_dict() for child in node.children]
                stack.extend(zip(node.children, data["children"]))
        return result

    def _shallow_dict(self) -> Dict[str, Any]:
        if isinstance(self.node_type, TextData):
            return {"type": "text", "text": self.node_type.text}
        return {
            "type": "element",
            "tag": self.node_type.tag_name,
            "attributes": dict(self.node_type.attributes),
        }


def make_text(data: str) -> Node:
    """Create a text node with no children."""
    return Node(node_type=TextData(text=data))


def make_element(
    tag_name: str,
    attributes: Mapping[str, str],
    children: Iterable[Node],
) -> Node:
    """Create an element node wrapping the given tag, attributes and children.

    No validation is performed on the tag name; the parser is responsible
    for producing well-formed names.
    """
    return Node(
        node_type=ElementData(tag_name=tag_name, attributes=dict(attributes)),
        children=tuple(children),
    )
