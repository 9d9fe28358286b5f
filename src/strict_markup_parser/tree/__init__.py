"""Document tree model for strict markup parsing.

Key Components:
    Node: Immutable tree unit carrying children and one payload variant
    TextData: Text payload with raw character data
    ElementData: Element payload with tag name and attributes
    make_text / make_element: Construction helpers used by the parser
    to_markup / format_tree: Rendering of trees as markup or debug outline
"""

from .node import (
    ElementData,
    Node,
    NodeData,
    TextData,
    make_element,
    make_text,
)
from .serializer import format_tree, to_markup

__all__ = [
    "ElementData",
    "Node",
    "NodeData",
    "TextData",
    "format_tree",
    "make_element",
    "make_text",
    "to_markup",
]
