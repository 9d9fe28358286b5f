"""Rendering of document trees back to markup and to a debug outline."""

from typing import List, Union

from .node import ElementData, Node, TextData


def _quote_attribute(name: str, value: str) -> str:
    if '"' not in value:
        return f'{name}="{value}"'
    if "'" not in value:
        return f"{name}='{value}'"
    raise ValueError(
        f"Attribute {name!r} value contains both quote characters and cannot "
        f"be serialized without entity references"
    )


def to_markup(node: Node) -> str:
    """Serialize a tree back to markup that parses to an equivalent tree.

    Attributes are written in sorted order. Character data is written
    verbatim, so text containing ``<`` cannot be represented.
    """
    parts: List[str] = []
    # Plain strings on the stack are pending closing tags
    stack: List[Union[Node, str]] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, str):
            parts.append(current)
            continue

        data = current.node_type
        if isinstance(data, TextData):
            if "<" in data.text:
                raise ValueError("Text content cannot contain '<'")
            parts.append(data.text)
            continue

        attributes = "".join(
            " " + _quote_attribute(name, data.attributes[name])
            for name in sorted(data.attributes)
        )
        parts.append(f"<{data.tag_name}{attributes}>")
        stack.append(f"</{data.tag_name}>")
        stack.extend(reversed(current.children))
    return "".join(parts)


def format_tree(node: Node, indent: int = 2) -> str:
    """Render an indented outline of the tree, one node per line.

    Example:
        >>> print(format_tree(make_element("p", {"class": "x"}, [make_text("Hi")])))
        <p class="x">
          'Hi'
    """
    lines: List[str] = []
    stack = [(node, 0)]
    while stack:
        current, level = stack.pop()
        prefix = " " * (indent * level)
        data = current.node_type
        if isinstance(data, ElementData):
            attributes = "".join(
                f' {name}="{data.attributes[name]}"' for name in sorted(data.attributes)
            )
            lines.append(f"{prefix}<{data.tag_name}{attributes}>")
        else:
            lines.append(f"{prefix}{data.text!r}")
        stack.extend((child, level + 1) for child in reversed(current.children))
    return "\n".join(lines)
