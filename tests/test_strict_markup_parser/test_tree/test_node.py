"""Tests for the document tree model."""

import dataclasses

import pytest

from strict_markup_parser.tree import (
    ElementData,
    Node,
    TextData,
    make_element,
    make_text,
)


def _sample_tree() -> Node:
    return make_element("div", {"id": "main"}, [
        make_element("p", {"class": "lead"}, [make_text("Hello")]),
        make_text("between"),
        make_element("p", {}, [
            make_element("b", {}, [make_text("World")]),
        ]),
    ])


class TestConstructors:
    """Test make_text and make_element."""

    def test_make_text(self) -> None:
        node = make_text("data")

        assert node.is_text
        assert not node.is_element
        assert node.text == "data"
        assert node.tag_name is None
        assert node.children == ()
        assert node.attributes == {}

    def test_make_element(self) -> None:
        child = make_text("x")
        node = make_element("a", {"href": "/"}, [child])

        assert node.is_element
        assert node.tag_name == "a"
        assert node.text is None
        assert node.attributes == {"href": "/"}
        assert node.children == (child,)

    def test_make_element_performs_no_validation(self) -> None:
        """Test unusual tag names are wrapped verbatim."""
        assert make_element("", {}, []).tag_name == ""
        assert make_element("my-tag", {}, []).tag_name == "my-tag"

    def test_make_element_copies_inputs(self) -> None:
        """Test later changes to the caller's containers do not leak in."""
        attributes = {"a": "1"}
        children = [make_text("x")]
        node = make_element("p", attributes, children)

        attributes["b"] = "2"
        children.append(make_text("y"))

        assert node.attributes == {"a": "1"}
        assert len(node.children) == 1

    def test_make_element_accepts_generators(self) -> None:
        node = make_element("ul", {}, (make_text(str(i)) for i in range(3)))

        assert [child.text for child in node.children] == ["0", "1", "2"]


class TestNodeInvariants:
    """Test variant shape and immutability."""

    def test_node_requires_known_payload(self) -> None:
        with pytest.raises(TypeError, match="node_type must be TextData or ElementData"):
            Node(node_type="text")  # type: ignore

    def test_text_node_cannot_have_children(self) -> None:
        with pytest.raises(ValueError, match="Text nodes cannot have children"):
            Node(node_type=TextData("x"), children=(make_text("y"),))

    def test_nodes_are_frozen(self) -> None:
        node = make_text("x")

        with pytest.raises(dataclasses.FrozenInstanceError):
            node.children = ()  # type: ignore

    def test_attributes_property_returns_copy(self) -> None:
        node = make_element("a", {"href": "/"}, [])

        node.attributes["href"] = "changed"

        assert node.get_attribute("href") == "/"

    def test_equality_ignores_attribute_order(self) -> None:
        first = make_element("a", {"x": "1", "y": "2"}, [])
        second = make_element("a", {"y": "2", "x": "1"}, [])

        assert first == second

    def test_element_payload_is_hashable(self) -> None:
        """Test element payloads hash by tag name only."""
        assert hash(ElementData("a", {"x": "1"})) == hash(ElementData("a", {"y": "2"}))


class TestNavigation:
    """Test read-only traversal helpers."""

    def test_iter_nodes_document_order(self) -> None:
        tree = _sample_tree()

        labels = [node.tag_name or node.text for node in tree.iter_nodes()]

        assert labels == ["div", "p", "Hello", "between", "p", "b", "World"]

    def test_iter_elements(self) -> None:
        tags = [node.tag_name for node in _sample_tree().iter_elements()]

        assert tags == ["div", "p", "p", "b"]

    def test_find_returns_first_match(self) -> None:
        tree = _sample_tree()

        assert tree.find("p") is tree.children[0]
        assert tree.find("div") is tree
        assert tree.find("missing") is None

    def test_find_all(self) -> None:
        assert len(_sample_tree().find_all("p")) == 2

    def test_get_attribute_default(self) -> None:
        tree = _sample_tree()

        assert tree.get_attribute("id") == "main"
        assert tree.get_attribute("missing", "fallback") == "fallback"
        assert make_text("x").get_attribute("id") is None

    def test_text_content(self) -> None:
        assert _sample_tree().text_content == "HellobetweenWorld"

    def test_depth(self) -> None:
        assert make_text("x").depth() == 1
        assert _sample_tree().depth() == 4

    def test_to_dict(self) -> None:
        node = make_element("p", {"class": "x"}, [make_text("Hi")])

        assert node.to_dict() == {
            "type": "element",
            "tag": "p",
            "attributes": {"class": "x"},
            "children": [{"type": "text", "text": "Hi"}],
        }

    def test_to_dict_omits_empty_children(self) -> None:
        assert "children" not in make_element("br", {}, []).to_dict()
