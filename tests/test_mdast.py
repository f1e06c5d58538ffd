# tests/test_mdast.py
"""
Tests for mdast.py - Markdown parsing and tree traversal
"""
import pytest

from inkwell.errors import InvalidNodeError
from inkwell.mdast import Node, has_children, is_node, parse, walk


def _tree():
    return Node("root", children=[
        Node("paragraph", children=[
            Node("text", value="a"),
            Node("link", url="/x", children=[Node("text", value="b")]),
        ]),
        Node("code", value="c"),
    ])


class TestWalk:
    """Tests for the depth-first walker"""

    def test_yields_every_node_in_preorder(self):
        types = [n.type for n in walk(_tree())]
        assert types == ["root", "paragraph", "text", "link", "text", "code"]

    def test_filter_still_descends(self):
        """Text inside a link is found even though links are filtered out"""
        values = [n.value for n in walk(_tree(), "text")]
        assert values == ["a", "b"]

    def test_filter_with_no_matches(self):
        assert list(walk(_tree(), "heading")) == []

    def test_is_lazy(self):
        gen = walk(_tree())
        assert next(gen).type == "root"
        assert next(gen).type == "paragraph"

    def test_invalid_node_raises(self):
        with pytest.raises(InvalidNodeError):
            list(walk({"type": "root"}))

    def test_invalid_child_raises(self):
        tree = Node("root", children=["not a node"])
        with pytest.raises(InvalidNodeError):
            list(walk(tree))

    def test_leaf_without_children(self):
        leaf = Node("text", value="x")
        assert is_node(leaf)
        assert not has_children(leaf)
        assert list(walk(leaf)) == [leaf]


class TestParse:
    """Tests for parse()"""

    def test_root_node(self):
        tree = parse("Hello")
        assert tree.type == "root"
        assert tree.children[0].type == "paragraph"

    def test_links_and_images(self):
        tree = parse("[a](/writing/foo) and ![b](./pic.png \"Title\")")

        links = list(walk(tree, "link"))
        images = list(walk(tree, "image"))

        assert [l.url for l in links] == ["/writing/foo"]
        assert images[0].url == "./pic.png"
        assert images[0].title == "Title"

    def test_code_is_not_text(self):
        tree = parse("Use `a < b` here.\n\n```\nx < 1\n```\n")

        assert [n.value for n in walk(tree, "inlineCode")] == ["a < b"]
        assert "x < 1" in [n.value for n in walk(tree, "code")][0]
        assert all("<" not in (n.value or "") for n in walk(tree, "text"))

    def test_reference_definitions_become_nodes(self):
        tree = parse("See [docs][d].\n\n[d]: /courses/react \"React\"\n")

        definitions = list(walk(tree, "definition"))
        assert len(definitions) == 1
        assert definitions[0].url == "/courses/react"

    def test_unused_definition_is_kept(self):
        tree = parse("Nothing here.\n\n[unused]: ./missing.md\n")
        assert [d.url for d in walk(tree, "definition")] == ["./missing.md"]

    def test_raw_html(self):
        tree = parse('<img src="photo.png">\n')
        html = list(walk(tree, "html"))
        assert html and "photo.png" in html[0].value

    def test_url_with_spaces_is_unescaped(self):
        tree = parse("[a](<my file.md>)")
        assert list(walk(tree, "link"))[0].url == "my file.md"

    def test_reserved_escapes_stay_encoded(self):
        tree = parse("[a](./a%23b.md?x=%3F#top)")
        assert list(walk(tree, "link"))[0].url == "./a%23b.md?x=%3F#top"

    def test_to_dict(self):
        data = parse("[a](/x)").to_dict()
        link = data["children"][0]["children"][0]
        assert link["type"] == "link"
        assert link["url"] == "/x"
        assert link["children"][0] == {"type": "text", "value": "a"}
