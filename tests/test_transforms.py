# tests/test_transforms.py
"""
Tests for transforms.py - Escaping and markdown URL rewriting
"""
from pathlib import Path

import pytest

from inkwell.config_utils import EscapePolicy
from inkwell.mdast import parse, walk
from inkwell.transforms import (
    escape_all_less_than,
    escape_comparators,
    escape_transform,
    fix_markdown_urls,
    get_base_url,
    transform_internal_url,
)


def _text(tree) -> str:
    return "".join(n.value for n in walk(tree, "text"))


class TestEscapeComparators:
    """Tests for the default escape pass"""

    def test_escapes_before_space(self):
        tree = parse("if x < 5 then")
        escape_comparators(tree)
        assert "x &lt; 5" in _text(tree)

    def test_escapes_before_digit(self):
        tree = parse("values <3 are small")
        escape_comparators(tree)
        assert "&lt;3" in _text(tree)

    def test_leaves_other_comparators(self):
        tree = parse("a <= b")
        escape_comparators(tree)
        assert "&lt;" not in _text(tree)

    def test_code_untouched(self):
        tree = parse("`x < 5`\n\n```\ny < 2\n```\n")
        escape_comparators(tree)

        assert [n.value for n in walk(tree, "inlineCode")] == ["x < 5"]
        assert "y < 2" in list(walk(tree, "code"))[0].value

    def test_idempotent_on_clean_text(self):
        tree = parse("nothing to escape")
        escape_comparators(tree)
        assert _text(tree) == "nothing to escape"


class TestEscapeAll:
    def test_escapes_every_less_than(self):
        tree = parse("a <= b and c << d")
        escape_all_less_than(tree)
        text = _text(tree)
        assert "<" not in text
        assert "&lt;=" in text

    @pytest.mark.parametrize("policy,expected", [
        (EscapePolicy.COMPARATORS, escape_comparators),
        ("comparators", escape_comparators),
        (EscapePolicy.ALL, escape_all_less_than),
        ("all", escape_all_less_than),
    ])
    def test_policy_selection(self, policy, expected):
        assert escape_transform(policy) is expected


class TestFixMarkdownUrls:
    """Tests for rewriting links to markdown files into routes"""

    def _links(self, markdown: str, filename: str, cwd: str = "/repo"):
        tree = parse(markdown)
        fix_markdown_urls()(tree, filename, cwd)
        return [n.url for n in walk(tree, "link")]

    def test_sibling_markdown_link(self):
        urls = self._links("[next](./next.md)", "/repo/content/writing/post.md")
        assert urls == ["/writing/next"]

    def test_parent_directory(self):
        urls = self._links("[up](../about.md)", "/repo/content/writing/post.md")
        assert urls == ["/about"]

    def test_keeps_query_and_hash(self):
        urls = self._links("[s](./next.md?x=1#part)", "/repo/content/writing/post.md")
        assert urls == ["/writing/next?x=1#part"]

    def test_index_pages_become_directories(self):
        urls = self._links("[c](./guide/README.md)", "/repo/content/docs/start.md")
        assert urls == ["/docs/guide/"]

    def test_external_and_non_markdown_untouched(self):
        urls = self._links(
            "[a](https://example.com/x.md) [b](./image.png) [c](#top)",
            "/repo/content/writing/post.md",
        )
        assert urls == ["https://example.com/x.md", "./image.png", "#top"]

    def test_outside_content_path(self):
        urls = self._links("[l](./lesson.md)", "/repo/courses/react/intro.md")
        assert urls == ["/courses/react/lesson"]

    def test_no_filename_uses_site_root(self):
        assert get_base_url("", "/repo", "content") == "/"

    @pytest.mark.parametrize("url,base,expected", [
        ("./a.md", "/writing", "/writing/a"),
        ("/writing/b.mdx", "/", "/writing/b"),
        ("sub/index.markdown", "/docs", "/docs/sub/"),
        ("c.md#h", "/", "/c#h"),
    ])
    def test_transform_internal_url(self, url, base, expected):
        assert transform_internal_url(url, base) == expected

    def test_accepts_path_objects(self):
        tree = parse("[n](next.md)")
        fix_markdown_urls()(tree, Path("/repo/content/writing/post.md"), Path("/repo"))
        assert list(walk(tree, "link"))[0].url == "/writing/next"
