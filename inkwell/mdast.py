#!/usr/bin/env python3

# Inkwell
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
mdast.py - Markdown syntax trees and traversal

parse() turns markdown into a tree of Node objects shaped like mdast
(type / children / value / url), using mistune's AST renderer underneath.
walk() is the traversal primitive every content scanner builds on.

    tree = parse("See [the intro](./intro.md).")
    for link in walk(tree, "link"):
        print(link.url)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
import mistune

from inkwell.errors import InvalidNodeError
from inkwell.urls import decode_uri


@dataclass
class Node:
    """A markdown syntax tree node."""
    type: str
    children: Optional[List["Node"]] = None
    value: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        for key in ("value", "url", "title"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        if self.data:
            out["data"] = dict(self.data)
        if self.children is not None:
            out["children"] = [child.to_dict() for child in self.children]
        return out


def is_node(node: Any) -> bool:
    return isinstance(node, Node) and isinstance(node.type, str) and bool(node.type)


def has_children(node: Any) -> bool:
    return is_node(node) and isinstance(node.children, list)


def is_type(node: Node, kind: str) -> bool:
    return node.type == kind


def walk(node: Node, node_type: Optional[str] = None) -> Iterator[Node]:
    """
    Yield ``node`` and its descendants depth-first, pre-order.

    When ``node_type`` is given only nodes of that type are yielded, but the
    traversal still descends into every child.
    """
    if not is_node(node):
        raise InvalidNodeError(
            message="Node is not a valid markdown node",
            context={"value": repr(node)[:80]},
        )

    if node_type is None or is_type(node, node_type):
        yield node

    if has_children(node):
        for child in node.children:
            yield from walk(child, node_type)


# =============================================================================
# Parsing (mistune AST -> Node)
# =============================================================================

# mistune token type -> mdast node type
TYPE_MAP = {
    "codespan": "inlineCode",
    "block_code": "code",
    "inline_html": "html",
    "block_html": "html",
    "block_text": "paragraph",
    "block_quote": "blockquote",
    "list_item": "listItem",
    "thematic_break": "thematicBreak",
    "softbreak": "break",
    "linebreak": "break",
}

# mistune-only tokens with no mdast counterpart
DROPPED_TYPES = {"blank_line"}

_markdown = mistune.create_markdown(renderer=None)


def _convert(token: Dict[str, Any]) -> Optional[Node]:
    kind = token.get("type", "")
    if kind in DROPPED_TYPES:
        return None

    node = Node(type=TYPE_MAP.get(kind, kind))
    attrs = token.get("attrs") or {}

    if "raw" in token:
        node.value = token["raw"]
    if "url" in attrs:
        node.url = decode_uri(attrs["url"])
    if attrs.get("title"):
        node.title = attrs["title"]
    for key, value in attrs.items():
        if key not in ("url", "title"):
            node.data[key] = value

    if "children" in token:
        node.children = _convert_all(token["children"])
    elif kind in ("link", "image"):
        node.children = []

    return node


def _convert_all(tokens: List[Dict[str, Any]]) -> List[Node]:
    nodes = []
    for token in tokens:
        node = _convert(token)
        if node is not None:
            nodes.append(node)
    return nodes


def parse(text: str) -> Node:
    """
    Parse markdown into a ``root`` Node.

    Reference definitions (``[label]: /path``) are appended to the root as
    ``definition`` nodes so link checks see them even when unused.
    """
    tokens, state = _markdown.parse(text)
    root = Node(type="root", children=_convert_all(tokens))

    ref_links = state.env.get("ref_links") or {}
    for label, ref in ref_links.items():
        root.children.append(Node(
            type="definition",
            url=decode_uri(ref.get("url", "")),
            title=ref.get("title") or None,
            data={"label": ref.get("label", label)},
        ))

    return root
