"""
transforms.py - Tree-rewriting passes applied before rendering

Escape passes keep literal '<' in prose from being read as markup by the
component renderer. Code spans, code blocks and raw HTML are separate node
types, so only ``text`` nodes are ever rewritten.

The URL fixer turns links to sibling markdown files into site routes.
"""

from __future__ import annotations

import posixpath
import re
from pathlib import Path
from typing import Callable, Optional, Union

from inkwell.config_utils import EscapePolicy
from inkwell.mdast import Node, walk
from inkwell.urls import is_external_url, split_url


Transform = Callable[[Node], None]

COMPARATOR_RE = re.compile(r"<(\s|\d)")

MARKDOWN_EXTENSIONS = (".mdx", ".markdown", ".md")
INDEX_PAGE_RE = re.compile(r"/(README|_index|index)$", re.IGNORECASE)
DEFAULT_CONTENT_PATH = "content"


# =============================================================================
# Escaping
# =============================================================================

def escape_comparators(tree: Node) -> None:
    """Escape '<' followed by whitespace or a digit, e.g. ``x < 5``."""
    for node in walk(tree, "text"):
        if isinstance(node.value, str):
            node.value = COMPARATOR_RE.sub(r"&lt;\1", node.value)


def escape_all_less_than(tree: Node) -> None:
    """Escape every '<', covering ``<=``, ``<<``, ``<-``, ``x<y``."""
    for node in walk(tree, "text"):
        if isinstance(node.value, str) and "<" in node.value:
            node.value = node.value.replace("<", "&lt;")


def escape_transform(policy: Union[EscapePolicy, str] = EscapePolicy.COMPARATORS) -> Transform:
    policy = EscapePolicy(policy)
    if policy is EscapePolicy.ALL:
        return escape_all_less_than
    return escape_comparators


# =============================================================================
# Markdown link -> route rewriting
# =============================================================================

def _normalize_separators(value: str) -> str:
    return value.replace("\\", "/")


def _trim_trailing_slashes(value: str) -> str:
    return value.rstrip("/")


def find_markdown_extension(pathname: str) -> Optional[str]:
    lower = pathname.lower()
    for ext in MARKDOWN_EXTENSIONS:
        if lower.endswith(ext):
            return ext
    return None


def _strip_markdown_extension(pathname: str) -> str:
    ext = find_markdown_extension(pathname)
    return pathname[:-len(ext)] if ext else pathname


def _normalize_route(pathname: str) -> str:
    normalized = INDEX_PAGE_RE.sub("/", pathname)
    if len(normalized) > 1:
        normalized = re.sub(r"/+$", "/", normalized)
    return normalized


def transform_internal_url(url: str, base_url: str) -> str:
    path, query, hash_ = split_url(url)
    normalized = _trim_trailing_slashes(_normalize_separators(path))

    if normalized.startswith("/"):
        joined = posixpath.normpath(normalized)
    else:
        joined = posixpath.normpath(posixpath.join(base_url or "/", normalized))

    route = _normalize_route(_strip_markdown_extension(joined))
    return f"{route}{query}{hash_}"


def get_base_url(filename: Union[str, Path], cwd: Union[str, Path], content_path: str) -> str:
    """Route directory of ``filename`` relative to ``cwd``/``content_path``."""
    file_path = _normalize_separators(str(filename or ""))
    cwd = _normalize_separators(str(cwd))
    if not file_path:
        return "/"

    rel = file_path[len(cwd) + 1:] if file_path.startswith(cwd + "/") else file_path
    if rel.startswith(content_path + "/"):
        rel = rel[len(content_path) + 1:]

    directory = posixpath.dirname(rel)
    return "/" if directory in ("", ".") else "/" + directory


def fix_markdown_urls(content_path: str = DEFAULT_CONTENT_PATH) -> Callable[..., None]:
    """
    Build a transform rewriting ``[x](./next.md)`` into ``/writing/next``.

    The returned callable takes ``(tree, filename, cwd)``.
    """
    def transformer(tree: Node, filename: Union[str, Path] = "", cwd: Union[str, Path, None] = None) -> None:
        base_url = get_base_url(filename, cwd if cwd is not None else Path.cwd(), content_path)

        for node in walk(tree, "link"):
            url = node.url
            if not url or is_external_url(url):
                continue

            path, _, _ = split_url(url)
            normalized = _trim_trailing_slashes(_normalize_separators(path))
            if not normalized or not find_markdown_extension(normalized):
                continue

            node.url = transform_internal_url(url, base_url)

    return transformer
