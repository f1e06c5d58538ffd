# tests/conftest.py
"""
Pytest configuration and shared fixtures for Inkwell tests
"""
import logging
import textwrap
from pathlib import Path
from typing import Callable

import pytest
import yaml

from inkwell.config_utils import PathsConfig


def _write_markdown(path: Path, frontmatter: dict = None, body: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = ""
    if frontmatter is not None:
        text = "---\n" + yaml.safe_dump(frontmatter, sort_keys=False) + "---\n\n"
    text += textwrap.dedent(body).lstrip("\n")
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_markdown() -> Callable[..., Path]:
    """Write a markdown file with a YAML frontmatter block"""
    return _write_markdown


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Create an empty repository layout (writing, courses, static)"""
    (tmp_path / "content" / "writing").mkdir(parents=True)
    (tmp_path / "courses").mkdir()
    (tmp_path / "static").mkdir()
    return tmp_path


@pytest.fixture
def config(repo: Path) -> PathsConfig:
    return PathsConfig(repo_root=repo)


@pytest.fixture
def sample_site(repo: Path) -> Path:
    """A small, fully valid site: two posts and one course with two lessons"""
    writing = repo / "content" / "writing"
    _write_markdown(writing / "hello-world.md", {
        "title": "Hello World",
        "description": "The first post",
        "date": "2024-01-01",
        "modified": "2024-02-01",
        "published": True,
        "tags": ["intro", "meta"],
    }, "# Hello\n\nRead the [course](/courses/react) next.\n")
    _write_markdown(writing / "second-post.md", {
        "title": "Second Post",
        "description": "A follow up",
        "date": "2024-03-15",
        "modified": "2024-03-15",
        "published": False,
    }, "Back to [the first one](./hello-world.md).\n")

    course = repo / "courses" / "react"
    _write_markdown(course / "README.md", {
        "title": "React Basics",
        "description": "Components and state",
        "date": "2024-01-10",
        "modified": "2024-01-20",
        "published": True,
        "tags": ["react"],
    }, "# React Basics\n")
    _write_markdown(course / "_index.md", {"layout": "contents"}, "- [Components](/courses/react/components)\n")
    _write_markdown(course / "components.md", {
        "title": "Components",
        "description": "Building blocks",
        "date": "2024-01-11",
        "modified": "2024-01-11",
    }, "If x < 5 then see [state](/courses/react/state).\n")
    _write_markdown(course / "state.md", {
        "title": "State",
        "description": "Keeping track",
        "date": "2024-01-12",
        "modified": "2024-01-13",
    }, "![diagram](/images/state.png)\n")

    (repo / "static" / "images").mkdir()
    (repo / "static" / "images" / "state.png").write_bytes(b"not really a png")
    return repo


@pytest.fixture(autouse=True)
def reset_inkwell_logger():
    """setup_logging() binds a handler to the stream current at call time"""
    yield
    logging.getLogger("inkwell").handlers.clear()
