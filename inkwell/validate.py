#!/usr/bin/env python3

# Inkwell
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
validate.py - Check content frontmatter and links before building

Usage:
    inkwell validate

Checks:
- Frontmatter completeness (title, description, date, modified; published
  for writing posts)
- Duplicate slugs (writing posts; lessons within a course)
- Site-rooted links (/writing/<slug>, /courses/<course>/<lesson>, static assets)
- Relative links (must stay inside the content roots and exist on disk)

Every issue is collected; nothing stops at the first problem. The run fails
only at the end, if any issue was found.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set
from urllib.parse import unquote

import click

from inkwell.config_utils import PathsConfig
from inkwell.errors import FrontmatterError
from inkwell.icons import ERROR, LINK, SUCCESS
from inkwell.mdast import parse, walk
from inkwell.metadata import Document, is_valid_date, read_document
from inkwell.urls import LinkKind, classify_url, strip_query_hash


logger = logging.getLogger(__name__)

WRITING_REQUIRED = ("title", "description", "date", "modified")
COURSE_REQUIRED = ("title", "description", "date", "modified")
DATE_FIELDS = {"date", "modified"}

LINK_NODE_TYPES = ("link", "image", "definition")

ALLOWED_ROOTS = {"/", "/writing", "/courses"}
ALLOWED_ROOT_PREFIXES = ("/_app/", "/open-graph")

README_FILE = "README.md"
CONTENTS_FILE = "_index.md"


@dataclass
class Issue:
    """A single validation issue"""
    file: str
    message: str

    def __str__(self):
        return f"- {self.file}: {self.message}"


@dataclass
class ValidationResult:
    """Results from validating the content tree"""
    issues: List[Issue] = field(default_factory=list)
    files_checked: int = 0

    @property
    def is_valid(self) -> bool:
        return len(self.issues) == 0

    def add(self, file: str, message: str):
        self.issues.append(Issue(file=file, message=message))

    def summary(self) -> str:
        n = len(self.issues)
        if n == 0:
            return f"{SUCCESS} All {self.files_checked} files valid!"
        return f"Found {n} issue{'s' if n != 1 else ''} in {self.files_checked} files checked."


def ensure_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def should_skip_course_file(path: Path, data: Dict[str, Any]) -> bool:
    return path.name == CONTENTS_FILE or data.get("layout") == "contents"


def check_frontmatter(
    result: ValidationResult,
    file: str,
    data: Dict[str, Any],
    required: Iterable[str],
    require_published: bool,
):
    for key in required:
        value = data.get(key)
        if key in DATE_FIELDS:
            if not is_valid_date(value):
                result.add(file, f"Missing or invalid '{key}' frontmatter.")
            continue

        if not ensure_string(value):
            result.add(file, f"Missing required '{key}' frontmatter.")

    if require_published and not isinstance(data.get("published"), bool):
        result.add(file, "Missing or invalid 'published' frontmatter (expected boolean).")


def collect_link_urls(markdown: str) -> List[str]:
    """URLs of every link, image and definition node, in document order."""
    urls = []
    for node in walk(parse(markdown)):
        if node.type in LINK_NODE_TYPES and node.url is not None:
            urls.append(str(node.url).strip())
    return urls


class ContentValidator:
    """Validates writing posts and course lessons"""

    def __init__(self, config: PathsConfig):
        self.config = config
        self.writing_root = config.writing_root
        self.courses_root = config.courses_root
        self.static_root = config.static_root

        self.writing_files = self._find_markdown(self.writing_root)
        self.course_files = self._find_markdown(self.courses_root)

        self.writing_slugs: Set[str] = set()
        self.course_lessons: Dict[str, Set[str]] = {}

    @staticmethod
    def _find_markdown(root: Path) -> List[Path]:
        if not root.is_dir():
            return []
        return sorted(p.resolve() for p in root.rglob("*.md") if p.is_file())

    def _label(self, path: Path) -> str:
        return self.config.to_repo_path(path)

    def validate(self) -> ValidationResult:
        """Run all validations"""
        result = ValidationResult()

        self._build_slug_universe(result)

        documents = []
        for path in self.writing_files:
            doc = self._load(path, result)
            result.files_checked += 1
            if doc is None:
                continue
            check_frontmatter(result, self._label(path), doc.metadata, WRITING_REQUIRED, True)
            documents.append(doc)

        for path in self.course_files:
            doc = self._load(path, result)
            result.files_checked += 1
            if doc is None or should_skip_course_file(path, doc.metadata):
                continue
            check_frontmatter(result, self._label(path), doc.metadata, COURSE_REQUIRED, False)
            documents.append(doc)

        for doc in documents:
            self._check_links(doc, result)

        logger.debug("Checked %d files, %d issues", result.files_checked, len(result.issues))

        return result

    def _load(self, path: Path, result: ValidationResult) -> Optional[Document]:
        try:
            return read_document(path)
        except FrontmatterError as e:
            result.add(self._label(path), f"Invalid YAML frontmatter: {e.cause}")
        except (OSError, UnicodeDecodeError) as e:
            result.add(self._label(path), f"Could not read file ({e}).")
        return None

    # -------------------------------------------------------------------------
    # Slugs
    # -------------------------------------------------------------------------

    def _build_slug_universe(self, result: ValidationResult):
        seen: Set[str] = set()
        duplicates = []
        for path in self.writing_files:
            slug = path.stem
            if slug in seen and slug not in duplicates:
                duplicates.append(slug)
            seen.add(slug)
            # Only top-level posts are published as /writing/<slug>
            if path.parent == self.writing_root:
                self.writing_slugs.add(slug)

        for slug in duplicates:
            result.add(self._label(self.writing_root), f"Duplicate writing slug '{slug}'.")

        # Courses with no lessons yet are still valid link targets
        for course_dir in self.config.course_dirs():
            self.course_lessons[course_dir.name] = set()

        for path in self.course_files:
            parts = path.relative_to(self.courses_root).parts
            if len(parts) < 2:
                result.add(self._label(path), "Course file must live under a course directory.")
                continue

            course, filename = parts[0], parts[-1]
            if filename in (README_FILE, CONTENTS_FILE):
                continue

            slug = path.stem
            lessons = self.course_lessons.setdefault(course, set())
            if slug in lessons:
                result.add(self._label(path), f"Duplicate lesson slug '{slug}' in course '{course}'.")
            lessons.add(slug)

    # -------------------------------------------------------------------------
    # Links
    # -------------------------------------------------------------------------

    def _check_links(self, doc: Document, result: ValidationResult):
        logger.debug("Checking links in %s", self._label(doc.path), extra={"icon": LINK})
        for url in collect_link_urls(doc.content):
            self.check_link_target(doc.path, url, result)

    def check_link_target(self, file: Path, url: str, result: ValidationResult):
        kind = classify_url(url)
        if kind is LinkKind.EXTERNAL:
            return

        normalized = unquote(strip_query_hash(url))
        if not normalized:
            return

        if kind is LinkKind.SITE_ROOTED:
            self._check_root_link(file, normalized, result)
        else:
            self._check_relative_link(file, url, normalized, result)

    def _check_root_link(self, file: Path, url_path: str, result: ValidationResult):
        label = self._label(file)
        normalized = url_path[:-1] if url_path != "/" and url_path.endswith("/") else url_path

        if normalized in ALLOWED_ROOTS:
            return
        if normalized.startswith(ALLOWED_ROOT_PREFIXES):
            return

        if normalized.startswith("/writing/"):
            slug = normalized.split("/")[2]
            if not slug or slug not in self.writing_slugs:
                result.add(label, f"Missing writing slug for link '{url_path}'.")
            return

        if normalized.startswith("/courses/"):
            parts = [p for p in normalized.split("/") if p]
            course = parts[1] if len(parts) > 1 else None
            lesson = parts[2] if len(parts) > 2 else None

            if not course:
                result.add(label, f"Missing course slug for link '{url_path}'.")
                return

            lessons = self.course_lessons.get(course)
            if lessons is None:
                result.add(label, f"Unknown course '{course}' for link '{url_path}'.")
                return

            if lesson:
                if lesson not in lessons:
                    result.add(label, f"Unknown lesson '{lesson}' for link '{url_path}'.")
            elif not (self.courses_root / course / README_FILE).exists():
                result.add(label, f"Missing README for course '{course}'.")
            return

        static_path = self.static_root / url_path.lstrip("/")
        if not static_path.exists():
            result.add(label, f"Missing static asset for link '{url_path}'.")

    def _check_relative_link(self, file: Path, url: str, normalized: str, result: ValidationResult):
        label = self._label(file)
        resolved = Path(os.path.normpath(file.parent / normalized))

        in_writing = resolved.is_relative_to(self.writing_root)
        in_courses = resolved.is_relative_to(self.courses_root)
        if not in_writing and not in_courses:
            result.add(label, f"Relative link escapes content roots: '{url}'.")
            return

        if not resolved.exists():
            result.add(label, f"Missing asset or file for link '{url}'.")


# =============================================================================
# Frontmatter audit for explicit file lists (pre-commit hooks)
# =============================================================================

def audit_course_frontmatter(files: Iterable[Path]) -> List[Issue]:
    """Check that each course file has a non-empty title and description."""
    issues: List[Issue] = []

    for file in files:
        file = Path(file)
        try:
            contents = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            issues.append(Issue(str(file), f"Could not read file ({e})."))
            continue

        if not contents.startswith("---"):
            issues.append(Issue(str(file), "Missing frontmatter delimiter (expected starting ---)."))
            continue

        try:
            doc = read_document(file)
        except FrontmatterError as e:
            issues.append(Issue(str(file), f"Invalid YAML frontmatter: {e.cause}"))
            continue

        if should_skip_course_file(file, doc.metadata):
            continue

        for key in ("title", "description"):
            if not ensure_string(doc.metadata.get(key)):
                issues.append(Issue(str(file), f"Missing required {key} in frontmatter."))

    return issues


# =============================================================================
# Entry points
# =============================================================================

def validate_content(config: PathsConfig) -> ValidationResult:
    """Main entry point for validation"""
    return ContentValidator(config).validate()


def print_results(result: ValidationResult, heading: str = "Content validation"):
    """Print issues to stderr, or a one-line confirmation to stdout"""
    if result.is_valid:
        click.echo(f"{SUCCESS} {heading} passed.")
        return

    click.echo(f"{ERROR} {heading} failed:", err=True)
    for issue in result.issues:
        click.echo(str(issue), err=True)
    click.echo(result.summary(), err=True)
