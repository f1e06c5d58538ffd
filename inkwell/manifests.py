#!/usr/bin/env python3

# Inkwell
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
manifests.py - Generate JSON manifests for writing, courses and the site index

Each generator follows the same steps:
1. List the source files and hash their signatures
2. Load the manifest written by the previous run (if any)
3. Skip when the stored hash matches, otherwise rebuild and overwrite

Outputs:
- <writing_root>/manifest.json       {meta, posts}
- <courses_root>/<course>/manifest.json  {meta, course, lessons}
- <content_index_path>               {meta, posts, courses}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from inkwell.config_utils import PathsConfig
from inkwell.errors import (
    missing_manifests_error,
    missing_readme_error,
    missing_writing_manifest_error,
)
from inkwell.hashing import compute_hash
from inkwell.icons import COURSE, POST, SKIP, SUCCESS
from inkwell.jsonio import read_existing, read_json, write_formatted_json
from inkwell.metadata import (
    iso_sort_key,
    normalize_frontmatter,
    read_document,
    to_iso,
)


logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"
README_FILE = "README.md"
CONTENTS_FILE = "_index.md"
COURSE_MANIFEST_HASH_VERSION = "course-manifest:v2"


class ManifestState(Enum):
    NO_PRIOR = "no-prior-artifact"
    HASH_MATCHES = "hash-matches"
    HASH_DIFFERS = "hash-differs"


@dataclass
class GenerationResult:
    path: Path
    written: bool
    hash: str
    entries: int = 0


def regeneration_state(existing: Optional[Dict[str, Any]], hash_: str) -> ManifestState:
    if existing is None:
        return ManifestState.NO_PRIOR
    meta = existing.get("meta") if isinstance(existing, dict) else None
    if isinstance(meta, dict) and meta.get("hash") == hash_:
        return ManifestState.HASH_MATCHES
    return ManifestState.HASH_DIFFERS


def _now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def _markdown_files(directory: Path) -> List[Path]:
    """Markdown files directly inside ``directory``, sorted by path."""
    if not directory.is_dir():
        return []
    return sorted(p.resolve() for p in directory.glob("*.md") if p.is_file())


def sort_by_date_desc(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(entries, key=lambda e: iso_sort_key(e.get("date")), reverse=True)


def _string_list_or_none(value: Any) -> Optional[List[str]]:
    if not isinstance(value, (list, tuple)):
        return None
    tags = [str(item).strip() for item in value]
    tags = [t for t in tags if t]
    return tags or None


# =============================================================================
# Writing
# =============================================================================

def build_post_entry(path: Path, config: PathsConfig) -> Dict[str, Any]:
    doc = read_document(path)
    fm = normalize_frontmatter(doc.metadata)
    return {
        "title": fm.title,
        "description": fm.description,
        "date": to_iso(fm.date),
        "modified": to_iso(fm.modified),
        "published": fm.published,
        "tags": fm.tags,
        "slug": doc.slug,
        "file": config.to_repo_path(path),
    }


def generate_writing_manifest(config: PathsConfig) -> GenerationResult:
    output_path = config.writing_manifest_path
    files = _markdown_files(config.writing_root)
    hash_ = compute_hash(files)

    existing = read_existing(output_path)
    if regeneration_state(existing, hash_) is ManifestState.HASH_MATCHES:
        logger.info("Writing manifest is already up to date.", extra={"icon": SKIP})
        return GenerationResult(output_path, written=False, hash=hash_, entries=len(files))

    posts = sort_by_date_desc([build_post_entry(f, config) for f in files])
    manifest = {
        "meta": {"generatedAt": _now_iso(), "hash": hash_},
        "posts": posts,
    }

    write_formatted_json(output_path, manifest)
    logger.info(
        "Wrote writing manifest to %s (%d posts).",
        config.to_repo_path(output_path), len(posts),
        extra={"icon": POST},
    )
    return GenerationResult(output_path, written=True, hash=hash_, entries=len(posts))


# =============================================================================
# Courses
# =============================================================================

def _apply_optional_fields(target: Dict[str, Any], data: Dict[str, Any]) -> None:
    if isinstance(data.get("published"), bool):
        target["published"] = data["published"]
    tags = _string_list_or_none(data.get("tags"))
    if tags:
        target["tags"] = tags


def build_lesson_entry(path: Path, config: PathsConfig) -> Dict[str, Any]:
    doc = read_document(path)
    fm = normalize_frontmatter(doc.metadata)
    entry = {
        "slug": doc.slug,
        "title": fm.title,
        "description": fm.description,
        "date": to_iso(fm.date),
        "modified": to_iso(fm.modified),
    }
    _apply_optional_fields(entry, doc.metadata)
    entry["file"] = config.to_repo_path(path)
    return entry


def build_course_block(course_dir: Path, files: List[Path], config: PathsConfig) -> Dict[str, Any]:
    readme = read_document(course_dir / README_FILE)
    fm = normalize_frontmatter(readme.metadata)
    course = {
        "slug": course_dir.name,
        "title": fm.title,
        "description": fm.description,
        "date": to_iso(fm.date),
        "modified": to_iso(fm.modified),
    }
    _apply_optional_fields(course, readme.metadata)

    contents = course_dir / CONTENTS_FILE
    if contents in files:
        course["contentsFile"] = config.to_repo_path(contents)
    return course


def generate_course_manifest(course_dir: Path, config: PathsConfig) -> GenerationResult:
    course_dir = Path(course_dir).resolve()
    output_path = course_dir / MANIFEST_FILE
    files = _markdown_files(course_dir)

    if course_dir / README_FILE not in files:
        raise missing_readme_error(course_dir)

    hash_ = compute_hash(files, prefix=[COURSE_MANIFEST_HASH_VERSION])

    existing = read_existing(output_path)
    if regeneration_state(existing, hash_) is ManifestState.HASH_MATCHES:
        logger.info("Course manifest is already up to date for %s.", course_dir.name, extra={"icon": SKIP})
        return GenerationResult(output_path, written=False, hash=hash_, entries=len(files))

    lesson_files = sorted(
        (f for f in files if f.name not in (README_FILE, CONTENTS_FILE)),
        key=lambda f: (f.name.casefold(), f.name),
    )
    lessons = [build_lesson_entry(f, config) for f in lesson_files]

    manifest = {
        "meta": {"generatedAt": _now_iso(), "hash": hash_},
        "course": build_course_block(course_dir, files, config),
        "lessons": lessons,
    }

    write_formatted_json(output_path, manifest)
    logger.info(
        "Wrote course manifest to %s (%d lessons).",
        config.to_repo_path(output_path), len(lessons),
        extra={"icon": COURSE},
    )
    return GenerationResult(output_path, written=True, hash=hash_, entries=len(lessons))


def generate_all_course_manifests(config: PathsConfig) -> List[GenerationResult]:
    return [generate_course_manifest(d, config) for d in config.course_dirs()]


# =============================================================================
# Site content index
# =============================================================================

def _course_summary(manifest: Dict[str, Any]) -> Dict[str, Any]:
    course = manifest.get("course") or {}
    summary = {
        "title": course.get("title", ""),
        "description": course.get("description", ""),
        "date": course.get("date"),
        "modified": course.get("modified"),
        "slug": course.get("slug"),
    }
    if summary["modified"] is None:
        del summary["modified"]
    return summary


def generate_site_content_index(config: PathsConfig) -> GenerationResult:
    output_path = config.content_index_path
    writing_manifest_path = config.writing_manifest_path

    course_manifest_paths = sorted(
        p.resolve() for p in config.courses_root.glob(f"*/{MANIFEST_FILE}") if p.is_file()
    ) if config.courses_root.is_dir() else []

    if not course_manifest_paths:
        raise missing_manifests_error(config.courses_root)
    if not writing_manifest_path.is_file():
        raise missing_writing_manifest_error(writing_manifest_path)

    manifest_paths = sorted([writing_manifest_path, *course_manifest_paths])
    hash_ = compute_hash(manifest_paths)

    existing = read_existing(output_path)
    if regeneration_state(existing, hash_) is ManifestState.HASH_MATCHES:
        logger.info("Site content index is already up to date.", extra={"icon": SKIP})
        return GenerationResult(output_path, written=False, hash=hash_)

    writing_manifest = read_json(writing_manifest_path)
    course_manifests = [read_json(p) for p in course_manifest_paths]

    posts = [
        {key: value for key, value in post.items() if key != "file"}
        for post in writing_manifest.get("posts", [])
    ]
    courses = [_course_summary(m) for m in course_manifests]

    index = {
        "meta": {"generatedAt": _now_iso(), "hash": hash_},
        "posts": sort_by_date_desc(posts),
        "courses": sort_by_date_desc(courses),
    }

    write_formatted_json(output_path, index)
    logger.info(
        "Wrote content index to %s (%d posts, %d courses).",
        config.to_repo_path(output_path), len(posts), len(courses),
        extra={"icon": SUCCESS},
    )
    return GenerationResult(output_path, written=True, hash=hash_, entries=len(posts) + len(courses))
