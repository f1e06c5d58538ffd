#!/usr/bin/env python3

# Inkwell
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
metadata.py - Frontmatter extraction and date normalization

Extraction is lenient: missing fields fall back to defaults instead of
failing. Checking that fields are actually present is the validator's job.

Defaults:
- date      -> Unix epoch when missing or unparseable
- modified  -> the resolved date
- tags      -> []
- title / description -> ""
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import frontmatter
import yaml

from inkwell.errors import invalid_frontmatter_error


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Accepted in addition to ISO-8601
FALLBACK_DATE_FORMATS = ["%Y-%m-%d %H:%M:%S", "%b %d, %Y", "%B %d, %Y", "%d %B %Y"]


@dataclass
class Document:
    """A markdown file split into frontmatter and body."""
    path: Path
    metadata: Dict[str, Any]
    content: str

    @property
    def slug(self) -> str:
        return self.path.stem


@dataclass
class Frontmatter:
    title: str = ""
    description: str = ""
    date: datetime = EPOCH
    modified: datetime = EPOCH
    published: bool = False
    tags: List[str] = field(default_factory=list)


# =============================================================================
# Dates
# =============================================================================

def _as_utc(value: datetime) -> datetime:
    # Naive values are read as UTC so output does not depend on the machine
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_date(value: Any) -> Optional[datetime]:
    """Coerce a frontmatter value to an aware UTC datetime, or None."""
    if not value:
        return None

    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    text = str(value).strip()
    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue
    return None


def is_valid_date(value: Any) -> bool:
    """True for date objects and strings that parse as a date."""
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str):
        return False
    return to_date(value) is not None


def to_iso(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    value = _as_utc(value)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse a string written by :func:`to_iso` (or any ISO-8601 string)."""
    return _as_utc(datetime.fromisoformat(value))


def iso_sort_key(value: Optional[str]) -> datetime:
    """Sort key for ISO date strings; unparseable values sort as the epoch."""
    if not value:
        return EPOCH
    try:
        return parse_iso(value)
    except ValueError:
        return EPOCH


# =============================================================================
# Frontmatter
# =============================================================================

def split_frontmatter(text: str, path: Union[str, Path] = "<string>") -> tuple[Dict[str, Any], str]:
    """Return (metadata, body). Invalid YAML raises FrontmatterError."""
    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as e:
        raise invalid_frontmatter_error(Path(path), cause=e)

    metadata = post.metadata if isinstance(post.metadata, dict) else {}
    return dict(metadata), post.content


def read_document(path: Path) -> Document:
    text = Path(path).read_text(encoding="utf-8")
    metadata, content = split_frontmatter(text, path)
    return Document(path=Path(path), metadata=metadata, content=content)


def as_string_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return []


def normalize_frontmatter(data: Dict[str, Any]) -> Frontmatter:
    resolved_date = to_date(data.get("date")) or EPOCH
    modified = to_date(data.get("modified")) or resolved_date

    title = data.get("title")
    description = data.get("description")

    return Frontmatter(
        title="" if title is None else str(title),
        description=str(description) if description else "",
        date=resolved_date,
        modified=modified,
        published=bool(data.get("published")),
        tags=as_string_list(data.get("tags")),
    )


def extract_frontmatter(text: str, path: Union[str, Path] = "<string>") -> Frontmatter:
    """Parse and normalize the metadata block of a content document."""
    data, _ = split_frontmatter(text, path)
    return normalize_frontmatter(data)
