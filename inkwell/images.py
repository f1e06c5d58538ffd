#!/usr/bin/env python3

# Inkwell
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
images.py - Check that every referenced image can be processed

For each raster image referenced from writing posts and course lessons
(markdown images and raw <img src="..."> tags):
1. The file must exist
2. Its metadata must be readable by the image library
3. Unless it is already an optimized format (webp, avif, gif), it must
   survive a small WEBP and AVIF transcode

The transcodes are in-memory compatibility probes; nothing is written.
Each image is checked once, however many files reference it.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import unquote

import click
from bs4 import BeautifulSoup
from PIL import Image

from inkwell.config_utils import PathsConfig
from inkwell.errors import FrontmatterError
from inkwell.icons import ASSET, ERROR, SUCCESS
from inkwell.mdast import parse, walk
from inkwell.metadata import read_document
from inkwell.urls import decode_uri, is_external_reference, strip_query_hash
from inkwell.validate import Issue


logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".avif", ".gif"}
NON_TRANSFORMED_EXTENSIONS = {".webp", ".avif", ".gif"}

PROBE_WIDTH = 64
PROBE_FORMATS = (("webp", 70), ("avif", 50))


class ImageProbe(Protocol):
    """What the checker needs from an image library."""

    def read_metadata(self, path: Path) -> Dict[str, Any]:
        ...

    def transcode(self, path: Path, width: int, format: str, quality: int) -> bytes:
        ...


class PillowProbe:
    """ImageProbe backed by Pillow."""

    def read_metadata(self, path: Path) -> Dict[str, Any]:
        with Image.open(path) as img:
            return {
                "format": img.format,
                "width": img.width,
                "height": img.height,
                "mode": img.mode,
            }

    def transcode(self, path: Path, width: int, format: str, quality: int) -> bytes:
        with Image.open(path) as img:
            img.load()
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA")
            # Never enlarge
            if img.width > width:
                height = max(1, round(img.height * width / img.width))
                img = img.resize((width, height))

            buffer = io.BytesIO()
            img.save(buffer, format=format.upper(), quality=quality)
            return buffer.getvalue()


@dataclass
class ImageSource:
    markdown_file: Path
    image_url: str
    resolved_file: Path


@dataclass
class ImageCheckResult:
    sources: List[ImageSource] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.issues) == 0


def collect_image_urls(markdown: str) -> List[str]:
    """Image URLs from markdown images and <img> tags in raw HTML, deduplicated."""
    tree = parse(markdown)
    urls: List[str] = []

    def add(url: Optional[str]):
        url = (url or "").strip()
        if url and url not in urls:
            urls.append(url)

    for node in walk(tree, "image"):
        add(node.url)

    for node in walk(tree, "html"):
        soup = BeautifulSoup(node.value or "", "html.parser")
        for img in soup.find_all("img", src=True):
            add(decode_uri(img["src"]))

    return urls


class ImageCompatibilityChecker:
    """Resolve image references in content and probe each image once"""

    def __init__(self, config: PathsConfig, probe: Optional[ImageProbe] = None):
        self.config = config
        self.probe = probe or PillowProbe()

    def markdown_files(self) -> List[Path]:
        files = []
        for root in (self.config.writing_root, self.config.courses_root):
            if root.is_dir():
                files.extend(sorted(p.resolve() for p in root.rglob("*.md") if p.is_file()))
        return files

    def resolve_image_path(self, markdown_file: Path, image_url: str) -> Path:
        if image_url.startswith("/"):
            return (self.config.static_root / image_url[1:]).resolve()
        return (markdown_file.parent / image_url).resolve()

    def collect_sources(self, result: ImageCheckResult) -> List[ImageSource]:
        sources: Dict[Path, ImageSource] = {}

        for markdown_file in self.markdown_files():
            try:
                doc = read_document(markdown_file)
            except FrontmatterError as e:
                result.issues.append(Issue(self.config.to_repo_path(markdown_file), f"Invalid YAML frontmatter: {e.cause}"))
                continue
            except (OSError, UnicodeDecodeError) as e:
                result.issues.append(Issue(self.config.to_repo_path(markdown_file), f"Could not read file ({e})."))
                continue

            for raw_url in collect_image_urls(doc.content):
                if is_external_reference(raw_url):
                    continue

                normalized = unquote(strip_query_hash(raw_url).strip())
                if not normalized:
                    continue

                if Path(normalized).suffix.lower() not in IMAGE_EXTENSIONS:
                    continue

                resolved = self.resolve_image_path(markdown_file, normalized)
                # First referencing file wins
                if resolved not in sources:
                    sources[resolved] = ImageSource(markdown_file, normalized, resolved)

        return list(sources.values())

    def check(self) -> ImageCheckResult:
        result = ImageCheckResult()
        result.sources = self.collect_sources(result)

        for source in result.sources:
            self._check_source(source, result)

        logger.debug("Probed %d images, %d issues", len(result.sources), len(result.issues), extra={"icon": ASSET})
        return result

    def _check_source(self, source: ImageSource, result: ImageCheckResult):
        to_repo = self.config.to_repo_path

        if not source.resolved_file.is_file():
            result.issues.append(Issue(
                to_repo(source.markdown_file),
                f"Missing image '{source.image_url}' ({to_repo(source.resolved_file)}).",
            ))
            return

        label = to_repo(source.resolved_file)

        try:
            self.probe.read_metadata(source.resolved_file)
        except Exception as e:
            result.issues.append(Issue(label, f"Image metadata read failed: {e}"))
            return

        if source.resolved_file.suffix.lower() in NON_TRANSFORMED_EXTENSIONS:
            return

        try:
            for fmt, quality in PROBE_FORMATS:
                self.probe.transcode(source.resolved_file, PROBE_WIDTH, fmt, quality)
        except Exception as e:
            result.issues.append(Issue(label, f"Image transform probe failed: {e}"))


def check_images(config: PathsConfig, probe: Optional[ImageProbe] = None) -> ImageCheckResult:
    return ImageCompatibilityChecker(config, probe).check()


def print_results(result: ImageCheckResult):
    if result.is_valid:
        click.echo(f"{SUCCESS} Image compatibility validation passed for {len(result.sources)} referenced assets.")
        return

    click.echo(f"{ERROR} Image compatibility validation failed:", err=True)
    for issue in result.issues:
        click.echo(str(issue), err=True)
