"""
Inkwell - Content pipeline for a markdown-driven static site

This package turns a repository of markdown writing posts and course
lessons into the JSON manifests and site index the site build consumes,
and checks content frontmatter, links and images before publishing.
"""

__version__ = "1.0.0"
__author__ = "Dale Chapman"
__license__ = "MIT"

from inkwell.errors import (
    InkwellError,
    ConfigurationError,
    PreconditionError,
    ManifestError,
    FrontmatterError,
)

__all__ = [
    "InkwellError",
    "ConfigurationError",
    "PreconditionError",
    "ManifestError",
    "FrontmatterError",
]
