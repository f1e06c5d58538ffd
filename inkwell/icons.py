#!/usr/bin/env python3
"""
icons.py - Centralized icon definitions for Inkwell CLI output

Usage:
    from inkwell.icons import SUCCESS, ERROR
    print(f"{SUCCESS} Done!")

All unicode characters are defined here once. Never edit unicode
characters in other files - import from this module instead.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Icons:
    """
    Centralized icon definitions.

    Categories:
    - Status: SUCCESS, ERROR, WARNING, INFO, SKIP
    - Content: POST, COURSE, ASSET, LINK
    - Misc: DEBUG, CRITICAL
    """

    # Status
    SUCCESS: str = "✅"
    ERROR: str = "❌"
    WARNING: str = "⚠️"
    INFO: str = "ℹ️"
    SKIP: str = "⏭️"

    # Content
    POST: str = "📝"
    COURSE: str = "📚"
    ASSET: str = "🖼"
    LINK: str = "🔗"

    # Misc
    DEBUG: str = "🔍"
    CRITICAL: str = "💥"


# Global singleton instance
icons = Icons()

SUCCESS = icons.SUCCESS
ERROR = icons.ERROR
WARNING = icons.WARNING
INFO = icons.INFO
SKIP = icons.SKIP
POST = icons.POST
COURSE = icons.COURSE
ASSET = icons.ASSET
LINK = icons.LINK
