"""
jsonio.py - Reading and writing generated JSON artifacts
"""

import json
from pathlib import Path
from typing import Any, Optional


def format_json(value: Any) -> str:
    """Two-space indentation, UTF-8 kept as-is, trailing newline."""
    return json.dumps(value, indent=2, ensure_ascii=False) + "\n"


def write_formatted_json(path: Path, value: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_json(value), encoding="utf-8")


def read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_existing(path: Path) -> Optional[Any]:
    """
    Load a previously written artifact.

    A missing file means there is nothing to compare against and returns
    None; every other error (permissions, bad JSON) propagates.
    """
    try:
        return read_json(path)
    except FileNotFoundError:
        return None
