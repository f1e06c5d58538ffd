"""
hashing.py - Size/mtime fingerprints for skip-if-unchanged regeneration

File contents are not read: a file's path, byte size and modification time
stand in for its contents. Callers sort paths before hashing so the result
does not depend on directory listing order.
"""

import hashlib
import os
from pathlib import Path
from typing import Iterable, Union


PathLike = Union[str, Path]


def file_signature(path: PathLike) -> str:
    """Return ``<path>:<size>:<mtime in ms>`` for a file."""
    st = os.stat(path)
    mtime_ms = st.st_mtime_ns / 1_000_000
    return f"{path}:{st.st_size}:{mtime_ms}"


def compute_hash(paths: Iterable[PathLike], prefix: Iterable[str] = ()) -> str:
    """SHA-256 hex digest over ``prefix`` parts then file signatures, joined by '|'."""
    parts = list(prefix) + [file_signature(p) for p in paths]
    return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()
