"""
urls.py - Classifying and splitting URLs found in markdown
"""

import re
from enum import Enum
from urllib.parse import unquote


EXTERNAL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z+.-]*:")
QUERY_OR_HASH_RE = re.compile(r"[?#]")


class LinkKind(Enum):
    EXTERNAL = "external"
    SITE_ROOTED = "site-rooted"
    RELATIVE = "relative"


def is_external_url(url: str) -> bool:
    """Scheme-prefixed (``https:``, ``mailto:``, ``data:``...) or protocol-relative."""
    return url.startswith("//") or bool(EXTERNAL_SCHEME_RE.match(url))


def is_external_reference(url: str) -> bool:
    """Anything a content check should ignore, including empty and ``#anchor`` URLs."""
    return not url or url.startswith("#") or is_external_url(url)


def classify_url(url: str) -> LinkKind:
    if is_external_reference(url):
        return LinkKind.EXTERNAL
    if url.startswith("/"):
        return LinkKind.SITE_ROOTED
    return LinkKind.RELATIVE


def strip_query_hash(url: str) -> str:
    return QUERY_OR_HASH_RE.split(url, maxsplit=1)[0]


def split_url(url: str) -> tuple[str, str, str]:
    """Split into (path, query, hash); query and hash keep their markers."""
    hash_index = url.find("#")
    query_index = url.find("?")
    end = min(
        len(url) if hash_index == -1 else hash_index,
        len(url) if query_index == -1 else query_index,
    )
    path = url[:end]
    query = "" if query_index == -1 else url[query_index:(len(url) if hash_index == -1 else hash_index)]
    hash_ = "" if hash_index == -1 else url[hash_index:]
    return path, query, hash_


# Reserved characters kept percent-encoded: ; / ? : @ & = + $ , #
RESERVED_ESCAPE_RE = re.compile(r"%(2[346BCF]|3[ABDF]|40)", re.IGNORECASE)


def decode_uri(url: str) -> str:
    """Percent-decode ``url``, leaving escapes of reserved characters (``%23``, ``%3F``...) intact."""
    return unquote(RESERVED_ESCAPE_RE.sub(r"%25\1", url))
