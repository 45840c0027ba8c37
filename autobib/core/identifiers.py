from __future__ import annotations

import re
import unicodedata
from typing import List, Sequence

_NUMERIC_TOKEN = re.compile(r"[0-9]+")
_YEAR_PATTERN = re.compile(r"[0-9]{4}")

AUTHOR_DISPLAY_LIMIT = 80


def strip_numeric_suffix(name: str) -> str:
    """Remove trailing disambiguation numbers from an author name.

    DBLP appends homonym identifiers such as ``"Ashish Vaswani 0001"``. Trailing
    purely numeric tokens are dropped as long as at least one token remains, so
    single-token names pass through unchanged and repeated calls are no-ops.
    """

    tokens = name.split()
    if len(tokens) <= 1:
        return name
    while len(tokens) > 1 and _NUMERIC_TOKEN.fullmatch(tokens[-1]):
        tokens.pop()
    return " ".join(tokens)


def is_valid_year(year: str | None) -> bool:
    """Return ``True`` when ``year`` is exactly four ASCII digits."""

    if not year:
        return False
    return _YEAR_PATTERN.fullmatch(year) is not None


def abbreviate_name(name: str) -> str:
    """Render ``"Noam Shazeer"`` as ``"N. Shazeer"``."""

    tokens = name.split()
    if len(tokens) <= 1:
        return name
    return f"{tokens[0][0]}. {tokens[-1]}"


def abbreviate_authors(authors: Sequence[str], *, limit: int = AUTHOR_DISPLAY_LIMIT) -> List[str]:
    """Shorten all but the first author when the joined list is too long.

    The input is never modified; a new list is returned either way.
    """

    if len(", ".join(authors)) <= limit:
        return list(authors)
    if not authors:
        return []
    return [authors[0], *(abbreviate_name(author) for author in authors[1:])]


def normalize_title(title: str | None) -> str:
    """Normalize a title by collapsing whitespace and normalizing unicode."""

    if not title:
        return ""

    normalized = unicodedata.normalize("NFKC", title)
    collapsed = " ".join(normalized.split())
    return collapsed.lower()
