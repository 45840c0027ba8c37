"""Core data model and identifier helpers."""

from .identifiers import abbreviate_authors, is_valid_year, strip_numeric_suffix
from .models import (
    BackendKind,
    DblpHit,
    DisplayItem,
    Publication,
    RawPayload,
    RawRecord,
    ScholarResult,
    SearchResults,
)

__all__ = [
    "BackendKind",
    "DblpHit",
    "DisplayItem",
    "Publication",
    "RawPayload",
    "RawRecord",
    "ScholarResult",
    "SearchResults",
    "abbreviate_authors",
    "is_valid_year",
    "strip_numeric_suffix",
]
