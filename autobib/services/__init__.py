"""Service layer for the autobib package."""

from .citation_service import CitationSynthesizer, citation_key, placeholder_entry
from .normalize_service import RecordNormalizer
from .ranking_service import PresentationRanker
from .search_service import CitationSink, ProgressReporter, PublicationSearchService, Selector

__all__ = [
    "CitationSink",
    "CitationSynthesizer",
    "ProgressReporter",
    "PresentationRanker",
    "PublicationSearchService",
    "RecordNormalizer",
    "Selector",
    "citation_key",
    "placeholder_entry",
]
