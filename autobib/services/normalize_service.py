from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from autobib.core.identifiers import is_valid_year, strip_numeric_suffix
from autobib.core.models import DblpHit, Publication, RawRecord, ScholarResult

logger = logging.getLogger(__name__)


class RecordNormalizer:
    """Turn backend-specific raw records into canonical :class:`Publication` objects.

    Every string is trimmed and DBLP disambiguation numbers are removed from
    author names. Records left without a title, an author or a four-digit year
    are dropped here so that later stages only see canonical publications.
    """

    def normalize(self, raw_records: Iterable[RawRecord]) -> List[Publication]:
        publications: List[Publication] = []
        for record in raw_records:
            publication = self.normalize_record(record)
            if publication is None:
                logger.debug("Dropping record that fails publication invariants: %r", record)
                continue
            publications.append(publication)
        return publications

    def normalize_record(self, record: RawRecord) -> Optional[Publication]:
        if isinstance(record, DblpHit):
            pages, doi, kind = record.pages, record.doi, record.type
        elif isinstance(record, ScholarResult):
            # Scholar exposes no DOI; the citation-count link stands in for one.
            pages, doi, kind = "", record.citations_href, ""
        else:
            raise TypeError(f"Unsupported raw record type: {type(record).__name__}")

        title = (record.title or "").strip()
        year = (record.year or "").strip()
        authors = self.clean_authors(record.authors or [])
        if not title or not authors or not is_valid_year(year):
            return None

        return Publication(
            title=title,
            authors=authors,
            year=year,
            venue=(record.venue or "").strip(),
            pages=(pages or "").strip(),
            doi=(doi or "").strip(),
            type=(kind or "").strip(),
        )

    @staticmethod
    def clean_authors(authors: Iterable[str]) -> List[str]:
        cleaned: List[str] = []
        for author in authors:
            name = strip_numeric_suffix(" ".join(author.split()))
            if name:
                cleaned.append(name)
        return cleaned
