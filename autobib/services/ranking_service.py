from __future__ import annotations

import itertools
from typing import Dict, Iterable, List, Sequence, Tuple

from autobib.core.identifiers import abbreviate_authors
from autobib.core.models import BackendKind, DisplayItem, Publication, SearchResults

CONFERENCE_CATEGORY = "Conference and Workshop Papers"
JOURNAL_CATEGORY = "Journal Articles"
OTHER_CATEGORY = "Other Articles"

# Tested in order against the lowercased type tag; unmatched types fall into OTHER_CATEGORY.
_CATEGORY_RULES: Tuple[Tuple[str, str], ...] = (
    ("conference", CONFERENCE_CATEGORY),
    ("journal", JOURNAL_CATEGORY),
)
CATEGORY_ORDER: Tuple[str, ...] = (CONFERENCE_CATEGORY, JOURNAL_CATEGORY, OTHER_CATEGORY)

ELLIPSIS = "..."

# Refs are unique across every SearchResults built in this process.
_REFS = itertools.count()


class PresentationRanker:
    """Group publications by type and build the flat list shown to the user.

    Categories always appear in :data:`CATEGORY_ORDER`. Inside a category,
    newer publications come first and equal years are ordered by title using
    plain (case-sensitive) string comparison. Long titles and venues are
    shortened for display only.
    """

    def __init__(
        self,
        *,
        truncate_threshold: int = 75,
        title_display_length: int = 60,
        venue_display_length: int = 15,
        author_display_limit: int = 80,
    ) -> None:
        self.truncate_threshold = truncate_threshold
        self.title_display_length = title_display_length
        self.venue_display_length = venue_display_length
        self.author_display_limit = author_display_limit

    @staticmethod
    def categorize(publication: Publication) -> str:
        kind = (publication.type or "").lower()
        for needle, category in _CATEGORY_RULES:
            if needle in kind:
                return category
        return OTHER_CATEGORY

    @staticmethod
    def sort_key(entry: Tuple[int, Publication]) -> Tuple[int, str]:
        _, publication = entry
        return (-int(publication.year), publication.title)

    def partition(
        self, entries: Sequence[Tuple[int, Publication]]
    ) -> Dict[str, List[Tuple[int, Publication]]]:
        """Return ``ref``/publication pairs per category, each sorted for display."""

        buckets: Dict[str, List[Tuple[int, Publication]]] = {name: [] for name in CATEGORY_ORDER}
        for ref, publication in entries:
            buckets[self.categorize(publication)].append((ref, publication))
        for bucket in buckets.values():
            bucket.sort(key=self.sort_key)
        return buckets

    def rank(
        self,
        publications: Iterable[Publication],
        *,
        query: str = "",
        backend: BackendKind = BackendKind.DBLP,
    ) -> SearchResults:
        ordered = [(next(_REFS), publication) for publication in publications]
        results = SearchResults(query=query, backend=backend, publications=dict(ordered))

        buckets = self.partition(ordered)
        for category in CATEGORY_ORDER:
            entries = buckets[category]
            if not entries:
                continue
            results.items.append(DisplayItem(label=category, separator=True))
            results.items.extend(self.display_item(ref, publication) for ref, publication in entries)
        return results

    def display_item(self, ref: int, publication: Publication) -> DisplayItem:
        title = publication.title
        venue = publication.venue
        if len(title) + len(venue) > self.truncate_threshold:
            title = title[: self.title_display_length] + ELLIPSIS
            venue = venue[: self.venue_display_length]

        authors = abbreviate_authors(publication.authors, limit=self.author_display_limit)
        return DisplayItem(
            label=title,
            description=f"{venue} {publication.year}".strip(),
            detail=", ".join(authors),
            ref=ref,
        )
