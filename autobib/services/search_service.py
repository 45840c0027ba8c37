from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from autobib.clients.source import SourceClient
from autobib.core.matching import TitleMatcher
from autobib.core.models import BackendKind, DisplayItem, Publication, SearchResults
from autobib.exceptions import PayloadMalformed, SourceUnavailable
from autobib.parsing import parse_payload
from autobib.services.citation_service import CitationSynthesizer, placeholder_entry
from autobib.services.normalize_service import RecordNormalizer
from autobib.services.ranking_service import PresentationRanker

logger = logging.getLogger(__name__)


class Selector(Protocol):
    def __call__(self, items: Sequence[DisplayItem]) -> Optional[Sequence[DisplayItem]]: ...


class CitationSink(Protocol):
    def insert(self, text: str) -> None: ...

    def open_document(self, text: str) -> None: ...


class ProgressReporter(Protocol):
    def report(self, message: str, increment: float) -> None: ...


class PublicationSearchService:
    """Run search sessions from a query string to BibTeX output.

    A session fetches one payload from the backend it is given, parses,
    normalizes and ranks it, then hands the display items to a selector and
    writes an entry per selected item to the sink. Fetch and parse failures
    propagate to the caller; nothing is written in that case.

    Batch sessions (:meth:`process_paper_list`) resolve one paper at a time and
    replace papers that cannot be resolved with a placeholder comment.
    """

    def __init__(
        self,
        *,
        client: Optional[SourceClient] = None,
        normalizer: Optional[RecordNormalizer] = None,
        ranker: Optional[PresentationRanker] = None,
        synthesizer: Optional[CitationSynthesizer] = None,
        title_matcher: Optional[TitleMatcher] = None,
        notify: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.client = client or SourceClient()
        self.normalizer = normalizer or RecordNormalizer()
        self.ranker = ranker or PresentationRanker()
        self.synthesizer = synthesizer or CitationSynthesizer()
        self.title_matcher = title_matcher or TitleMatcher()
        self.notify = notify

    def search(self, query: str, backend: BackendKind) -> SearchResults:
        payload = self.client.fetch(query, backend)
        raw_records = parse_payload(payload)
        publications = self.normalizer.normalize(raw_records)
        logger.debug(
            "Query %r on %s: %d raw records, %d publications",
            query,
            payload.backend.value,
            len(raw_records),
            len(publications),
        )
        return self.ranker.rank(publications, query=query, backend=payload.backend)

    def run(
        self,
        query: str,
        backend: BackendKind,
        select: Selector,
        sink: CitationSink,
    ) -> List[str]:
        """Search, let ``select`` choose items and insert their entries into ``sink``.

        Returns the inserted entries in selection order.
        """

        results = self.search(query, backend)
        if not results:
            self._notice(f"No results found for search query: {query}")
            return []

        selections = select(results.items)
        if not selections:
            return []

        blocks: List[str] = []
        for selection in selections:
            if selection.separator:
                continue
            publication = results.resolve(selection)
            block = self.synthesizer.synthesize(publication)
            sink.insert(block)
            blocks.append(block)
        return blocks

    def best_match(self, paper: str, results: SearchResults) -> Optional[Publication]:
        ranked = results.ranked_publications()
        if not ranked:
            return None
        return self.title_matcher.pick_best(paper, ranked) or ranked[0]

    def resolve_paper(self, paper: str, backend: BackendKind) -> str:
        """Return the entry for the best hit of ``paper`` or a placeholder."""

        try:
            results = self.search(paper, backend)
        except (SourceUnavailable, PayloadMalformed) as exc:
            logger.warning("Lookup failed for paper %r: %s", paper, exc)
            return placeholder_entry(paper)

        publication = self.best_match(paper, results)
        if publication is None:
            logger.info("No results for paper %r", paper)
            return placeholder_entry(paper)
        return self.synthesizer.synthesize(publication)

    def process_paper_list(
        self,
        papers: Iterable[str],
        backend: BackendKind,
        sink: CitationSink,
        progress: Optional[ProgressReporter] = None,
    ) -> List[str]:
        """Resolve each non-blank paper line and open one document with all entries."""

        queue = [paper.strip() for paper in papers if paper.strip()]
        if not queue:
            self._notice("Paper list is empty")
            return []

        increment = 100.0 / len(queue)
        blocks: List[str] = []
        for position, paper in enumerate(queue, start=1):
            blocks.append(self.resolve_paper(paper, backend))
            logger.info("Processed paper %d/%d: %s", position, len(queue), paper)
            if progress is not None:
                progress.report(f"Processed {position}/{len(queue)}: {paper}", increment)

        sink.open_document("".join(blocks))
        return blocks

    def _notice(self, message: str) -> None:
        logger.info(message)
        if self.notify is not None:
            self.notify(message)
