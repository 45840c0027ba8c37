"""Look up papers on DBLP or Google Scholar and turn them into BibTeX entries."""

from __future__ import annotations

from typing import Optional

from .config import AutobibConfig
from .clients.source import SourceClient
from .core.models import BackendKind, DisplayItem, Publication, SearchResults
from .exceptions import AutobibError, ConfigError, PayloadMalformed, SourceUnavailable
from .services.citation_service import CitationSynthesizer
from .services.search_service import PublicationSearchService

_default_config: Optional[AutobibConfig] = None
_default_service: Optional[PublicationSearchService] = None


def build_service(config: AutobibConfig) -> PublicationSearchService:
    """Wire a :class:`PublicationSearchService` from ``config``."""

    client = SourceClient(session=config.build_session(), **config.client_kwargs())
    return PublicationSearchService(
        client=client,
        synthesizer=CitationSynthesizer(entry_type=config.entry_type),
    )


def get_default_config() -> AutobibConfig:
    global _default_config
    if _default_config is None:
        _default_config = AutobibConfig()
    return _default_config


def get_default_service() -> PublicationSearchService:
    """Return the default service instance, creating it lazily."""

    global _default_service
    if _default_service is None:
        _default_service = build_service(get_default_config())
    return _default_service


def search_publications(query: str, backend: Optional[BackendKind] = None) -> SearchResults:
    """Search ``backend`` (the configured database by default) for ``query``."""

    chosen = backend or get_default_config().publication_database
    return get_default_service().search(query, chosen)


def bibtex_for(query: str, backend: Optional[BackendKind] = None) -> Optional[str]:
    """Return the BibTeX entry of the top-ranked hit for ``query``, if any."""

    results = search_publications(query, backend)
    ranked = results.ranked_publications()
    if not ranked:
        return None
    return get_default_service().synthesizer.synthesize(ranked[0])


__all__ = [
    "AutobibConfig",
    "AutobibError",
    "BackendKind",
    "ConfigError",
    "DisplayItem",
    "PayloadMalformed",
    "Publication",
    "PublicationSearchService",
    "SearchResults",
    "SourceUnavailable",
    "bibtex_for",
    "build_service",
    "get_default_config",
    "get_default_service",
    "search_publications",
]
