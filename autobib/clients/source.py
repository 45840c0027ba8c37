"""Client for the two supported bibliographic backends."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from autobib.clients.base import BaseHttpClient, ClientError
from autobib.core.models import BackendKind, RawPayload

logger = logging.getLogger(__name__)

SCHOLAR_BASE_URL = "https://scholar.google.com"
DBLP_BASE_URL = "https://dblp.org"


class ScholarClient(BaseHttpClient):
    """Fetches Google Scholar search result pages."""

    BASE_URL = SCHOLAR_BASE_URL

    def search(self, query: str) -> str:
        params: Dict[str, Any] = {"hl": "en", "as_sdt": "0,5", "q": query}
        response = self._request("GET", "/scholar", params=params)
        return response.text


class DblpClient(BaseHttpClient):
    """Fetches DBLP publication search results in XML form."""

    BASE_URL = DBLP_BASE_URL

    def search(self, query: str) -> str:
        params: Dict[str, Any] = {"q": query, "format": "xml"}
        response = self._request("GET", "/search/publ/api", params=params)
        return response.text


class SourceClient:
    """Dispatch a query to the backend chosen for the session.

    The client never decides which backend to use; callers pass it on every
    :meth:`fetch` call.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        scholar: Optional[ScholarClient] = None,
        dblp: Optional[DblpClient] = None,
        scholar_base_url: Optional[str] = None,
        dblp_base_url: Optional[str] = None,
    ) -> None:
        self.scholar = scholar or ScholarClient(
            session=session, base_url=scholar_base_url, timeout=timeout
        )
        self.dblp = dblp or DblpClient(session=session, base_url=dblp_base_url, timeout=timeout)

    def fetch(self, query: str, backend: BackendKind) -> RawPayload:
        """Return the raw response body for ``query`` from ``backend``.

        Raises:
            ValueError: If ``query`` is blank.
            SourceUnavailable: On transport failure or a non-2xx response.
        """

        if not query or not query.strip():
            raise ValueError("query must be a non-empty string")

        backend = BackendKind(backend)
        client = self.dblp if backend is BackendKind.DBLP else self.scholar
        logger.debug("Fetching %s results for query=%r", backend.value, query)
        try:
            body = client.search(query)
        except ClientError as exc:
            exc.backend = backend
            raise
        return RawPayload(body=body, backend=backend)
