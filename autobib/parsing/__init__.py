"""Backend-specific payload parsers."""

from __future__ import annotations

from typing import List

from autobib.core.models import BackendKind, RawPayload, RawRecord

from .dblp_xml import parse_dblp_xml
from .scholar_html import parse_scholar_html


def parse_payload(payload: RawPayload) -> List[RawRecord]:
    """Parse ``payload`` with the strategy matching the backend that produced it."""

    if payload.backend is BackendKind.DBLP:
        return list(parse_dblp_xml(payload.body))
    return list(parse_scholar_html(payload.body))


__all__ = ["parse_dblp_xml", "parse_payload", "parse_scholar_html"]
