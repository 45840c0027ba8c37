"""Extraction of result blocks from Google Scholar search pages.

Each result block carries a title link and a byline of the form
``"J. Smith, A. Lee - ICML - 2020"``. The byline is split on dashes with
whitespace on both sides: the first segment holds the comma-separated authors,
the second the venue. Values are returned untrimmed;
:mod:`autobib.services.normalize_service` cleans them up.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from lxml import etree
from lxml import html as lxml_html

from autobib.core.models import ScholarResult

logger = logging.getLogger(__name__)

_YEAR_PATTERN = re.compile(r"\d{4}")
_CITATIONS_PREFIX = "/scholar?oi=bibs&hl=en&cites="
# Only a dash with whitespace on both sides separates fields; "J.-P." stays intact.
_BYLINE_SEPARATOR = re.compile(r"(?<=\s)-(?=\s)")


def _class_predicate(name: str) -> str:
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


_RESULT_BLOCKS = f"//*[{_class_predicate('gs_r')}]"
_TITLE_LINKS = f".//*[{_class_predicate('gs_rt')}]//a"
_BYLINES = f".//*[{_class_predicate('gs_a')}]"
_CITATION_LINKS = (
    f".//*[{_class_predicate('gs_ri')}]//a[starts-with(@href, '{_CITATIONS_PREFIX}')]/@href"
)


def _joined_text(elements: List[etree._Element]) -> str:
    return "".join(element.text_content() for element in elements)


def _parse_block(block: etree._Element) -> Optional[ScholarResult]:
    title = _joined_text(block.xpath(_TITLE_LINKS))
    byline = _joined_text(block.xpath(_BYLINES))

    segments = _BYLINE_SEPARATOR.split(byline)
    authors = segments[0].rstrip().split(",") if segments[0].strip() else []
    venue = segments[1] if len(segments) > 1 else ""

    year_match = _YEAR_PATTERN.search(byline)
    year = year_match.group(0) if year_match else ""

    if not title.strip() or not any(author.strip() for author in authors) or not year:
        return None

    hrefs = block.xpath(_CITATION_LINKS)
    return ScholarResult(
        title=title,
        authors=authors,
        venue=venue,
        year=year,
        citations_href=str(hrefs[0]) if hrefs else "",
    )


def parse_scholar_html(html: str) -> List[ScholarResult]:
    """Return every usable result block in ``html`` in document order.

    Blocks without a title, an author or a four-digit year are skipped. Markup
    that cannot be parsed at all yields an empty list.
    """

    if not html or not html.strip():
        return []

    try:
        root = lxml_html.fromstring(html)
    except (etree.ParserError, ValueError) as exc:
        logger.debug("Unparseable Google Scholar page: %s", exc)
        return []

    results: List[ScholarResult] = []
    for block in root.xpath(_RESULT_BLOCKS):
        result = _parse_block(block)
        if result is None:
            logger.debug("Skipping incomplete Google Scholar result block")
            continue
        results.append(result)
    return results
