"""Utilities for extracting publication hits from DBLP search API XML.

A DBLP response looks like::

    <result>
      <hits total="1" computed="1" sent="1" first="0">
        <hit score="1" id="1">
          <info>
            <authors><author pid="...">Ashish Vaswani 0001</author>...</authors>
            <title>Attention is All you Need.</title>
            <venue>NIPS</venue>
            <pages>5998-6008</pages>
            <year>2017</year>
            <type>Conference and Workshop Papers</type>
            <doi>...</doi>
          </info>
        </hit>
      </hits>
    </result>
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lxml import etree

from autobib.core.models import DblpHit
from autobib.exceptions import PayloadMalformed

logger = logging.getLogger(__name__)


def _get_text(element: etree._Element | None) -> str:
    """Return the full text content of ``element`` or ``""`` when missing."""
    if element is None:
        return ""
    return "".join(element.itertext())


def _optional_field(info: etree._Element, name: str) -> str:
    return _get_text(info.find(name))


def _hit_count(hits: etree._Element) -> Optional[int]:
    total = hits.get("total")
    if total is None:
        return None
    try:
        return int(total)
    except ValueError:
        return None


def _parse_hit(hit: etree._Element) -> Optional[DblpHit]:
    info = hit.find("info")
    if info is None:
        return None

    title = _get_text(info.find("title"))
    year = _get_text(info.find("year"))
    authors = [
        _get_text(author)
        for author in info.findall("authors/author")
        if _get_text(author).strip()
    ]
    if not title.strip() or not year.strip() or not authors:
        return None

    return DblpHit(
        title=title,
        authors=authors,
        year=year,
        venue=_optional_field(info, "venue"),
        pages=_optional_field(info, "pages"),
        doi=_optional_field(info, "doi"),
        type=_optional_field(info, "type"),
    )


def parse_dblp_xml(xml: str) -> List[DblpHit]:
    """Parse a DBLP search response into hits, preserving document order.

    An absent ``hits`` element or a hit count of zero is reported as an empty
    list. Hits missing a title, an author or a year are skipped.

    Raises:
        PayloadMalformed: If ``xml`` is not well-formed.
    """

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml.encode("utf-8"), parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise PayloadMalformed(f"Invalid DBLP XML: {exc}") from exc

    hits = root if root.tag == "hits" else root.find("hits")
    if hits is None or _hit_count(hits) == 0:
        logger.info("DBLP reported no results")
        return []

    hit_elements = hits.findall("hit")
    if not hit_elements:
        logger.info("DBLP reported no results")
        return []

    parsed: List[DblpHit] = []
    for hit in hit_elements:
        record = _parse_hit(hit)
        if record is None:
            logger.debug("Skipping DBLP hit id=%s with missing required fields", hit.get("id"))
            continue
        parsed.append(record)
    return parsed
