"""BibTeX entry rendering for canonical publications."""

from __future__ import annotations

import re
from typing import List, Tuple

from autobib.core.models import Publication

ENTRY_TYPES = ("inproceedings", "article")

_VENUE_FIELDS = {
    "inproceedings": "booktitle",
    "article": "journal",
}

_UNESCAPED_BRACE = re.compile(r"(?<!\\)([{}])")


def _braces_balanced(value: str) -> bool:
    depth = 0
    for match in _UNESCAPED_BRACE.finditer(value):
        depth += 1 if match.group(1) == "{" else -1
        if depth < 0:
            return False
    return depth == 0


def escape_braces(value: str) -> str:
    """Escape unescaped braces when they do not pair up inside ``value``.

    Balanced groups such as ``{GPT}`` are BibTeX markup and are kept as is.

    >>> escape_braces("Sets {a, b")
    'Sets \\\\{a, b'
    """

    if _braces_balanced(value):
        return value
    return _UNESCAPED_BRACE.sub(r"\\\1", value)


def citation_key(publication: Publication) -> str:
    """Return the first author's last name in lowercase followed by the year.

    >>> citation_key(Publication(title="T", authors=["Ashish Vaswani"], year="2017"))
    'vaswani2017'
    """

    surname = publication.authors[0].split()[-1].lower()
    return f"{surname}{publication.year}"


def placeholder_entry(paper: str) -> str:
    """Comment block standing in for a paper that could not be resolved."""

    cleaned = " ".join(paper.split())
    return f"% autobib: no entry found for: {cleaned}\n\n"


class CitationSynthesizer:
    """Serialize publications into ``@inproceedings`` or ``@article`` entries."""

    def __init__(self, entry_type: str = "inproceedings") -> None:
        if entry_type not in ENTRY_TYPES:
            raise ValueError(f"entry_type must be one of {', '.join(ENTRY_TYPES)}")
        self.entry_type = entry_type

    def fields(self, publication: Publication) -> List[Tuple[str, str]]:
        fields = [
            ("title", publication.title),
            ("author", " and ".join(publication.authors)),
            ("year", publication.year),
        ]
        optional = (
            (_VENUE_FIELDS[self.entry_type], publication.venue),
            ("pages", publication.pages),
            ("doi", publication.doi),
        )
        fields.extend((name, value) for name, value in optional if value)
        return fields

    def synthesize(self, publication: Publication) -> str:
        lines = [f"@{self.entry_type}{{{citation_key(publication)},"]
        lines.extend(
            f"\t{name} = {{{escape_braces(value)}}}," for name, value in self.fields(publication)
        )
        lines.append("}")
        return "\n".join(lines) + "\n\n"
