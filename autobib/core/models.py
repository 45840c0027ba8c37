from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class BackendKind(str, Enum):
    """Bibliographic source a search session targets."""

    DBLP = "DBLP"
    GOOGLE_SCHOLAR = "Google Scholar"

    @classmethod
    def _missing_(cls, value: object) -> Optional["BackendKind"]:
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace("_", " ")
        aliases = {
            "dblp": cls.DBLP,
            "google scholar": cls.GOOGLE_SCHOLAR,
            "scholar": cls.GOOGLE_SCHOLAR,
        }
        return aliases.get(key)

    @property
    def content_kind(self) -> str:
        return "xml" if self is BackendKind.DBLP else "html"


@dataclass(frozen=True)
class RawPayload:
    """Unparsed response body returned by a backend."""

    body: str
    backend: BackendKind

    @property
    def content_kind(self) -> str:
        return self.backend.content_kind


@dataclass
class ScholarResult:
    """Fields scraped from one Google Scholar result block.

    Values are kept exactly as they appear in the page; trimming happens during
    normalization.
    """

    title: str
    authors: List[str]
    venue: str
    year: str
    citations_href: str = ""


@dataclass
class DblpHit:
    """Fields read from one ``hit`` element of a DBLP search response."""

    title: str
    authors: List[str]
    year: str
    venue: str = ""
    pages: str = ""
    doi: str = ""
    type: str = ""


RawRecord = Union[ScholarResult, DblpHit]


@dataclass(frozen=True)
class Publication:
    """Canonical bibliographic record shared by ranking and citation output."""

    title: str
    authors: List[str]
    year: str
    venue: str = ""
    pages: str = ""
    doi: str = ""
    type: str = ""


@dataclass(frozen=True)
class DisplayItem:
    """Session-scoped projection of a publication for a selection list.

    ``ref`` identifies the originating publication inside the
    :class:`SearchResults` that built the item and is never reused by another
    one; separator items carry ``None``.
    """

    label: str
    description: str = ""
    detail: str = ""
    separator: bool = False
    ref: Optional[int] = None


@dataclass
class SearchResults:
    """Ranked display items together with the publications they point at."""

    query: str
    backend: BackendKind
    publications: Dict[int, Publication] = field(default_factory=dict)
    items: List[DisplayItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.publications)

    def selectable_items(self) -> List[DisplayItem]:
        return [item for item in self.items if not item.separator]

    def ranked_publications(self) -> List[Publication]:
        """Publications in display order."""

        return [self.publications[item.ref] for item in self.selectable_items() if item.ref is not None]

    def resolve(self, item: DisplayItem) -> Publication:
        """Return the publication ``item`` was built from.

        Raises:
            KeyError: If ``item`` is a separator or does not belong to this session.
        """

        if item.separator or item.ref is None:
            raise KeyError(f"Separator item {item.label!r} has no publication")
        publication = self.publications.get(item.ref)
        if publication is None or item not in self.items:
            raise KeyError(f"Unknown display item reference {item.ref}")
        return publication


__all__ = [
    "BackendKind",
    "DblpHit",
    "DisplayItem",
    "Publication",
    "RawPayload",
    "RawRecord",
    "ScholarResult",
    "SearchResults",
]
