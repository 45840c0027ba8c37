"""Token-based title matching used to pick the best hit for a paper line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Set

from autobib.core.identifiers import normalize_title
from autobib.core.models import Publication


def title_tokens(title: str | None) -> Set[str]:
    """Tokenize a title into a normalized set of lowercase terms."""

    if not title:
        return set()

    normalized = normalize_title(title)
    return {token for token in re.split(r"[\W_]+", normalized) if token}


def jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    """Compute the Jaccard similarity between two collections of tokens."""

    set_a = set(a)
    set_b = set(b)

    if not set_a and not set_b:
        return 1.0

    union = set_a | set_b
    if not union:
        return 0.0

    return len(set_a & set_b) / len(union)


@dataclass
class TitleMatchResult:
    score: float
    publication: Publication


class TitleMatcher:
    """Pick the candidate whose title overlaps most with a free-text paper line.

    Paper lines often carry author names or years next to the title, so
    candidates are scored on the share of their own title tokens found in the
    query, averaged with the plain Jaccard similarity.
    """

    def __init__(self, threshold: float = 0.5) -> None:
        self.threshold = threshold

    def score(self, query: str, candidate_title: str) -> float:
        query_set = title_tokens(query)
        candidate_set = title_tokens(candidate_title)
        if not query_set or not candidate_set:
            return 0.0
        coverage = len(query_set & candidate_set) / len(candidate_set)
        return (coverage + jaccard(query_set, candidate_set)) / 2

    def pick_best(self, query: str, candidates: Iterable[Publication]) -> Optional[Publication]:
        best_match: Optional[TitleMatchResult] = None
        for candidate in candidates:
            score = self.score(query, candidate.title)
            if score < self.threshold:
                continue
            if best_match is None or score > best_match.score:
                best_match = TitleMatchResult(score=score, publication=candidate)
        return best_match.publication if best_match else None
