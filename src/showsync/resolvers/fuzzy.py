"""Fuzzy show resolver for showsync.

Uses the Jaro similarity from rapidfuzz to map sloppy folder names such as
``"all my circuits (2011)"`` onto known show names.
"""

from typing import Callable, Iterable, Optional

from rapidfuzz.distance import Jaro

from showsync.models.core import ResolutionResult
from showsync.resolvers.base import ShowResolver

SIM_THRESHOLD_PERFECT = 0.9
SIM_THRESHOLD_GOOD = 0.7

Scorer = Callable[[str, str], float]


def jaro_similarity(a: str, b: str) -> float:
    """Return the Jaro similarity of two strings in [0, 1]."""
    return Jaro.similarity(a, b)


class FuzzyResolver(ShowResolver):
    """Resolve a name to the most similar known show.

    Known shows are scanned in the order given. The first one scoring at least
    ``perfect`` wins outright; otherwise the best scorer is returned if it
    reaches ``good``. On equal best scores the earlier show is kept.

    Args:
        known_shows: Canonical show names, in a stable order.
        scorer: Similarity function returning a value in [0, 1].
        perfect: Score that short-circuits the search.
        good: Minimum score for the best candidate to be accepted.
    """

    def __init__(
        self,
        known_shows: Iterable[str],
        *,
        scorer: Scorer = jaro_similarity,
        perfect: float = SIM_THRESHOLD_PERFECT,
        good: float = SIM_THRESHOLD_GOOD,
    ) -> None:
        self.known_shows = list(known_shows)
        self.scorer = scorer
        self.perfect = perfect
        self.good = good

    def resolve(self, name: str) -> Optional[ResolutionResult]:
        best_score = 0.0
        best_match: Optional[str] = None

        for known in self.known_shows:
            score = self.scorer(name, known)
            if score >= self.perfect:
                return ResolutionResult(known, score)
            if score > best_score:
                best_score = score
                best_match = known

        if best_match is not None and best_score >= self.good:
            return ResolutionResult(best_match, best_score)
        return None
