"""Resolver accepting only show names the remote library already has."""

from typing import Iterable, Optional

from showsync.models.core import ResolutionResult
from showsync.resolvers.base import ShowResolver


class ExactResolver(ShowResolver):
    """Membership test against the known shows; certainty is always 1.0."""

    def __init__(self, known_shows: Iterable[str]) -> None:
        self.known_shows = frozenset(known_shows)

    def resolve(self, name: str) -> Optional[ResolutionResult]:
        if name in self.known_shows:
            return ResolutionResult(name, 1.0)
        return None
