"""Chain-of-responsibility over several show resolvers."""

import logging
from typing import Iterable, Optional

from showsync.models.core import ResolutionResult
from showsync.resolvers.base import ShowResolver

logger = logging.getLogger(__name__)


class ChainResolver(ShowResolver):
    """Try each resolver in order and return the first match.

    Order the resolvers cheapest and most trustworthy first; a network-backed
    resolver belongs at the end so it is only consulted when everything local
    has failed.
    """

    def __init__(self, resolvers: Iterable[ShowResolver]) -> None:
        self.resolvers = list(resolvers)

    def resolve(self, name: str) -> Optional[ResolutionResult]:
        for resolver in self.resolvers:
            result = resolver.resolve(name)
            if result is not None:
                logger.debug(
                    "%s resolved %r -> %r (%.2f)",
                    type(resolver).__name__,
                    name,
                    result.name,
                    result.certainty,
                )
                return result
        return None
