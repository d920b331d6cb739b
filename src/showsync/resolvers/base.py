"""Base abstraction for show resolvers.

A resolver maps a raw local show-folder name onto a canonical show name known
to the remote library. Variants differ in cost and trustworthiness, and are
composed by :class:`showsync.resolvers.chain.ChainResolver`.
"""

from abc import ABC, abstractmethod
from typing import Optional

from showsync.models.core import ResolutionResult


class ShowResolver(ABC):
    """Abstract base class for all show resolvers.

    Not finding a match is a normal outcome and is reported as None, never as
    an exception.
    """

    @abstractmethod
    def resolve(self, name: str) -> Optional[ResolutionResult]:
        """Resolve a show name.

        Args:
            name: The raw local folder name.

        Returns:
            The canonical name and a certainty in [0, 1], or None.
        """
        raise NotImplementedError
