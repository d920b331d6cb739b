"""Resolver that asks TMDB for the closest show name.

A TMDB match is only ever a suggestion: its certainty is pinned low so that a
human confirms it before anything is uploaded under that name.
"""

import logging
import re
from typing import Optional

import httpx

from showsync.metadata.clients.tmdb import TMDBClient
from showsync.models.core import ResolutionResult
from showsync.resolvers.base import ShowResolver

logger = logging.getLogger(__name__)

TMDB_CERTAINTY = 0.1

_TRAILING_YEAR_RE = re.compile(r"\([0-9]+\)$")


def strip_year(name: str) -> str:
    """Drop a trailing ``(2010)`` style suffix.

    TMDB returns nothing for ``"Show (2010)"`` even when the year is right.
    """
    return _TRAILING_YEAR_RE.sub("", name).strip()


def sanitise_name(name: str) -> str:
    """Replace characters that would break a path with spaces."""
    return name.replace("/", " ").replace("\\", " ")


class TMDBResolver(ShowResolver):
    """Resolve a show name through TMDB's TV search.

    Transport, HTTP and response-shape failures degrade to None so that a down
    metadata service lowers resolution quality without stopping the run.
    """

    def __init__(self, client: TMDBClient) -> None:
        self.client = client

    def resolve(self, name: str) -> Optional[ResolutionResult]:
        query = strip_year(name)
        try:
            match = self.client.first_tv_match(query)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("TMDB lookup for %r failed: %s", query, e)
            return None
        if match is None:
            return None
        return ResolutionResult(sanitise_name(match), TMDB_CERTAINTY)
