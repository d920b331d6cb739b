"""Assemble the default resolver chain from configuration."""

import logging
from typing import Sequence

from showsync.metadata.clients.tmdb import TMDBClient
from showsync.metadata.settings import Settings
from showsync.models.config import TMDBConfig
from showsync.resolvers.base import ShowResolver
from showsync.resolvers.chain import ChainResolver
from showsync.resolvers.exact import ExactResolver
from showsync.resolvers.fuzzy import FuzzyResolver
from showsync.resolvers.tmdb import TMDBResolver

logger = logging.getLogger(__name__)


def build_resolver(
    known_shows: Sequence[str], tmdb: TMDBConfig | None = None
) -> ShowResolver:
    """Build the exact -> fuzzy -> TMDB resolver chain.

    TMDB is appended only when a token is available, either from *tmdb* or
    from ``TMDB_READ_ACCESS_TOKEN``.

    Args:
        known_shows: Show folders present in the remote library.
        tmdb: TMDB settings from the config file.

    Returns:
        A ChainResolver over the configured strategies.
    """
    resolvers: list[ShowResolver] = [
        ExactResolver(known_shows),
        FuzzyResolver(known_shows),
    ]

    tmdb = tmdb or TMDBConfig()
    token = tmdb.token or Settings().TMDB_READ_ACCESS_TOKEN
    if token:
        client = TMDBClient(
            token, protocol=tmdb.protocol, host=tmdb.host, timeout=tmdb.timeout
        )
        resolvers.append(TMDBResolver(client))
    else:
        logger.debug("No TMDB token configured; TMDB lookups disabled")

    return ChainResolver(resolvers)
