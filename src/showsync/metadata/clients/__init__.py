"""Metadata provider clients."""

from showsync.metadata.clients.tmdb import TMDBClient

__all__ = ["TMDBClient"]
