"""Show resolvers: map local folder names to canonical remote show names.

- ExactResolver: names the remote already has (certainty 1.0).
- FuzzyResolver: Jaro similarity against the remote names.
- TMDBResolver: TMDB title search, a low-certainty suggestion.
- ChainResolver: first match wins, in the order given.
"""

from showsync.resolvers.base import ShowResolver
from showsync.resolvers.chain import ChainResolver
from showsync.resolvers.exact import ExactResolver
from showsync.resolvers.factory import build_resolver
from showsync.resolvers.fuzzy import FuzzyResolver
from showsync.resolvers.tmdb import TMDBResolver

__all__ = [
    "ChainResolver",
    "ExactResolver",
    "FuzzyResolver",
    "ShowResolver",
    "TMDBResolver",
    "build_resolver",
]
