"""Diff engine: choose which local episodes the remote library is missing."""

from typing import Iterable, List

from showsync.models.core import Episode, RemoteInventory


def diff_episodes(local: Iterable[Episode], remote: RemoteInventory) -> List[Episode]:
    """Filter local episodes down to those not yet present remotely.

    An episode is kept only if its show already has an entry in *remote* and
    that entry does not contain the episode's remote filename. Shows missing
    from *remote* are dropped entirely rather than uploaded as new folders.

    Args:
        local: Episodes found by the scanner.
        remote: Show name -> filenames already in the remote library.

    Returns:
        The sync set, sorted by show, season, episode and extension.
    """
    return sorted(
        ep
        for ep in local
        if ep.show_name in remote
        and ep.remote_filename() not in remote[ep.show_name]
    )
