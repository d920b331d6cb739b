"""The remote TV library: one folder per show, episode files inside."""

import logging
from pathlib import PurePosixPath
from typing import Iterable, List, Optional

from showsync.models.core import Episode, RemoteInventory
from showsync.remote.session import RemoteSession
from showsync.remote.shell import TEMP_GLOB
from showsync.remote.transfer import ProgressReporter, upload_file

logger = logging.getLogger(__name__)


class RemoteLibrary:
    """Read and write the remote library rooted at *tv_dir*."""

    def __init__(self, session: RemoteSession, tv_dir: str) -> None:
        self.session = session
        self.root = PurePosixPath(tv_dir)

    def list_shows(self) -> List[str]:
        """Return the show folder names in the library root."""
        shows = self.session.list_names(self.root)
        logger.info("Found %d TV shows on the remote", len(shows))
        return shows

    def list_episodes(self, show: str) -> List[str]:
        """Return the file names inside one show folder."""
        return self.session.list_names(self.root / show)

    def inventory(
        self, shows: Iterable[str], known_shows: Optional[Iterable[str]] = None
    ) -> RemoteInventory:
        """Map each show in *shows* that exists remotely to its file names.

        Args:
            shows: Canonical show names referenced by the local scan.
            known_shows: Remote show folders, if already listed. Listed again
                when omitted.
        """
        existing = set(known_shows if known_shows is not None else self.list_shows())
        inventory: RemoteInventory = {}
        for show in sorted(set(shows)):
            if show not in existing:
                logger.debug("%s is not on the remote yet", show)
                continue
            inventory[show] = set(self.list_episodes(show))
        return inventory

    def wipe_temp(self) -> None:
        """Delete temp files left behind by interrupted uploads."""
        logger.info("Removing stale temp files under %s", self.root)
        self.session.delete_matching(self.root, TEMP_GLOB)

    def upload(self, episode: Episode, progress: Optional[ProgressReporter] = None) -> None:
        """Upload one episode to its place in the library."""
        upload_file(
            self.session,
            episode.local_path,
            self.root / episode.remote_subpath(),
            progress,
        )
