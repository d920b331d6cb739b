"""Local library scanner.

Walks a local TV library laid out as one folder per show with episode files
directly inside, and turns every file into an Episode.

The walk is exactly two levels deep:
- entries of the root that are not directories are ignored;
- entries of a show folder that are directories are ignored, never recursed.

Show folders are resolved to canonical names with a ShowResolver, files are
parsed with :func:`showsync.core.episode_parser.parse_episode`. Failures of
either are handled by the configured FailureAction: ``skip`` logs a warning
and drops the show (or just the file), ``abort`` stops the whole scan and
nothing collected so far is returned.
"""

import logging
from pathlib import Path
from typing import Collection, List, Sequence

from showsync.core.episode_parser import parse_episode
from showsync.errors import (
    BadPathError,
    BadShowError,
    ParseError,
    ScanAbortedError,
    ScanFatalError,
)
from showsync.models.core import Episode, FailureAction, ResolutionResult
from showsync.resolvers.base import ShowResolver

logger = logging.getLogger(__name__)


def _is_text(name: str) -> bool:
    """Return False for names the OS handed back with undecodable bytes."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _list_dir(path: Path) -> List[Path]:
    # Sorted so that scans, warnings and aborts are reproducible.
    return sorted(path.iterdir(), key=lambda p: p.name)


class LibraryScanner:
    """Scan a local library into Episodes.

    Args:
        resolver: Maps show-folder names onto canonical show names.
        allowed_exts: Lower-case extensions (no dot) accepted as episodes.
        on_failure: What to do when a show or file cannot be parsed.
    """

    def __init__(
        self,
        resolver: ShowResolver,
        allowed_exts: Collection[str],
        on_failure: FailureAction = FailureAction.SKIP,
    ) -> None:
        self.resolver = resolver
        self.allowed_exts = frozenset(ext.lower() for ext in allowed_exts)
        self.on_failure = on_failure

    def _fail(self, message: str, skip_what: str, error: ParseError) -> None:
        """Apply the failure policy: warn and return on skip, raise on abort."""
        if self.on_failure == FailureAction.ABORT:
            logger.error("%s: %s. Aborting!", message, error.description)
            raise ScanAbortedError() from error
        logger.warning("%s: %s. Skipping this %s.", message, error.description, skip_what)

    def _resolve_show(self, show_dir: Path) -> ResolutionResult | None:
        try:
            raw_show = show_dir.resolve(strict=True).name
        except OSError as e:
            raise BadPathError(str(show_dir)) from e
        if not raw_show or not _is_text(raw_show):
            raise BadPathError(str(show_dir))

        result = self.resolver.resolve(raw_show)
        if result is None:
            self._fail(raw_show, "TV show", BadShowError(raw_show))
        return result

    def read_show(self, show_dir: Path) -> List[Episode]:
        """Read the episodes of a single show folder.

        Raises:
            BadPathError: The folder, or a name inside it, cannot be read.
            ScanAbortedError: A failure under the ``abort`` policy.
        """
        resolved = self._resolve_show(show_dir)
        if resolved is None:
            return []
        show_name, show_certainty = resolved

        try:
            entries = _list_dir(show_dir)
        except OSError as e:
            raise BadPathError(str(show_dir)) from e

        episodes: List[Episode] = []
        for entry in entries:
            if not _is_text(entry.name):
                raise BadPathError(str(entry))
            if entry.is_dir():
                logger.debug("Ignoring nested directory %s", entry)
                continue
            try:
                episodes.append(
                    parse_episode(
                        entry,
                        entry.name,
                        show_name,
                        show_certainty,
                        self.allowed_exts,
                    )
                )
            except ParseError as e:
                self._fail(str(entry), "file", e)
        return episodes

    def scan(self, root: Path) -> List[Episode]:
        """Scan *root* and return every Episode found, in directory order.

        Args:
            root: The local library root.

        Returns:
            Episodes, shows in name order, files in name order within a show.

        Raises:
            ScanFatalError: The root itself cannot be listed.
            ScanAbortedError: A show or file failed under the ``abort`` policy.
        """
        try:
            shows = _list_dir(root)
        except OSError as e:
            raise ScanFatalError(root) from e

        episodes: List[Episode] = []
        for show_dir in shows:
            if not show_dir.is_dir():
                continue
            try:
                episodes.extend(self.read_show(show_dir))
            except BadPathError as e:
                logger.warning("Skipped a TV show due to read error: %s", e)
        return episodes


def scan_library(
    root: Path,
    resolver: ShowResolver,
    allowed_exts: Sequence[str],
    on_failure: FailureAction = FailureAction.SKIP,
) -> List[Episode]:
    """Scan a local library; see :class:`LibraryScanner`."""
    return LibraryScanner(resolver, allowed_exts, on_failure).scan(root)
