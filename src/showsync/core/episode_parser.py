"""Parser for extracting season / episode numbers from episode filenames.

Patterns are tried in order and the first match wins. They get more
permissive as the list goes on, so the compact ``102`` form is tried last: it
is the one most likely to pick up a resolution or a year by mistake.

Season and episode numbers only ever come from the filename; the folder layout
is never consulted.
"""

import re
from pathlib import Path
from typing import Collection, Optional, Tuple

from showsync.errors import BadExtensionError, BadFilenameError
from showsync.models.core import Episode

EPISODE_PATTERNS = [
    # S01E02, s01.e02, S01 - E02
    re.compile(r".*[Ss]([0-9]{2})[\s\-.]*[Ee]([0-9]{2}).*\.([A-Za-z0-9]+)"),
    # 1x02, 01.02
    re.compile(r".*[^0-9]([0-9]{1,2})[x.]([0-9]{1,2})(?![0-9]).*\.([A-Za-z0-9]+)"),
    # 102 -> season 1, episode 02
    re.compile(r".*[\s\-.]([1-9])([0-9]{2})(?![0-9]).*\.([A-Za-z0-9]+)"),
]


def parse_filename(filename: str) -> Optional[Tuple[int, int, str]]:
    """Parse a filename into season, episode and extension.

    Args:
        filename: Bare file name, e.g. ``"Show.S01E02.1080p.mkv"``.

    Returns:
        ``(season, episode, ext)`` with a lower-case extension, or None when no
        pattern matches.

    Example:
        >>> parse_filename("S01 E02.mkv")
        (1, 2, 'mkv')
        >>> parse_filename("Calculon Has Amnesia - 1x02.mkv")
        (1, 2, 'mkv')
    """
    for pattern in EPISODE_PATTERNS:
        match = pattern.fullmatch(filename)
        if match:
            season, episode, ext = match.groups()
            return int(season), int(episode), ext.lower()
    return None


def parse_episode(
    path: Path,
    filename: str,
    show_name: str,
    show_certainty: float,
    allowed_exts: Collection[str],
) -> Episode:
    """Build an Episode for a local file.

    The extension allow-list is only consulted once the name has parsed, so an
    unparseable name with a disallowed extension reports BadFilenameError.

    Args:
        path: Local path of the file.
        filename: The file name to parse (normally ``path.name``).
        show_name: Canonical show name from the resolver.
        show_certainty: Resolver certainty for ``show_name``.
        allowed_exts: Lower-case extensions without the dot.

    Raises:
        BadFilenameError: No pattern matched.
        BadExtensionError: The matched extension is not allowed.
    """
    parsed = parse_filename(filename)
    if parsed is None:
        raise BadFilenameError(filename)

    season_num, episode_num, ext = parsed
    if ext not in allowed_exts:
        raise BadExtensionError(filename)

    return Episode(
        local_path=path,
        show_name=show_name,
        show_certainty=show_certainty,
        season_num=season_num,
        episode_num=episode_num,
        ext=ext,
    )
