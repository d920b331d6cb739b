"""Core functionality for showsync.

- parse_episode / parse_filename: filename -> season, episode, extension.
- LibraryScanner / scan_library: local library -> Episodes.
- diff_episodes: Episodes + remote inventory -> sorted sync set.
- perform_sync: the whole run, from temp-file cleanup to the audit record.
"""

from showsync.core.diff import diff_episodes
from showsync.core.episode_parser import parse_episode, parse_filename
from showsync.core.scanner import LibraryScanner, scan_library
from showsync.core.sync import perform_sync

__all__ = [
    "LibraryScanner",
    "diff_episodes",
    "parse_episode",
    "parse_filename",
    "perform_sync",
    "scan_library",
]
