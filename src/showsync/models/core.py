"""Core domain models for showsync.

This module defines the data structures passed between the scanner, the diff
engine and the transfer engine.
- Episode is the atomic unit of a sync run: one local file mapped to a remote
  show, season and episode.
- ResolutionResult is what a show resolver hands back for a folder name.
- SyncEvent is the audit record persisted after a run; SyncReport is the
  in-memory summary returned to the CLI.

Design:
- Episode identity deliberately ignores where the file was found locally and
  how confident the show resolution was, so that the same remote target found
  twice compares equal.
- Models are frozen; an Episode is never mutated after scanning.
"""

from datetime import datetime, timezone
from enum import Enum
from functools import total_ordering
from pathlib import Path, PurePosixPath
from typing import Dict, List, NamedTuple, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Certainty bands used when presenting a resolution to the user.
CERTAINTY_PERFECT = 0.9
CERTAINTY_GOOD = 0.7
CERTAINTY_UNSURE = 0.2

# Canonical show name -> remote episode filenames already present.
RemoteInventory = Dict[str, Set[str]]


class FailureAction(str, Enum):
    """What the scanner does when a show or file cannot be parsed."""

    SKIP = "skip"
    ABORT = "abort"


class ResolutionResult(NamedTuple):
    """A canonical show name and how sure the resolver is about it (0-1)."""

    name: str
    certainty: float


@total_ordering
class Episode(BaseModel):
    """A local media file mapped to its remote identity.

    Only built by :func:`showsync.core.episode_parser.parse_episode`, which
    enforces the extension allow-list.
    """

    model_config = ConfigDict(frozen=True)

    local_path: Path
    """Where the file was found locally."""

    show_name: str
    """Canonical show name, i.e. the remote show folder."""

    show_certainty: float = Field(ge=0.0, le=1.0)
    """Confidence of the show resolution."""

    season_num: int = Field(ge=0)
    episode_num: int = Field(ge=0)

    ext: str
    """Lower-case file extension without the dot."""

    @property
    def sort_key(self) -> Tuple[str, int, int, str]:
        return (self.show_name, self.season_num, self.episode_num, self.ext)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Episode):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Episode):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    @property
    def is_guess(self) -> bool:
        """True when the show match is below the "good" band and needs a human."""
        return not self.show_certainty > CERTAINTY_GOOD

    def remote_filename(self) -> str:
        """Return the file name this episode has in the remote library."""
        return f"S{self.season_num:02d}E{self.episode_num:02d}.{self.ext}"

    def remote_subpath(self) -> PurePosixPath:
        """Return the path of this episode relative to the remote TV root."""
        return PurePosixPath(self.show_name) / self.remote_filename()


class SyncEvent(BaseModel):
    """Audit record of one sync run."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    username: str
    episodes: List[Episode] = Field(default_factory=list)

    def filename(self) -> str:
        return f"{self.timestamp.strftime('%Y%m%d_%H%M%S')}.json"


class SyncReport(BaseModel):
    """Summary of a sync run for the CLI."""

    known_shows: int = 0
    scanned: List[Episode] = Field(default_factory=list)
    sync_set: List[Episode] = Field(default_factory=list)
    uploaded: List[Episode] = Field(default_factory=list)
    dry_run: bool = False
    cancelled: bool = False
    audit_path: Optional[Path] = None
