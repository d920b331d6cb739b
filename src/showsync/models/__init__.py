"""Domain models for the showsync application."""

from showsync.models.config import SyncConfig
from showsync.models.core import (
    Episode,
    FailureAction,
    RemoteInventory,
    ResolutionResult,
    SyncEvent,
    SyncReport,
)

__all__ = [
    "Episode",
    "FailureAction",
    "RemoteInventory",
    "ResolutionResult",
    "SyncConfig",
    "SyncEvent",
    "SyncReport",
]
