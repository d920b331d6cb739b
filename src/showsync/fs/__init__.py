"""Local filesystem persistence for showsync."""

from showsync.fs.audit import write_sync_event

__all__ = ["write_sync_event"]
