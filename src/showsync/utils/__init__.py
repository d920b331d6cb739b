"""Utility modules for showsync."""

from showsync.utils.config import load_config
from showsync.utils.json import DateTimeEncoder
from showsync.utils.lock import process_lock

__all__ = [
    "DateTimeEncoder",
    "load_config",
    "process_lock",
]
