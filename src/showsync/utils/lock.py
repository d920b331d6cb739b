"""Single-instance lock for sync runs.

Two concurrent runs against the same remote library would race on the same
temp files, so ``showsync sync`` and ``showsync cleanup`` hold an exclusive
``flock`` on a lock file for their whole duration.
"""

import fcntl
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from showsync.errors import LockError

logger = logging.getLogger(__name__)


@contextmanager
def process_lock(path: Path) -> Iterator[None]:
    """Hold an exclusive, non-blocking lock on *path*.

    The lock file and its parent directory are created if needed. The lock is
    released when the context exits, and by the OS if the process dies.

    Raises:
        LockError: Another process holds the lock, or the file cannot be
            created.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        lock_file = path.open("a")
    except OSError as e:
        raise LockError(f"Cannot create lock file {path}: {e}") from e

    with lock_file:
        try:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except (BlockingIOError, OSError) as e:
            raise LockError(
                f"Another showsync run holds {path}. Wait for it to finish."
            ) from e
        logger.debug("Acquired lock %s", path)
        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)
            logger.debug("Released lock %s", path)
