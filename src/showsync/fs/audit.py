"""Persist the audit record of a sync run.

One JSON file per run is written to the configured log directory, named after
the run's UTC timestamp (``YYYYmmdd_HHMMSS.json``). It lists every episode
that reached the remote library in that run.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from showsync.models.core import SyncEvent
from showsync.utils.json import DateTimeEncoder

logger = logging.getLogger(__name__)


def write_sync_event(event: SyncEvent, log_dir: Path) -> Path:
    """Write *event* into *log_dir* and return the file path.

    The file is written to a temp file first and moved into place, so a
    reader never sees a partial record.

    Raises:
        OSError: The directory or file cannot be written.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    target = log_dir / event.filename()

    fd, tmp_name = tempfile.mkstemp(dir=log_dir, prefix=".", suffix=".json.tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(event.model_dump(), f, cls=DateTimeEncoder, indent=2)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Wrote sync record %s (%d episodes)", target, len(event.episodes))
    return target
