"""One complete sync run, from temp-file cleanup to the audit record.

The run is strictly sequential:

1. delete temp files left over from an interrupted run;
2. list the remote shows and build the resolver chain from them;
3. scan the local library;
4. list the remote episodes of every show found locally and diff;
5. stop if there is nothing to do, on a dry run, or if the user declines;
6. upload the sync set one episode at a time, stopping at the first failure;
7. record what was uploaded, then ask the media centre to rescan.

Nothing is retried. A failed upload leaves its target untouched and the rest
of the sync set is picked up by the next run.
"""

import getpass
import logging
from pathlib import Path
from typing import Callable, List, Optional

import httpx

from showsync.core.diff import diff_episodes
from showsync.core.scanner import scan_library
from showsync.fs.audit import write_sync_event
from showsync.models.config import SyncConfig
from showsync.models.core import Episode, SyncEvent, SyncReport
from showsync.remote.library import RemoteLibrary
from showsync.remote.osmc import OsmcClient
from showsync.remote.session import RemoteSession
from showsync.remote.transfer import ProgressReporter
from showsync.resolvers.base import ShowResolver
from showsync.resolvers.factory import build_resolver

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[List[Episode]], bool]
ProgressFactory = Callable[[Episode], ProgressReporter]


def _record_uploads(uploaded: List[Episode], audit_dir: Path) -> Path:
    event = SyncEvent(username=getpass.getuser(), episodes=uploaded)
    return write_sync_event(event, audit_dir)


def _refresh_media_centre(config: SyncConfig) -> None:
    if config.osmc is None:
        return
    client = OsmcClient.from_config(config.osmc)
    try:
        client.trigger_refresh()
    except httpx.HTTPError as e:
        logger.warning("Could not trigger an OSMC library refresh: %s", e)
    else:
        logger.info("Triggered OSMC library refresh")


def perform_sync(
    config: SyncConfig,
    session: RemoteSession,
    *,
    resolver: Optional[ShowResolver] = None,
    confirm: Optional[ConfirmCallback] = None,
    progress_factory: Optional[ProgressFactory] = None,
    dry_run: bool = False,
    audit_dir: Optional[Path] = None,
) -> SyncReport:
    """Run a sync of the local library onto the remote one.

    Args:
        config: Resolved configuration.
        session: Open session to the remote host.
        resolver: Show resolver to use instead of the default chain built
            from the remote show list.
        confirm: Called with the sync set before uploading; returning False
            cancels the run.
        progress_factory: Builds a progress reporter for each upload.
        dry_run: Compute the sync set but upload nothing.
        audit_dir: Where to write the audit record. Defaults to
            ``log.local_path`` from the configuration.

    Returns:
        A SyncReport describing what was found and uploaded.

    Raises:
        ReadError: The local scan failed or was aborted.
        TransferError: A remote command or upload failed. Episodes uploaded
            before the failure are still recorded.
    """
    library = RemoteLibrary(session, config.remote.tv_dir)
    report = SyncReport(dry_run=dry_run)

    library.wipe_temp()

    known_shows = library.list_shows()
    report.known_shows = len(known_shows)
    if resolver is None:
        resolver = build_resolver(known_shows, config.tmdb)

    report.scanned = scan_library(
        Path(config.local.default_dir),
        resolver,
        config.validation.allowed_exts,
        config.validation.on_failure,
    )
    logger.info("Found %d local episodes", len(report.scanned))

    inventory = library.inventory(
        (ep.show_name for ep in report.scanned), known_shows=known_shows
    )
    report.sync_set = diff_episodes(report.scanned, inventory)
    logger.info("%d episodes to sync", len(report.sync_set))

    if not report.sync_set or dry_run:
        return report
    if confirm is not None and not confirm(report.sync_set):
        logger.info("Sync cancelled by user")
        report.cancelled = True
        return report

    audit_dir = audit_dir or Path(config.log.local_path)
    try:
        for episode in report.sync_set:
            progress = progress_factory(episode) if progress_factory else None
            library.upload(episode, progress)
            report.uploaded.append(episode)
    finally:
        if report.uploaded:
            report.audit_path = _record_uploads(report.uploaded, audit_dir)

    _refresh_media_centre(config)
    return report
