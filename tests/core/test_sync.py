"""End-to-end tests for perform_sync.

The remote library is a directory under tmp_path reached through
LocalShellSession, so every step runs its real shell commands.
"""

import json
from pathlib import Path
from typing import List

import pytest
import respx

from showsync.core.sync import perform_sync
from showsync.errors import RemoteTransportError, ScanAbortedError
from showsync.models.config import (
    LocalConfig,
    LogConfig,
    OsmcConfig,
    RemoteConfig,
    SyncConfig,
    ValidationConfig,
)
from showsync.models.core import Episode, FailureAction
from showsync.remote.transfer import ProgressReporter
from tests.helpers.local_session import LocalShellSession

SHOW = "All My Circuits"


@pytest.fixture(autouse=True)
def no_tmdb(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TMDB_READ_ACCESS_TOKEN", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def remote_show(remote_tv: Path) -> Path:
    show = remote_tv / SHOW
    show.mkdir()
    (show / "S01E01.mkv").write_bytes(b"already there")
    (show / ".showsync.tmp.S01E09.mkv").write_bytes(b"stale")
    return show


@pytest.fixture
def local_show(local_tv: Path) -> Path:
    show = local_tv / "all my circuits"
    show.mkdir()
    (show / "all.my.circuits.s01e03.mkv").write_bytes(b"three" * 2000)
    (show / "all.my.circuits.s01e01.mkv").write_bytes(b"one")
    (show / "all.my.circuits.s01e02.mkv").write_bytes(b"two")
    (local_tv / "Brand New Show").mkdir()
    (local_tv / "Brand New Show" / "S01E01.mkv").write_bytes(b"new")
    return show


@pytest.fixture
def config(local_tv: Path, remote_tv: Path, tmp_path: Path) -> SyncConfig:
    return SyncConfig(
        local=LocalConfig(default_dir=str(local_tv)),
        remote=RemoteConfig(tv_dir=str(remote_tv)),
        log=LogConfig(local_path=str(tmp_path / "events")),
    )


def _summary(episodes: List[Episode]) -> List[str]:
    return [str(ep.remote_subpath()) for ep in episodes]


class TestPerformSync:
    """Happy paths."""

    def test_uploads_missing_episodes(
        self, config: SyncConfig, remote_show: Path, local_show: Path, tmp_path: Path
    ) -> None:
        report = perform_sync(config, LocalShellSession())

        assert report.known_shows == 1
        assert len(report.scanned) == 3
        assert _summary(report.uploaded) == [f"{SHOW}/S01E02.mkv", f"{SHOW}/S01E03.mkv"]
        assert (remote_show / "S01E02.mkv").read_bytes() == b"two"
        assert (remote_show / "S01E03.mkv").read_bytes() == b"three" * 2000
        assert (remote_show / "S01E01.mkv").read_bytes() == b"already there"
        assert not (remote_show / ".showsync.tmp.S01E09.mkv").exists()
        assert not (remote_show.parent / "Brand New Show").exists()

    def test_writes_audit_record(
        self, config: SyncConfig, remote_show: Path, local_show: Path, tmp_path: Path
    ) -> None:
        report = perform_sync(config, LocalShellSession())

        assert report.audit_path is not None
        assert report.audit_path.parent == tmp_path / "events"
        record = json.loads(report.audit_path.read_text())
        assert record["username"]
        assert [ep["episode_num"] for ep in record["episodes"]] == [2, 3]
        assert record["episodes"][0]["local_path"] == str(local_show / "all.my.circuits.s01e02.mkv")

    def test_nothing_to_sync(self, config: SyncConfig, remote_show: Path, tmp_path: Path) -> None:
        report = perform_sync(config, LocalShellSession())

        assert report.sync_set == []
        assert report.audit_path is None
        assert not (tmp_path / "events").exists()

    def test_dry_run(
        self, config: SyncConfig, remote_show: Path, local_show: Path, tmp_path: Path
    ) -> None:
        session = LocalShellSession()

        report = perform_sync(config, session, dry_run=True)

        assert report.dry_run
        assert _summary(report.sync_set) == [f"{SHOW}/S01E02.mkv", f"{SHOW}/S01E03.mkv"]
        assert report.uploaded == []
        assert session.streams == []
        assert not (tmp_path / "events").exists()

    def test_confirm_sees_sorted_sync_set(
        self, config: SyncConfig, remote_show: Path, local_show: Path
    ) -> None:
        seen: List[List[str]] = []

        def confirm(sync_set: List[Episode]) -> bool:
            seen.append(_summary(sync_set))
            return True

        perform_sync(config, LocalShellSession(), confirm=confirm)

        assert seen == [[f"{SHOW}/S01E02.mkv", f"{SHOW}/S01E03.mkv"]]

    def test_declined_confirmation(
        self, config: SyncConfig, remote_show: Path, local_show: Path
    ) -> None:
        session = LocalShellSession()

        report = perform_sync(config, session, confirm=lambda _: False)

        assert report.cancelled
        assert report.uploaded == []
        assert session.streams == []

    def test_progress_factory_per_episode(
        self, config: SyncConfig, remote_show: Path, local_show: Path
    ) -> None:
        made: List[str] = []

        def factory(ep: Episode) -> ProgressReporter:
            made.append(ep.remote_filename())
            return ProgressReporter()

        perform_sync(config, LocalShellSession(), progress_factory=factory)

        assert made == ["S01E02.mkv", "S01E03.mkv"]

    def test_custom_resolver(self, config: SyncConfig, remote_show: Path, local_tv: Path) -> None:
        from showsync.resolvers import ExactResolver

        (local_tv / SHOW).mkdir()
        (local_tv / SHOW / "S01E02.mkv").write_bytes(b"two")
        (local_tv / "all my circuits").mkdir()
        (local_tv / "all my circuits" / "S01E03.mkv").write_bytes(b"three")

        report = perform_sync(config, LocalShellSession(), resolver=ExactResolver([SHOW]))

        assert _summary(report.uploaded) == [f"{SHOW}/S01E02.mkv"]


class TestPerformSyncFailures:
    def test_first_failure_stops_the_queue(
        self, config: SyncConfig, remote_show: Path, local_show: Path
    ) -> None:
        """S01E02 fits in one write; S01E03 fails on its second."""
        session = LocalShellSession(fail_after=4096)

        with pytest.raises(RemoteTransportError):
            perform_sync(config, session)

        assert (remote_show / "S01E02.mkv").read_bytes() == b"two"
        assert not (remote_show / "S01E03.mkv").exists()

    def test_partial_run_is_recorded(
        self, config: SyncConfig, remote_show: Path, local_show: Path, tmp_path: Path
    ) -> None:
        with pytest.raises(RemoteTransportError):
            perform_sync(config, LocalShellSession(fail_after=4096))

        records = list((tmp_path / "events").glob("*.json"))
        assert len(records) == 1
        episodes = json.loads(records[0].read_text())["episodes"]
        assert [ep["episode_num"] for ep in episodes] == [2]

    def test_scan_abort_uploads_nothing(
        self, config: SyncConfig, remote_show: Path, local_show: Path
    ) -> None:
        config.validation = ValidationConfig(on_failure=FailureAction.ABORT)
        session = LocalShellSession()

        with pytest.raises(ScanAbortedError):
            perform_sync(config, session)
        assert session.streams == []


class TestMediaCentreRefresh:
    def test_refresh_after_upload(
        self,
        config: SyncConfig,
        remote_show: Path,
        local_show: Path,
        respx_mock: respx.MockRouter,
    ) -> None:
        route = respx_mock.post("http://osmc.local/jsonrpc").mock(
            return_value=respx.MockResponse(200, json={"result": "OK"})
        )
        config.osmc = OsmcConfig(host="osmc.local")

        perform_sync(config, LocalShellSession())

        assert route.call_count == 1

    def test_refresh_failure_is_not_fatal(
        self,
        config: SyncConfig,
        remote_show: Path,
        local_show: Path,
        respx_mock: respx.MockRouter,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        respx_mock.post("http://osmc.local/jsonrpc").mock(return_value=respx.MockResponse(500))
        config.osmc = OsmcConfig(host="osmc.local")

        report = perform_sync(config, LocalShellSession())

        assert len(report.uploaded) == 2
        assert "Could not trigger an OSMC library refresh" in caplog.text
