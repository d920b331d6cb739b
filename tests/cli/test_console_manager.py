from __future__ import annotations

import io

import pytest
from rich.console import Console

from showsync.cli.console import ConsoleManager, RichTransferProgress, rich_enabled


def test_console_manager_yields_console():  # noqa: D103
    with ConsoleManager(record=True) as console:  # type: Console
        assert isinstance(console, Console)
        console.print("Start")
        console.print("Done")

        output = console.export_text()

    for expected in ("Start", "Done"):
        assert expected in output


def test_console_manager_plain_when_rich_disabled(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.setenv("SHOWSYNC_NO_RICH", "1")
    assert not rich_enabled()

    with ConsoleManager() as console:
        assert console.color_system is None
        assert not console.is_terminal


def test_console_manager_force_use_overrides_env(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.setenv("SHOWSYNC_NO_RICH", "1")

    with ConsoleManager(force_use=True, force_terminal=True) as console:
        assert console.is_terminal


class TestRichTransferProgress:
    def _console(self) -> Console:
        return Console(file=io.StringIO(), width=120, color_system=None)

    def test_reports_ok(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHOWSYNC_NO_RICH", "1")
        console = self._console()
        progress = RichTransferProgress(console, "All My Circuits/S01E02.mkv")

        progress.start(10)
        progress.advance(4)
        progress.advance(6)
        progress.finish(True)

        assert progress.progress.tasks[0].completed == 10
        assert "All My Circuits/S01E02.mkv OK" in console.file.getvalue()

    def test_reports_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHOWSYNC_NO_RICH", "1")
        console = self._console()
        progress = RichTransferProgress(console, "[x]/S01E02.mkv")

        progress.start(10)
        progress.finish(False)

        assert "[x]/S01E02.mkv FAILED" in console.file.getvalue()
