"""Console utilities for CLI commands.

* A ``ConsoleManager`` context manager yielding a pre-configured
  :class:`rich.console.Console`.
* Opt-out via the ``--no-rich`` flag (sets env var ``SHOWSYNC_NO_RICH``) or
  the environment variable being set externally.
* :class:`RichTransferProgress`, the progress bar shown while a file uploads.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from showsync.remote.transfer import ProgressReporter

__all__ = [
    "ConsoleManager",
    "RichTransferProgress",
    "rich_enabled",
]

# ENV VAR used to disable rich output entirely (useful for piping or testing)
_ENV_DISABLE_RICH = "SHOWSYNC_NO_RICH"


def rich_enabled() -> bool:
    return os.getenv(_ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Context manager that yields a configured Rich :class:`Console`.

    Parameters
    ----------
    record:
        Forwarded to :class:`rich.console.Console`; lets tests read the output
        back with ``console.export_text``.
    force_use:
        When *True* / *False* this overrides autodetection and forces rich
        enabled/disabled. When *None*, autodetect via ``SHOWSYNC_NO_RICH``.
    console_kwargs:
        Additional keyword arguments forwarded verbatim to the Console.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._record = record
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = console_kwargs
        self.console: Console | None = None

    def __enter__(self) -> Console:
        enabled = self._force_use if self._force_use is not None else rich_enabled()
        if enabled:
            self.console = Console(record=self._record, **self._console_kwargs)
        else:
            # No colour codes in plain output.
            self.console = Console(
                record=self._record,
                color_system=None,
                force_terminal=False,
                **self._console_kwargs,
            )
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            self.console.file.flush()  # type: ignore[attr-defined]
        return False


class RichTransferProgress(ProgressReporter):
    """Byte-level progress bar for one upload.

    The bar is started by :meth:`start` and removed again by :meth:`finish`,
    which prints a one-line OK / FAILED summary in its place.
    """

    def __init__(self, console: Console, description: str) -> None:
        self.console = console
        self.description = description
        self.progress = Progress(
            TextColumn("[cyan]{task.description}"),
            BarColumn(complete_style="green", finished_style="green"),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=True,
            disable=not rich_enabled(),
        )
        self.task: TaskID | None = None

    def start(self, total: int) -> None:
        self.progress.start()
        self.task = self.progress.add_task(escape(self.description), total=total)

    def advance(self, n: int) -> None:
        if self.task is not None:
            self.progress.advance(self.task, n)

    def finish(self, ok: bool) -> None:
        self.progress.stop()
        status = "[green]OK[/green]" if ok else "[red]FAILED[/red]"
        self.console.print(f"{escape(self.description)} {status}")
