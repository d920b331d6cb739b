"""CLI commands for showsync.

- ``sync``: upload every local episode missing from the remote library.
- ``cleanup``: delete temp files left on the remote by interrupted uploads.
- ``show-config``: print the resolved configuration.
- ``version``.

Design:
- Every command loads the configuration once and passes it down; nothing
  below the CLI reads files or the environment for settings.
- ``sync`` and ``cleanup`` hold the process lock for their whole duration.
- Errors from the library are ShowSyncError subclasses and are reported as a
  single red line with exit code 1.
"""

import json
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Annotated, Iterator, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from showsync.cli import app, console
from showsync.cli.console import ConsoleManager, RichTransferProgress
from showsync.cli.renderer import render_sync_set
from showsync.core.sync import perform_sync
from showsync.errors import ShowSyncError
from showsync.models.config import SyncConfig
from showsync.models.core import Episode, SyncReport
from showsync.remote.library import RemoteLibrary
from showsync.remote.ssh import SSHSession
from showsync.utils.config import load_config
from showsync.utils.json import DateTimeEncoder
from showsync.utils.lock import process_lock


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    CANCELLED = 2


CONFIG_PATH = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Config file to use instead of the default search path",
    ),
]

YES = Annotated[
    bool,
    typer.Option(
        "--yes",
        "-y",
        help="Upload without asking for confirmation",
    ),
]

DRY_RUN = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Show what would be uploaded, then stop",
    ),
]

_SECRET_KEYS = {"password", "token"}


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(ExitCode.ERROR)


def _load(config_path: Optional[Path]) -> SyncConfig:
    try:
        return load_config(config_path)
    except ShowSyncError as e:
        _fail(str(e))


@contextmanager
def _remote(config: SyncConfig) -> Iterator[SSHSession]:
    """Hold the process lock and an SSH session for the duration."""
    with process_lock(Path(config.lock.path)):
        session = SSHSession.connect(config.remote)
        try:
            yield session
        finally:
            session.close()


def _confirmer(config: SyncConfig, yes: bool, out: Console):
    """Build the confirmation callback for ``perform_sync``.

    ``--yes`` and ``prompt_confirmation = false`` only skip the prompt when
    every show match is at least "good"; guessed matches always need a human.
    """

    def confirm(sync_set: List[Episode]) -> bool:
        render_sync_set(sync_set, console=out)
        guessed = any(ep.is_guess for ep in sync_set)
        if not guessed and (yes or not config.validation.prompt_confirmation):
            return True
        return typer.confirm(f"Upload {len(sync_set)} episode(s)?", default=False)

    return confirm


def _report(report: SyncReport, out: Console) -> ExitCode:
    if not report.sync_set:
        out.print(
            f"[green]Nothing to sync.[/green] {len(report.scanned)} local episode(s) found."
        )
        return ExitCode.SUCCESS
    if report.dry_run:
        render_sync_set(report.sync_set, console=out)
        out.print("[yellow]Dry run: nothing uploaded.[/yellow]")
        return ExitCode.SUCCESS
    if report.cancelled:
        out.print("[yellow]Cancelled; nothing uploaded.[/yellow]")
        return ExitCode.CANCELLED
    out.print(f"[green]Uploaded {len(report.uploaded)} episode(s).[/green]")
    if report.audit_path is not None:
        out.print(f"Sync record: {escape(str(report.audit_path))}")
    return ExitCode.SUCCESS


@app.command()
def sync(
    config_path: CONFIG_PATH = None,
    yes: YES = False,
    dry_run: DRY_RUN = False,
) -> None:
    """Upload local episodes that are missing from the remote library."""
    config = _load(config_path)
    with ConsoleManager() as out:
        try:
            with _remote(config) as session:
                report = perform_sync(
                    config,
                    session,
                    confirm=_confirmer(config, yes, out),
                    progress_factory=lambda ep: RichTransferProgress(
                        out, str(ep.remote_subpath())
                    ),
                    dry_run=dry_run,
                )
        except ShowSyncError as e:
            _fail(str(e))
        except OSError as e:
            _fail(f"Could not write sync record: {e}")

        code = _report(report, out)
    raise typer.Exit(code)


@app.command()
def cleanup(config_path: CONFIG_PATH = None) -> None:
    """Delete temp files left on the remote by interrupted uploads."""
    config = _load(config_path)
    try:
        with _remote(config) as session:
            RemoteLibrary(session, config.remote.tv_dir).wipe_temp()
    except ShowSyncError as e:
        _fail(str(e))
    console.print(
        f"[green]Removed leftover temp files under {escape(config.remote.tv_dir)}[/green]"
    )


@app.command("show-config")
def show_config(config_path: CONFIG_PATH = None) -> None:
    """Print the resolved configuration, with secrets masked."""
    config = _load(config_path)
    data = config.model_dump()
    for section in data.values():
        if isinstance(section, dict):
            for key in _SECRET_KEYS & section.keys():
                if section[key]:
                    section[key] = "***"
    console.print_json(json.dumps(data, cls=DateTimeEncoder))


@app.command()
def version() -> None:
    """Show the version of showsync."""
    from showsync.__about__ import __version__

    console.print(f"showsync version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
