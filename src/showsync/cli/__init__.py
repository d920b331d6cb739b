"""Command-line interface for showsync.

This package provides the Typer app and global console shared by all CLI
commands.

- app: The Typer application object. Commands are registered on it by
  :mod:`showsync.cli.commands`, which is also the console-script entry point.
- console: Rich Console instance for consistent, styled output.
"""

import os

import typer
from rich.console import Console
from rich.traceback import install

from showsync.utils.debug import setup_logger

# Install rich traceback handler for all CLI commands
install(show_locals=False)

console = Console()

app = typer.Typer(
    name="showsync",
    help="Upload new TV episodes from a local library to a remote media server.",
    add_completion=False,
)


@app.callback()
def callback(
    ctx: typer.Context,  # noqa: D401 – Typer requires ctx param first
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output and progress bars. "
            "Can also be set with the SHOWSYNC_NO_RICH environment variable."
        ),
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output, including every remote command. Same as SHOWSYNC_DEBUG=1.",
    ),
) -> None:
    """Top-level CLI callback adding global options.

    ``--no-rich`` is forwarded through the ``SHOWSYNC_NO_RICH`` environment
    variable so that :class:`~showsync.cli.console.ConsoleManager` behaves the
    same whether the flag is passed or the variable is set externally.
    """
    if no_rich:
        os.environ["SHOWSYNC_NO_RICH"] = "1"
    setup_logger(verbose=verbose)
