"""Renderer for CLI output.

Renders the sync set as a rich table. The show column is coloured by how sure
the resolver was about the show name, so that guesses (fuzzy or TMDB matches)
stand out before the user confirms the upload.
"""

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from showsync.models.core import CERTAINTY_GOOD, CERTAINTY_PERFECT, CERTAINTY_UNSURE, Episode


def certainty_style(certainty: float) -> str:
    """Return the rich style for a show-resolution certainty."""
    if certainty > CERTAINTY_PERFECT:
        return "green"
    if certainty > CERTAINTY_GOOD:
        return "yellow"
    if certainty > CERTAINTY_UNSURE:
        return "red"
    return "bright_red bold"


def render_sync_set(episodes: Sequence[Episode], console: Console | None = None) -> None:
    """Render the episodes about to be uploaded as a table.

    Args:
        episodes: The sorted sync set.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()

    table = Table(title=f"Episodes to sync: {len(episodes)}")
    table.add_column("Show", style="bold")
    table.add_column("Episode", style="cyan", no_wrap=True)
    table.add_column("Source", overflow="fold")
    table.add_column("Match", justify="right")

    for ep in episodes:
        style = certainty_style(ep.show_certainty)
        table.add_row(
            Text(ep.show_name, style=style),
            ep.remote_filename(),
            Text(str(ep.local_path)),
            Text(f"{ep.show_certainty:.0%}", style=style),
        )

    console.print(table)

    unsure = [ep for ep in episodes if ep.is_guess]
    if unsure:
        console.print(
            f"{len(unsure)} episode(s) matched to a show by a guess; check the names above.",
            style="yellow bold",
        )
