"""Shared fixtures for showsync tests."""

from pathlib import Path
from typing import Callable

import pytest

from showsync.models.core import Episode

EpisodeFactory = Callable[..., Episode]


@pytest.fixture
def make_episode(tmp_path: Path) -> EpisodeFactory:
    """Return a factory building Episodes with sensible defaults."""

    def _make(
        show_name: str = "All My Circuits",
        season_num: int = 1,
        episode_num: int = 2,
        ext: str = "mkv",
        local_path: Path | None = None,
        show_certainty: float = 1.0,
    ) -> Episode:
        return Episode(
            local_path=local_path or tmp_path / "local" / show_name / "ep.mkv",
            show_name=show_name,
            show_certainty=show_certainty,
            season_num=season_num,
            episode_num=episode_num,
            ext=ext,
        )

    return _make


@pytest.fixture
def remote_tv(tmp_path: Path) -> Path:
    """An empty remote library root on the local filesystem."""
    root = tmp_path / "remote" / "tv"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def local_tv(tmp_path: Path) -> Path:
    """An empty local library root."""
    root = tmp_path / "local" / "tv"
    root.mkdir(parents=True)
    return root
