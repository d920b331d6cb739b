"""Tests for the core showsync models."""

from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

import pytest
from pydantic import ValidationError

from showsync.models.core import Episode, SyncEvent


class TestEpisode:
    """Episode identity, ordering and remote naming."""

    def test_remote_filename_is_zero_padded(self, make_episode) -> None:
        assert make_episode(season_num=1, episode_num=2).remote_filename() == "S01E02.mkv"
        assert make_episode(season_num=7, episode_num=69).remote_filename() == "S07E69.mkv"

    def test_remote_filename_grows_past_two_digits(self, make_episode) -> None:
        assert make_episode(season_num=1, episode_num=123).remote_filename() == "S01E123.mkv"

    def test_remote_subpath(self, make_episode) -> None:
        ep = make_episode(show_name="Calculon (2010)")
        assert ep.remote_subpath() == PurePosixPath("Calculon (2010)/S01E02.mkv")

    def test_equality_ignores_local_path_and_certainty(self, make_episode) -> None:
        a = make_episode(local_path=Path("/a.mkv"), show_certainty=1.0)
        b = make_episode(local_path=Path("/b.mkv"), show_certainty=0.1)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_ordering(self, make_episode) -> None:
        assert make_episode(season_num=1, episode_num=9) < make_episode(
            season_num=1, episode_num=10
        )
        assert make_episode(ext="mkv") < make_episode(ext="srt")
        assert make_episode(show_name="A", season_num=9) < make_episode(
            show_name="B", season_num=1
        )

    def test_is_frozen(self, make_episode) -> None:
        ep = make_episode()
        with pytest.raises(ValidationError):
            ep.season_num = 3  # type: ignore[misc]

    def test_certainty_range(self, make_episode) -> None:
        with pytest.raises(ValidationError):
            make_episode(show_certainty=1.5)

    @pytest.mark.parametrize(
        ("certainty", "guess"), [(1.0, False), (0.71, False), (0.7, True), (0.1, True)]
    )
    def test_is_guess(self, make_episode, certainty: float, guess: bool) -> None:
        assert make_episode(show_certainty=certainty).is_guess is guess


class TestSyncEvent:
    def test_filename_uses_timestamp(self) -> None:
        event = SyncEvent(
            timestamp=datetime(2024, 3, 9, 7, 5, 1, tzinfo=timezone.utc),
            username="fry",
        )
        assert event.filename() == "20240309_070501.json"

    def test_default_timestamp_is_utc(self) -> None:
        event = SyncEvent(username="fry")
        assert event.timestamp.tzinfo is not None
        assert event.episodes == []
