"""Tests for the diff engine."""

from showsync.core.diff import diff_episodes


class TestDiffEpisodes:
    def test_keeps_missing_episodes(self, make_episode) -> None:
        ep = make_episode(season_num=1, episode_num=2)
        assert diff_episodes([ep], {"All My Circuits": set()}) == [ep]

    def test_drops_present_episodes(self, make_episode) -> None:
        ep = make_episode(season_num=1, episode_num=2)
        assert diff_episodes([ep], {"All My Circuits": {"S01E02.mkv"}}) == []

    def test_drops_shows_missing_from_inventory(self, make_episode) -> None:
        """Shows the remote does not have are never created."""
        ep = make_episode(show_name="Calculon (2010)")
        assert diff_episodes([ep], {"All My Circuits": set()}) == []

    def test_extension_is_part_of_identity(self, make_episode) -> None:
        ep = make_episode(ext="srt")
        assert diff_episodes([ep], {"All My Circuits": {"S01E02.mkv"}}) == [ep]

    def test_result_is_sorted(self, make_episode) -> None:
        eps = [
            make_episode(show_name="B", season_num=2, episode_num=1),
            make_episode(show_name="A", season_num=1, episode_num=10),
            make_episode(show_name="B", season_num=1, episode_num=3),
            make_episode(show_name="A", season_num=1, episode_num=2),
        ]
        result = diff_episodes(eps, {"A": set(), "B": set()})
        assert [(e.show_name, e.season_num, e.episode_num) for e in result] == [
            ("A", 1, 2),
            ("A", 1, 10),
            ("B", 1, 3),
            ("B", 2, 1),
        ]

    def test_duplicates_are_kept(self, make_episode, tmp_path) -> None:
        """Two local files mapping to one target both stay in the sync set."""
        a = make_episode(local_path=tmp_path / "a.mkv")
        b = make_episode(local_path=tmp_path / "b.mkv")
        assert len(diff_episodes([a, b], {"All My Circuits": set()})) == 2

    def test_empty_input(self) -> None:
        assert diff_episodes([], {}) == []
