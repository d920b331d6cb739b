"""Tests for the TMDB TV search client."""

import httpx
import pytest
import respx

from showsync.metadata.clients.tmdb import TMDBClient


class TestTMDBClient:
    """Expected, edge and failure cases for the TV search."""

    def test_search_tv_expected(self, respx_mock: respx.MockRouter) -> None:
        """Expected: results array is returned as-is."""
        results = [{"id": 1, "name": "All My Circuits"}]
        respx_mock.get(
            "https://api.themoviedb.org/3/search/tv",
            params={"query": "all my circuits"},
        ).mock(return_value=respx.MockResponse(200, json={"results": results}))

        assert TMDBClient("tok").search_tv("all my circuits") == results

    def test_custom_protocol_and_host(self, respx_mock: respx.MockRouter) -> None:
        route = respx_mock.get("http://localhost:8080/3/search/tv").mock(
            return_value=respx.MockResponse(200, json={"results": []})
        )
        client = TMDBClient("tok", protocol="http", host="localhost:8080")

        assert client.first_tv_match("x") is None
        assert route.called

    def test_first_match_skips_nameless_result(self, respx_mock: respx.MockRouter) -> None:
        """Edge: a first result without a name is treated as no match."""
        respx_mock.get("https://api.themoviedb.org/3/search/tv").mock(
            return_value=respx.MockResponse(200, json={"results": [{"id": 3}]})
        )
        assert TMDBClient("tok").first_tv_match("x") is None

    def test_unauthorized(self, respx_mock: respx.MockRouter) -> None:
        """Failure: a 401 raises HTTPStatusError."""
        respx_mock.get("https://api.themoviedb.org/3/search/tv").mock(
            return_value=respx.MockResponse(401, json={"status_message": "Invalid"})
        )
        with pytest.raises(httpx.HTTPStatusError):
            TMDBClient("bad").search_tv("x")

    def test_missing_results(self, respx_mock: respx.MockRouter) -> None:
        """Failure: a body without a results array raises ValueError."""
        respx_mock.get("https://api.themoviedb.org/3/search/tv").mock(
            return_value=respx.MockResponse(200, json=["not", "a", "dict"])
        )
        with pytest.raises(ValueError):
            TMDBClient("tok").search_tv("x")
