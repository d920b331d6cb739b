"""TMDB metadata provider client.

Only the TV title search is used: given a free-form show name, return the name
of TMDB's best match.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_HOST = "api.themoviedb.org"


class TMDBClient:
    """Client for The Movie Database (TMDB) TV search endpoint.

    Authenticates with a v4 read access token sent as a bearer token.
    """

    def __init__(
        self,
        token: str,
        *,
        protocol: str = "https",
        host: str = DEFAULT_HOST,
        timeout: float = 10.0,
    ) -> None:
        self.token = token
        self.base_url = f"{protocol}://{host}"
        self.timeout = timeout

    def search_tv(self, query: str) -> list[dict]:
        """Search TMDB for TV shows matching *query*.

        Returns:
            The raw ``results`` array of the response.

        Raises:
            httpx.HTTPError: On transport errors or a non-2xx response.
            ValueError: If the body is not JSON or has no ``results`` array.
        """
        url = f"{self.base_url}/3/search/tv"
        headers = {"Authorization": f"Bearer {self.token}"}
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.get(url, params={"query": query}, headers=headers)
            resp.raise_for_status()
            data = resp.json()
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise ValueError("TMDB response has no results array")
        logger.debug("TMDB search %r returned %d result(s)", query, len(results))
        return results

    def first_tv_match(self, query: str) -> str | None:
        """Return the name of the first TV search result, if any."""
        results = self.search_tv(query)
        if not results:
            return None
        name = results[0].get("name") if isinstance(results[0], dict) else None
        return name if isinstance(name, str) else None
