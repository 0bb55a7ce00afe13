from typing import Any, NamedTuple

TMDB_BASE = "https://api.themoviedb.org/3"


class RequestDescriptor(NamedTuple):
    url: str
    params: dict[str, Any]
    method: str = "GET"


class Endpoints:
    """Builds request descriptors for the TMDB endpoints the app uses."""

    def __init__(self, api_key: str, base_url: str = TMDB_BASE, language: str = "en-US") -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language

    def _params(self, **extra: Any) -> dict[str, Any]:
        return {"api_key": self.api_key, "language": self.language, **extra}

    def top_rated(self, page: int) -> RequestDescriptor:
        return RequestDescriptor(f"{self.base_url}/movie/top_rated", self._params(page=page))

    def search_movie(self, query: str, page: int) -> RequestDescriptor:
        # httpx percent-encodes the query text when the request is built.
        return RequestDescriptor(
            f"{self.base_url}/search/movie", self._params(query=query, page=page)
        )

    def movie_detail(self, movie_id: int) -> RequestDescriptor:
        return RequestDescriptor(f"{self.base_url}/movie/{movie_id}", self._params())
