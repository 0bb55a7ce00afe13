import logging
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, Union

from endpoints import Endpoints
from errors import ApiError, NetworkError, UnknownError
from models import MovieDetail, MoviePage
from tmdb import NetworkService

logger = logging.getLogger(__name__)

ValueT = TypeVar("ValueT")


@dataclass(frozen=True)
class Success(Generic[ValueT]):
    value: ValueT


@dataclass(frozen=True)
class Failure:
    error: ApiError

    @property
    def message(self) -> str:
        return self.error.message


Result = Union[Success[ValueT], Failure]


class MovieUseCaseTypes(Protocol):
    async def top_rated_movies(self, page: int) -> Result[MoviePage]: ...

    async def movie_detail(self, movie_id: int) -> Result[MovieDetail]: ...


class SearchUseCaseTypes(Protocol):
    async def search_movies(self, query: str, page: int) -> Result[MoviePage]: ...


def _check_page(page: int) -> None:
    if page < 1:
        raise ValueError(f"page must be a positive integer, got {page}")


class MovieUseCases:
    def __init__(self, network: NetworkService, endpoints: Endpoints) -> None:
        self.network = network
        self.endpoints = endpoints

    async def top_rated_movies(self, page: int) -> Result[MoviePage]:
        _check_page(page)
        try:
            movies = await self.network.load(self.endpoints.top_rated(page), MoviePage)
        except NetworkError as exc:
            logger.warning("Top rated page %d failed: %s", page, exc)
            return Failure(UnknownError(str(exc)))
        return Success(movies)

    async def movie_detail(self, movie_id: int) -> Result[MovieDetail]:
        try:
            detail = await self.network.load(self.endpoints.movie_detail(movie_id), MovieDetail)
        except NetworkError as exc:
            logger.warning("Detail for movie %d failed: %s", movie_id, exc)
            return Failure(UnknownError(str(exc)))
        return Success(detail)


class SearchUseCases:
    def __init__(self, network: NetworkService, endpoints: Endpoints) -> None:
        self.network = network
        self.endpoints = endpoints

    async def search_movies(self, query: str, page: int) -> Result[MoviePage]:
        if not query or not query.strip():
            raise ValueError("query must be a non-blank string")
        _check_page(page)
        try:
            movies = await self.network.load(self.endpoints.search_movie(query, page), MoviePage)
        except NetworkError as exc:
            logger.warning("Search %r page %d failed: %s", query, page, exc)
            return Failure(UnknownError(str(exc)))
        return Success(movies)
