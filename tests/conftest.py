import asyncio
import os

os.environ.setdefault("TMDB_API_KEY", "test-key")

import pytest

from models import MoviePage, MovieSummary


class ScriptedUseCases:
    """Use-case double whose calls stay pending until the test resolves them."""

    def __init__(self, ignore_cancel: bool = False) -> None:
        self.ignore_cancel = ignore_cancel
        self.calls: list[tuple] = []
        self._pending: list[asyncio.Future] = []

    async def _call(self, key: tuple):
        future = asyncio.get_running_loop().create_future()
        self.calls.append(key)
        self._pending.append(future)
        if not self.ignore_cancel:
            return await future
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            return await future

    async def top_rated_movies(self, page: int):
        return await self._call(("top_rated", None, page))

    async def search_movies(self, query: str, page: int):
        return await self._call(("search", query, page))

    def resolve(self, index: int, result) -> None:
        future = self._pending[index]
        if not future.done():
            future.set_result(result)


def _make_page(ids, total_pages, page=1) -> MoviePage:
    return MoviePage(
        page=page,
        results=[MovieSummary(id=i, title=f"Movie {i}") for i in ids],
        total_pages=total_pages,
    )


@pytest.fixture
def cases() -> ScriptedUseCases:
    return ScriptedUseCases()


@pytest.fixture
def stubborn_cases() -> ScriptedUseCases:
    """Cases that keep running after cancellation, like a transport that ignores it."""
    return ScriptedUseCases(ignore_cancel=True)


@pytest.fixture
def make_page():
    return _make_page
