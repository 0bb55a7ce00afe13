import asyncio
import logging
from typing import Optional

from errors import UnknownError
from events import (
    ClearSearch,
    DataUpdated,
    ErrorOccurred,
    HomeInput,
    HomeOutput,
    LoadInitial,
    LoadingStarted,
    LoadingStopped,
    LoadMore,
    NavigateToDetail,
    NavigateToOccurrences,
    Search,
    SelectItem,
    ShowOccurrences,
)
from models import MoviePage, MovieSummary
from usecases import Failure, MovieUseCaseTypes, Result, SearchUseCaseTypes

logger = logging.getLogger(__name__)


class HomeViewModel:
    """Paginated top-rated listing and movie search for the home screen.

    Intents arrive through ``send`` and events leave through ``output``. All
    state is touched from the event loop that owns the instance; at most one
    page request is outstanding at a time. Resetting intents (initial load,
    search, clearing the search) cancel and replace the outstanding request,
    while ``LoadMore`` is dropped if one is already running or the current
    stream has no more pages.
    """

    def __init__(self, movie_cases: MovieUseCaseTypes, search_cases: SearchUseCaseTypes) -> None:
        self.movie_cases = movie_cases
        self.search_cases = search_cases
        self.output: asyncio.Queue[HomeOutput] = asyncio.Queue()

        self.movies: list[MovieSummary] = []
        self.page_number = 1
        self.is_fetching = False
        self.has_more_pages = True
        self.active_query: Optional[str] = None

        self._request: Optional[asyncio.Task] = None

    def get_data_count(self) -> int:
        return len(self.movies)

    def get_data(self, index: int) -> MovieSummary:
        return self.movies[index]

    def emit(self, event: HomeOutput) -> None:
        self.output.put_nowait(event)

    def send(self, event: HomeInput) -> None:
        """Handle one intent. Must be called from the owning event loop."""
        if isinstance(event, (LoadInitial, ClearSearch)):
            self._restart(None)
        elif isinstance(event, LoadMore):
            self._load_more()
        elif isinstance(event, Search):
            # An emptied search box goes back to browsing.
            self._restart(event.search_text if event.search_text.strip() else None)
        elif isinstance(event, SelectItem):
            self._select(event.index)
        elif isinstance(event, ShowOccurrences):
            self.emit(NavigateToOccurrences(title=event.title))
        else:
            raise TypeError(f"Unsupported intent: {event!r}")

    async def join(self) -> None:
        """Wait until no page request is outstanding."""
        while self._request is not None and not self._request.done():
            await asyncio.wait({self._request})

    async def aclose(self) -> None:
        request, self._request = self._request, None
        self.is_fetching = False
        if request is not None and not request.done():
            request.cancel()
            await asyncio.wait({request})

    def _restart(self, query: Optional[str]) -> None:
        # The query and cursor are committed only once page 1 arrives.
        self._issue(query, 1)

    def _load_more(self) -> None:
        if self.is_fetching or not self.has_more_pages:
            logger.debug(
                "Dropping load more (fetching=%s, has_more_pages=%s)",
                self.is_fetching,
                self.has_more_pages,
            )
            return
        self._issue(self.active_query, self.page_number + 1)

    def _select(self, index: int) -> None:
        if not 0 <= index < len(self.movies):
            logger.debug("Ignoring selection of index %d out of %d", index, len(self.movies))
            return
        self.emit(NavigateToDetail(movie_id=self.movies[index].id))

    def _issue(self, query: Optional[str], page: int) -> None:
        if self._request is not None and not self._request.done():
            logger.debug("Cancelling outstanding request in favour of page %d", page)
            self._request.cancel()

        self.is_fetching = True
        self.emit(LoadingStarted())
        self._request = asyncio.create_task(self._fetch(query, page))

    async def _request_page(self, query: Optional[str], page: int) -> Result[MoviePage]:
        try:
            if query is None:
                return await self.movie_cases.top_rated_movies(page)
            return await self.search_cases.search_movies(query, page)
        except Exception as exc:
            logger.exception("Page %d request for %r raised", page, query)
            return Failure(UnknownError(str(exc) or exc.__class__.__name__))

    async def _fetch(self, query: Optional[str], page: int) -> None:
        result = await self._request_page(query, page)

        if self._request is not asyncio.current_task():
            logger.info("Discarding stale page %d response for %r", page, query)
            return

        self._request = None
        if isinstance(result, Failure):
            self.is_fetching = False
            self.emit(LoadingStopped())
            self.emit(ErrorOccurred(message=result.message))
            return

        movie_page = result.value
        self.has_more_pages = (movie_page.total_pages or -1) > page
        self.active_query = query
        self.page_number = page
        if page == 1:
            self.movies = list(movie_page.results)
        else:
            self.movies.extend(movie_page.results)
        self.is_fetching = False

        logger.debug(
            "Applied page %d for %r: %d movies, has_more_pages=%s",
            page,
            query,
            len(self.movies),
            self.has_more_pages,
        )
        self.emit(DataUpdated())
        self.emit(LoadingStopped())
