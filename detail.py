import asyncio
import enum
import logging
from typing import Optional

from errors import UnknownError
from events import (
    DataUpdated,
    DetailInput,
    DetailOutput,
    ErrorOccurred,
    FetchDetail,
    LoadingStarted,
    LoadingStopped,
    NavigateToImdb,
    OpenImdb,
)
from models import MovieDetail
from usecases import Failure, MovieUseCaseTypes

logger = logging.getLogger(__name__)


class CellType(str, enum.Enum):
    IMAGE_AND_TITLE = "image_and_title"
    OVERVIEW = "overview"
    GENRE = "genre"
    VOTE = "vote"
    RELEASE_DATE = "release_date"
    IMDB_BUTTON = "imdb_button"


class DetailViewModel:
    """Loads one movie's detail on demand and exposes it as display sections."""

    def __init__(self, movie_cases: MovieUseCaseTypes, movie_id: int) -> None:
        self.movie_cases = movie_cases
        self.movie_id = movie_id
        self.output: asyncio.Queue[DetailOutput] = asyncio.Queue()
        self.movie_detail: Optional[MovieDetail] = None
        self.error_message: Optional[str] = None
        self._request: Optional[asyncio.Task] = None

    def send(self, event: DetailInput) -> None:
        if isinstance(event, FetchDetail):
            if self._request is not None and not self._request.done():
                return
            self._request = asyncio.create_task(self.load())
        elif isinstance(event, OpenImdb):
            url = self.movie_detail.imdb_url if self.movie_detail else None
            if url is None:
                logger.debug("No IMDb id for movie %d", self.movie_id)
                return
            self.output.put_nowait(NavigateToImdb(url=url))
        else:
            raise TypeError(f"Unsupported intent: {event!r}")

    async def load(self) -> None:
        self.output.put_nowait(LoadingStarted())
        try:
            result = await self.movie_cases.movie_detail(self.movie_id)
        except Exception as exc:
            logger.exception("Detail request for movie %d raised", self.movie_id)
            result = Failure(UnknownError(str(exc) or exc.__class__.__name__))
        if isinstance(result, Failure):
            self.error_message = result.message
            self.output.put_nowait(ErrorOccurred(message=result.message))
        else:
            self.movie_detail = result.value
            self.error_message = None
            self.output.put_nowait(DataUpdated())
        self.output.put_nowait(LoadingStopped())

    async def join(self) -> None:
        if self._request is not None:
            await self._request

    def sections(self) -> list[CellType]:
        return list(CellType) if self.movie_detail else []

    def get_cell_data(self, cell_type: CellType) -> str:
        detail = self.movie_detail
        if detail is None:
            return ""
        if cell_type is CellType.IMAGE_AND_TITLE:
            return detail.original_title or detail.title or ""
        if cell_type is CellType.OVERVIEW:
            return detail.overview or ""
        if cell_type is CellType.GENRE:
            return " ".join(g.name for g in detail.genres if g.name)
        if cell_type is CellType.VOTE:
            return f"Vote : {detail.vote_average or 0:.2f}"
        if cell_type is CellType.RELEASE_DATE:
            return f"Release Date : {detail.release_date or '-'}"
        return "Visit IMDB Page"
