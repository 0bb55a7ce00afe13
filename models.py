from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p"
IMDB_TITLE_BASE = "https://www.imdb.com/title"


class MovieSummary(BaseModel):
    """One entry of a top-rated or search listing.

    Two summaries are the same movie iff their ids match.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: Optional[str] = None
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    genre_ids: tuple[int, ...] = ()
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    release_date: Optional[str] = None
    adult: Optional[bool] = None
    video: Optional[bool] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MovieSummary):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def poster_url(self, size: str = "w500") -> Optional[str]:
        return f"{TMDB_IMAGE_BASE}/{size}{self.poster_path}" if self.poster_path else None


class MoviePage(BaseModel):
    page: int = 1
    results: list[MovieSummary] = Field(default_factory=list)
    total_pages: Optional[int] = None
    total_results: Optional[int] = None


class Genre(BaseModel):
    id: int
    name: Optional[str] = None


class MovieDetail(BaseModel):
    id: int
    imdb_id: Optional[str] = None
    title: Optional[str] = None
    original_title: Optional[str] = None
    overview: Optional[str] = None
    tagline: Optional[str] = None
    homepage: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    genres: list[Genre] = Field(default_factory=list)
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None

    @property
    def imdb_url(self) -> Optional[str]:
        return f"{IMDB_TITLE_BASE}/{self.imdb_id}" if self.imdb_id else None

    def backdrop_url(self, size: str = "w780") -> Optional[str]:
        return f"{TMDB_IMAGE_BASE}/{size}{self.backdrop_path}" if self.backdrop_path else None


class CharacterOccurrence(NamedTuple):
    character: str
    count: int
