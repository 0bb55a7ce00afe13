"""Intents sent to the view models and the events they emit.

Every message carries a ``type`` tag so it can be read from and written to
JSON by the web adapter.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

# Home screen intents


class LoadInitial(BaseModel):
    type: Literal["load_initial"] = "load_initial"


class LoadMore(BaseModel):
    type: Literal["load_more"] = "load_more"


class Search(BaseModel):
    type: Literal["search"] = "search"
    search_text: str


class ClearSearch(BaseModel):
    type: Literal["clear_search"] = "clear_search"


class SelectItem(BaseModel):
    type: Literal["select_item"] = "select_item"
    index: int


class ShowOccurrences(BaseModel):
    type: Literal["show_occurrences"] = "show_occurrences"
    title: str


HomeInput = Annotated[
    Union[LoadInitial, LoadMore, Search, ClearSearch, SelectItem, ShowOccurrences],
    Field(discriminator="type"),
]

home_input_adapter = TypeAdapter(HomeInput)

# Detail screen intents


class FetchDetail(BaseModel):
    type: Literal["fetch_detail"] = "fetch_detail"


class OpenImdb(BaseModel):
    type: Literal["open_imdb"] = "open_imdb"


DetailInput = Union[FetchDetail, OpenImdb]

# Output events


class LoadingStarted(BaseModel):
    type: Literal["loading_started"] = "loading_started"


class LoadingStopped(BaseModel):
    type: Literal["loading_stopped"] = "loading_stopped"


class DataUpdated(BaseModel):
    type: Literal["data_updated"] = "data_updated"


class ErrorOccurred(BaseModel):
    type: Literal["error_occurred"] = "error_occurred"
    message: str


class NavigateToDetail(BaseModel):
    type: Literal["navigate_to_detail"] = "navigate_to_detail"
    movie_id: int


class NavigateToOccurrences(BaseModel):
    type: Literal["navigate_to_occurrences"] = "navigate_to_occurrences"
    title: str


class NavigateToImdb(BaseModel):
    type: Literal["navigate_to_imdb"] = "navigate_to_imdb"
    url: str


HomeOutput = Union[
    LoadingStarted,
    LoadingStopped,
    DataUpdated,
    ErrorOccurred,
    NavigateToDetail,
    NavigateToOccurrences,
]

DetailOutput = Union[LoadingStarted, LoadingStopped, DataUpdated, ErrorOccurred, NavigateToImdb]
