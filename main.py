import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import Depends, FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.requests import HTTPConnection
from pydantic import ValidationError

from config import settings
from detail import DetailViewModel
from endpoints import Endpoints
from events import DataUpdated, ErrorOccurred, HomeOutput, home_input_adapter
from home import HomeViewModel
from occurrence import count_characters
from tmdb import NetworkService
from usecases import MovieUseCases, SearchUseCases

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with httpx.AsyncClient() as client:
        app.state.network = NetworkService(client)
        app.state.endpoints = Endpoints(
            api_key=settings.tmdb_api_key,
            base_url=settings.tmdb_base_url,
            language=settings.tmdb_language,
        )
        yield


app = FastAPI(lifespan=lifespan)


def get_movie_cases(connection: HTTPConnection) -> MovieUseCases:
    return MovieUseCases(connection.app.state.network, connection.app.state.endpoints)


def get_search_cases(connection: HTTPConnection) -> SearchUseCases:
    return SearchUseCases(connection.app.state.network, connection.app.state.endpoints)


def _render(event: HomeOutput, vm: HomeViewModel) -> dict[str, Any]:
    payload = event.model_dump()
    if isinstance(event, DataUpdated):
        payload.update(
            movies=[movie.model_dump(mode="json") for movie in vm.movies],
            page=vm.page_number,
            has_more_pages=vm.has_more_pages,
            query=vm.active_query,
        )
    return payload


async def _forward_events(websocket: WebSocket, vm: HomeViewModel) -> None:
    while True:
        event = await vm.output.get()
        await websocket.send_json(_render(event, vm))


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.websocket("/ws/home")
async def home_socket(
    websocket: WebSocket,
    movie_cases=Depends(get_movie_cases),
    search_cases=Depends(get_search_cases),
):
    await websocket.accept()
    vm = HomeViewModel(movie_cases, search_cases)
    forwarder = asyncio.create_task(_forward_events(websocket, vm))
    try:
        while True:
            message = await websocket.receive_text()
            try:
                intent = home_input_adapter.validate_json(message)
            except ValidationError as exc:
                logger.info("Rejected home intent %r: %d errors", message, exc.error_count())
                vm.emit(ErrorOccurred(message=f"Invalid intent: {message}"))
                continue
            vm.send(intent)
    except WebSocketDisconnect:
        logger.info("Home screen disconnected")
    finally:
        await vm.aclose()
        forwarder.cancel()
        for outcome in await asyncio.gather(forwarder, return_exceptions=True):
            if isinstance(outcome, Exception):
                logger.warning("Home event forwarding stopped: %s", outcome)


@app.get("/movies/{movie_id}")
async def movie_detail(movie_id: int, movie_cases=Depends(get_movie_cases)):
    vm = DetailViewModel(movie_cases, movie_id)
    await vm.load()
    if vm.movie_detail is None:
        raise HTTPException(status_code=502, detail=vm.error_message)
    return {
        "movie": vm.movie_detail.model_dump(mode="json"),
        "backdrop_url": vm.movie_detail.backdrop_url(),
        "imdb_url": vm.movie_detail.imdb_url,
        "sections": [
            {"type": cell.value, "text": vm.get_cell_data(cell)} for cell in vm.sections()
        ],
    }


@app.get("/occurrences")
async def occurrences(title: str):
    return {
        "title": title,
        "occurrences": [
            {"character": o.character, "count": o.count} for o in count_characters(title)
        ],
    }
