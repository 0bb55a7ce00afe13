import httpx
import pytest
import respx

from endpoints import RequestDescriptor
from errors import (
    DecodeError,
    InvalidRequestError,
    InvalidResponseError,
    NetworkError,
    ServerError,
    TransportError,
)
from models import MovieDetail, MoviePage
from tmdb import NetworkService

TOP_RATED_URL = "https://api.themoviedb.org/3/movie/top_rated"

TMDB_TOP_RATED_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 278,
            "title": "The Shawshank Redemption",
            "original_title": "The Shawshank Redemption",
            "overview": "Framed in the 1940s for the double murder of his wife and her lover...",
            "poster_path": "/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
            "backdrop_path": "/kXfqcdQKsToO0OUXHcrrNCHDBzO.jpg",
            "genre_ids": [18, 80],
            "vote_average": 8.7,
            "vote_count": 24000,
            "release_date": "1994-09-23",
            "adult": False,
            "video": False,
        }
    ],
    "total_pages": 500,
    "total_results": 10000,
}


def _top_rated(page: int = 1) -> RequestDescriptor:
    return RequestDescriptor(TOP_RATED_URL, {"api_key": "fake_key", "page": page})


@respx.mock
async def test_load_decodes_page():
    route = respx.get(TOP_RATED_URL).mock(
        return_value=httpx.Response(200, json=TMDB_TOP_RATED_RESPONSE)
    )
    async with httpx.AsyncClient() as client:
        page = await NetworkService(client).load(_top_rated(2), MoviePage)

    assert page.total_pages == 500
    assert page.results[0].id == 278
    assert page.results[0].genre_ids == (18, 80)
    assert route.calls.last.request.url.params["page"] == "2"
    assert route.calls.last.request.url.params["api_key"] == "fake_key"


async def test_missing_request_is_invalid():
    async with httpx.AsyncClient() as client:
        with pytest.raises(InvalidRequestError):
            await NetworkService(client).load(None, MoviePage)


@pytest.mark.parametrize("url", ["", "not a url", "/movie/top_rated", "ftp://example.com/x"])
async def test_malformed_url_is_invalid(url):
    async with httpx.AsyncClient() as client:
        with pytest.raises(InvalidRequestError):
            await NetworkService(client).load(RequestDescriptor(url, {}), MoviePage)


@respx.mock
async def test_non_2xx_is_server_error():
    respx.get(TOP_RATED_URL).mock(
        return_value=httpx.Response(401, json={"status_message": "Invalid API key"})
    )
    async with httpx.AsyncClient() as client:
        with pytest.raises(ServerError) as excinfo:
            await NetworkService(client).load(_top_rated(), MoviePage)

    assert excinfo.value.status_code == 401
    assert "401" in excinfo.value.message


@respx.mock
async def test_non_json_body_is_invalid_response():
    respx.get(TOP_RATED_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))
    async with httpx.AsyncClient() as client:
        with pytest.raises(InvalidResponseError):
            await NetworkService(client).load(_top_rated(), MoviePage)


@respx.mock
async def test_wrong_shape_is_decode_error():
    respx.get("https://api.themoviedb.org/3/movie/278").mock(
        return_value=httpx.Response(200, json={"title": "No id here"})
    )
    async with httpx.AsyncClient() as client:
        with pytest.raises(DecodeError):
            await NetworkService(client).load(
                RequestDescriptor("https://api.themoviedb.org/3/movie/278", {}), MovieDetail
            )


@respx.mock
async def test_network_failure_is_transport_error_with_message():
    respx.get(TOP_RATED_URL).mock(side_effect=httpx.ConnectError("Connection refused"))
    async with httpx.AsyncClient() as client:
        with pytest.raises(TransportError) as excinfo:
            await NetworkService(client).load(_top_rated(), MoviePage)

    assert excinfo.value.message == "Connection refused"
    assert isinstance(excinfo.value, NetworkError)
