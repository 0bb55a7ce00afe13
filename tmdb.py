import logging
from typing import Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from endpoints import RequestDescriptor
from errors import (
    DecodeError,
    InvalidRequestError,
    InvalidResponseError,
    ServerError,
    TransportError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class NetworkService:
    """Issues GET requests against TMDB and decodes the JSON body into a model."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def load(self, request: Optional[RequestDescriptor], response_model: type[ModelT]) -> ModelT:
        url = _validated_url(request)

        try:
            response = await self.client.request(request.method, url, params=request.params)
        except httpx.TransportError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("Request to %s returned HTTP %d", url, response.status_code)
            raise ServerError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidResponseError(f"Response from {url} is not valid JSON") from exc

        try:
            return response_model.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(
                f"Response from {url} does not match {response_model.__name__}"
            ) from exc


def _validated_url(request: Optional[RequestDescriptor]) -> httpx.URL:
    if request is None or not request.url:
        raise InvalidRequestError("Missing request URL")
    try:
        url = httpx.URL(request.url)
    except httpx.InvalidURL as exc:
        raise InvalidRequestError(f"Malformed request URL: {request.url}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidRequestError(f"Malformed request URL: {request.url}")
    return url
