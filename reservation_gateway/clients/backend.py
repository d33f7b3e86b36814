from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from reservation_gateway.encoding import dumps, loads, model_payload
from reservation_gateway.services.exceptions import (
    BackendRequestError,
    BackendServiceError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def path_segment(value: str) -> str:
    """Percent-encode a caller supplied value for use inside a URL path."""

    return quote(str(value), safe="")


class BackendClient:
    """Async HTTP client for one downstream healthcare service."""

    def __init__(
        self,
        name: str,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.name = name
        self._base_url = str(base_url).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def post(
        self, path: str, payload: BaseModel, response_model: Type[ModelT]
    ) -> ModelT:
        body = dumps(model_payload(payload))
        return await self._request("POST", path, response_model, content=body)

    async def get(self, path: str, response_model: Type[ModelT]) -> ModelT:
        return await self._request("GET", path, response_model)

    async def _request(
        self,
        method: str,
        path: str,
        response_model: Type[ModelT],
        **kwargs: Any,
    ) -> ModelT:
        client = self._ensure_client()
        logger.debug("%s %s%s", method, self._base_url, path)
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = _failure_message(self.name, exc.response)
            if 400 <= status < 500:
                raise BackendRequestError(message, status, cause=exc) from exc
            raise BackendServiceError(message, status, cause=exc) from exc
        except httpx.RequestError as exc:
            detail = str(exc) or exc.__class__.__name__
            raise BackendServiceError(
                f"Unable to reach {self.name} service: {detail}", cause=exc
            ) from exc

        try:
            data = loads(response.content)
        except ValueError as exc:
            raise BackendServiceError(
                f"{self.name} service returned a body that is not JSON",
                response.status_code,
                cause=exc,
            ) from exc

        try:
            return response_model.model_validate(data)
        except ValidationError as exc:
            raise BackendServiceError(
                f"{self.name} service returned an unexpected payload: "
                f"{exc.error_count()} validation error(s)",
                response.status_code,
                cause=exc,
            ) from exc


def _failure_message(name: str, response: httpx.Response) -> str:
    text = response.text.strip()
    if text:
        return text
    return f"{name} service returned {response.status_code} {response.reason_phrase}"


__all__ = ["BackendClient", "path_segment"]
