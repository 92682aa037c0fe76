"""
Async HTTP client for the tareas REST API.

Endpoints:
    GET    /tareas          list
    GET    /tareas/{id}     detail
    POST   /tareas          create  {titulo, descripcion}
    PUT    /tareas/{id}     update  {titulo, descripcion}
    DELETE /tareas/{id}     delete

Calls return an ``ApiResponse`` instead of raising on non-2xx statuses so the
caller decides what a failure means. Transport problems (connection refused,
timeouts) propagate as ``httpx`` exceptions.

Create and update are decided by the status alone. A 2xx body that is not a
tarea is logged and dropped, never turned into a failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from ..schemas import TareaCreateRequest, TareaDTO, TareaUpdateRequest
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

TAREAS_PATH = "/tareas"

_LIST_ADAPTER: TypeAdapter[Optional[List[TareaDTO]]] = TypeAdapter(Optional[List[TareaDTO]])
_ITEM_ADAPTER: TypeAdapter[Optional[TareaDTO]] = TypeAdapter(Optional[TareaDTO])


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """
    Status code plus the parsed body. ``body`` is None when the response was
    not successful, had no content, or carried JSON null.
    """

    status_code: int
    body: Optional[T] = None

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status_code < 300


def _parse(response: httpx.Response, adapter: TypeAdapter[Any]) -> ApiResponse[Any]:
    if not response.is_success:
        return ApiResponse(status_code=response.status_code)
    if not response.content.strip():
        return ApiResponse(status_code=response.status_code)
    return ApiResponse(
        status_code=response.status_code,
        body=adapter.validate_json(response.content),
    )


def _parse_written(response: httpx.Response) -> ApiResponse[TareaDTO]:
    # The status decides a write; an unexpected 2xx body is dropped.
    try:
        return _parse(response, _ITEM_ADAPTER)
    except ValidationError as exc:
        logger.warning(
            "%s %s -> %s with an unreadable body (%d error(s)); keeping the status only",
            response.request.method,
            response.request.url.path,
            response.status_code,
            exc.error_count(),
        )
        return ApiResponse(status_code=response.status_code)


# PUBLIC_INTERFACE
class TareaAPI:
    """
    Thin wrapper over an ``httpx.AsyncClient`` whose base URL points at the API root.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TareaAPI":
        """Build a client from TAREAS_API_* settings."""
        s = settings or get_settings()
        auth = None
        if s.api_username is not None and s.api_password is not None:
            auth = httpx.BasicAuth(s.api_username, s.api_password)
        client = httpx.AsyncClient(
            base_url=s.api_base_url,
            timeout=s.http_timeout,
            auth=auth,
            headers={"Accept": "application/json"},
        )
        return cls(client)

    async def listar(self) -> ApiResponse[List[TareaDTO]]:
        response = await self._client.get(TAREAS_PATH)
        logger.debug("GET %s -> %s", TAREAS_PATH, response.status_code)
        return _parse(response, _LIST_ADAPTER)

    async def detalle(self, tarea_id: int) -> ApiResponse[TareaDTO]:
        path = f"{TAREAS_PATH}/{tarea_id}"
        response = await self._client.get(path)
        logger.debug("GET %s -> %s", path, response.status_code)
        return _parse(response, _ITEM_ADAPTER)

    async def crear(self, request: TareaCreateRequest) -> ApiResponse[TareaDTO]:
        response = await self._client.post(TAREAS_PATH, json=request.model_dump())
        logger.debug("POST %s -> %s", TAREAS_PATH, response.status_code)
        return _parse_written(response)

    async def actualizar(self, tarea_id: int, request: TareaUpdateRequest) -> ApiResponse[TareaDTO]:
        path = f"{TAREAS_PATH}/{tarea_id}"
        response = await self._client.put(path, json=request.model_dump())
        logger.debug("PUT %s -> %s", path, response.status_code)
        return _parse_written(response)

    async def eliminar(self, tarea_id: int) -> ApiResponse[None]:
        path = f"{TAREAS_PATH}/{tarea_id}"
        response = await self._client.delete(path)
        logger.debug("DELETE %s -> %s", path, response.status_code)
        return ApiResponse(status_code=response.status_code)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TareaAPI":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
