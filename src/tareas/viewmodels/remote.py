"""
Remote state holder: reads and writes tasks through the REST API and exposes
the result as observable state.

The UI never calls the API itself. It observes ``state`` (list, loading flag,
error message) and ``selected`` (task shown on the detail screen) and calls
the operations below, each of which runs as its own task.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..errors import (
    CREATE_FAILED,
    DEFAULT_CREATE_ERROR,
    DEFAULT_LOAD_DETAIL_ERROR,
    DEFAULT_LOAD_LIST_ERROR,
    DEFAULT_UPDATE_ERROR,
    MISSING_BODY,
    UPDATE_FAILED,
    OperationFailed,
    failure_message,
)
from ..models import Tarea
from ..remote.client import TareaAPI
from ..schemas import TareaCreateRequest, TareaUpdateRequest, to_tarea, to_tareas
from ..state import MutableStateFlow, StateFlow, TareasUIState
from .base import ViewModel

logger = logging.getLogger(__name__)

OnResult = Callable[[bool], None]


class TareasRemoteViewModel(ViewModel):
    def __init__(self, api: TareaAPI) -> None:
        super().__init__()
        self._api = api
        self._state: MutableStateFlow[TareasUIState] = MutableStateFlow(TareasUIState())
        self._selected: MutableStateFlow[Optional[Tarea]] = MutableStateFlow(None)
        self.state: StateFlow[TareasUIState] = self._state.as_read_only()
        self.selected: StateFlow[Optional[Tarea]] = self._selected.as_read_only()

    def _set_error(self, message: str) -> None:
        self._state.update(lambda current: current.copy(error=message))

    # PUBLIC_INTERFACE
    def load_tareas(self) -> "asyncio.Task[None]":
        """
        Fetch the whole list and replace the current one.

        loading goes true (and error is cleared) before the request and false
        after it. On failure the previous list is kept and error holds the
        failure message.
        """
        return self.launch(self._load_tareas())

    async def _load_tareas(self) -> None:
        self._state.update(lambda current: current.copy(loading=True, error=None))
        try:
            res = await self._api.listar()
            if not res.is_successful:
                raise OperationFailed.for_status(res.status_code)
            tareas = to_tareas(res.body or [])
        except Exception as exc:
            message = failure_message(exc, DEFAULT_LOAD_LIST_ERROR)
            logger.warning("Loading tareas failed: %s", message)
            self._state.update(lambda current: current.copy(error=message, loading=False))
            return
        logger.debug("Loaded %d tareas", len(tareas))
        self._state.update(lambda current: current.copy(tareas=tareas, loading=False))

    # PUBLIC_INTERFACE
    def load_tarea(self, tarea_id: int) -> "asyncio.Task[None]":
        """
        Fetch one task into ``selected``. On failure ``selected`` is left as
        it was and the shared error is set.
        """
        return self.launch(self._load_tarea(tarea_id))

    async def _load_tarea(self, tarea_id: int) -> None:
        try:
            res = await self._api.detalle(tarea_id)
            if not res.is_successful:
                raise OperationFailed.for_status(res.status_code)
            if res.body is None:
                raise OperationFailed(MISSING_BODY, status_code=res.status_code)
            tarea = to_tarea(res.body)
        except Exception as exc:
            message = failure_message(exc, DEFAULT_LOAD_DETAIL_ERROR)
            logger.warning("Loading tarea id=%s failed: %s", tarea_id, message)
            self._set_error(message)
            return
        self._selected.set(tarea)

    # PUBLIC_INTERFACE
    def add_tarea(self, titulo: str, descripcion: str, on_result: OnResult) -> "asyncio.Task[None]":
        """
        Create a task. On success a list refresh is launched and then
        ``on_result(True)`` is called without waiting for the refresh; on
        failure the error is set and ``on_result(False)`` is called.
        """
        return self.launch(self._add_tarea(titulo, descripcion, on_result))

    async def _add_tarea(self, titulo: str, descripcion: str, on_result: OnResult) -> None:
        try:
            request = TareaCreateRequest(titulo=titulo, descripcion=descripcion)
            res = await self._api.crear(request)
            if not res.is_successful:
                raise OperationFailed(CREATE_FAILED, status_code=res.status_code)
        except Exception as exc:
            message = failure_message(exc, DEFAULT_CREATE_ERROR)
            logger.warning("Creating tarea failed: %s", message)
            self._set_error(message)
            on_result(False)
            return
        logger.info("Created tarea titulo=%r", titulo)
        self.load_tareas()
        on_result(True)

    # PUBLIC_INTERFACE
    def update_tarea(
        self, tarea_id: int, titulo: str, descripcion: str, on_result: OnResult
    ) -> "asyncio.Task[None]":
        """Replace titulo/descripcion of a task. Same contract as add_tarea."""
        return self.launch(self._update_tarea(tarea_id, titulo, descripcion, on_result))

    async def _update_tarea(self, tarea_id: int, titulo: str, descripcion: str, on_result: OnResult) -> None:
        try:
            request = TareaUpdateRequest(titulo=titulo, descripcion=descripcion)
            res = await self._api.actualizar(tarea_id, request)
            if not res.is_successful:
                raise OperationFailed(UPDATE_FAILED, status_code=res.status_code)
        except Exception as exc:
            message = failure_message(exc, DEFAULT_UPDATE_ERROR)
            logger.warning("Updating tarea id=%s failed: %s", tarea_id, message)
            self._set_error(message)
            on_result(False)
            return
        logger.info("Updated tarea id=%s", tarea_id)
        self.load_tareas()
        on_result(True)

    # PUBLIC_INTERFACE
    def delete_tarea(self, tarea_id: int, on_result: Optional[OnResult] = None) -> "asyncio.Task[None]":
        """
        Delete a task and refresh the list on success.

        A failed delete does not touch ``state``: loading, error and the list
        stay as they were. It is only logged and, when given, reported through
        ``on_result(False)``.
        """
        return self.launch(self._delete_tarea(tarea_id, on_result))

    async def _delete_tarea(self, tarea_id: int, on_result: Optional[OnResult]) -> None:
        try:
            res = await self._api.eliminar(tarea_id)
            if not res.is_successful:
                raise OperationFailed.for_status(res.status_code)
        except Exception as exc:
            logger.warning("Deleting tarea id=%s failed: %s", tarea_id, exc)
            if on_result is not None:
                on_result(False)
            return
        logger.info("Deleted tarea id=%s", tarea_id)
        self.load_tareas()
        if on_result is not None:
            on_result(True)
