"""
Local state holder: writes go straight to the persistent store, reads are
live queries against it. The store is the source of truth, so this holder
keeps no list of its own.

Persistence errors are not caught here. They end the launched task and are
logged by the ViewModel base.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

from ..local.live import LiveQuery, observe_tarea, observe_tareas
from ..local.repositories import Repository
from ..models import TareaEntity
from .base import ViewModel

logger = logging.getLogger(__name__)


class TareasViewModel(ViewModel):
    def __init__(self, repo: Repository) -> None:
        super().__init__()
        self._repo = repo
        self._queries: List[LiveQuery] = []

    def _track(self, query: LiveQuery) -> LiveQuery:
        self._queries.append(query)
        return query

    # PUBLIC_INTERFACE
    def tareas(self) -> LiveQuery[List[TareaEntity]]:
        return self._track(observe_tareas(self._repo))

    # PUBLIC_INTERFACE
    def get_tarea(self, tarea_id: int) -> LiveQuery[TareaEntity]:
        return self._track(observe_tarea(self._repo, tarea_id))

    # PUBLIC_INTERFACE
    def add_tarea(self, titulo: str, descripcion: str) -> "asyncio.Task[TareaEntity]":
        logger.debug("Adding local tarea titulo=%r", titulo)
        return self.launch(asyncio.to_thread(self._repo.create, titulo, descripcion))

    # PUBLIC_INTERFACE
    def update_tarea(self, tarea_id: int, titulo: str, descripcion: str) -> "asyncio.Task":
        logger.debug("Updating local tarea id=%s", tarea_id)
        return self.launch(asyncio.to_thread(self._repo.update, tarea_id, titulo, descripcion))

    # PUBLIC_INTERFACE
    def delete_tarea(self, tarea_id: int) -> "asyncio.Task[bool]":
        logger.debug("Deleting local tarea id=%s", tarea_id)
        return self.launch(asyncio.to_thread(self._repo.delete, tarea_id))

    def close(self) -> None:
        super().close()
        for query in self._queries:
            query.close()
        self._queries.clear()
