from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import Callable, List, Optional

from ..models import TareaEntity
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract contract for local task storage backends.

    Besides CRUD, a repository notifies registered listeners after every
    write that changed something, which is what live queries re-read on.
    """

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []
        self._listeners_lock = RLock()

    def add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener`` for change notifications; returns a remover."""
        with self._listeners_lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        # The write is already committed; a failing listener must not undo
        # its result or starve the listeners after it.
        for listener in listeners:
            try:
                listener()
            except Exception:
                logger.exception("Change listener %r failed", listener)

    @abstractmethod
    def create(self, titulo: str, descripcion: str) -> TareaEntity:
        """Create and return a new TareaEntity."""

    @abstractmethod
    def get(self, tarea_id: int) -> Optional[TareaEntity]:
        """Return a TareaEntity by id, or None if not found."""

    @abstractmethod
    def update(self, tarea_id: int, titulo: str, descripcion: str) -> Optional[TareaEntity]:
        """Replace titulo and descripcion. Return the updated entity or None if not found."""

    @abstractmethod
    def delete(self, tarea_id: int) -> bool:
        """Delete a TareaEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self) -> List[TareaEntity]:
        """Return every TareaEntity in ascending id order."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing.
    """

    def __init__(self) -> None:
        super().__init__()
        self._lock = RLock()
        self._items: dict[int, TareaEntity] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def create(self, titulo: str, descripcion: str) -> TareaEntity:
        entity: TareaEntity = {
            "id": self._allocate_id(),
            "titulo": titulo,
            "descripcion": descripcion,
        }
        with self._lock:
            self._items[entity["id"]] = entity
        self._notify()
        return entity.copy()  # type: ignore[return-value]

    def get(self, tarea_id: int) -> Optional[TareaEntity]:
        with self._lock:
            item = self._items.get(tarea_id)
            return None if item is None else item.copy()  # type: ignore[return-value]

    def update(self, tarea_id: int, titulo: str, descripcion: str) -> Optional[TareaEntity]:
        with self._lock:
            existing = self._items.get(tarea_id)
            if existing is None:
                return None
            updated: TareaEntity = {"id": tarea_id, "titulo": titulo, "descripcion": descripcion}
            self._items[tarea_id] = updated
        self._notify()
        return updated.copy()  # type: ignore[return-value]

    def delete(self, tarea_id: int) -> bool:
        with self._lock:
            removed = self._items.pop(tarea_id, None) is not None
        if removed:
            self._notify()
        return removed

    def list(self) -> List[TareaEntity]:
        with self._lock:
            return [self._items[k].copy() for k in sorted(self._items)]  # type: ignore[misc]


# PUBLIC_INTERFACE
def get_repository(settings: Optional[Settings] = None) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository at SQLITE_DB_PATH
    """
    s = settings or get_settings()
    if s.persistence_backend == "memory":
        return InMemoryRepository()
    from .db import SQLiteRepository

    logger.debug("Using sqlite repository at %s", s.sqlite_db_path)
    return SQLiteRepository(s.sqlite_db_path)
