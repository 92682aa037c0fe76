"""
Live queries over a Repository.

A live query is a StateFlow whose value is the result of a read against the
store. It starts at None, performs the first read when somebody subscribes
and reads again after every change notification of the repository, emitting
only when the result is different.

Threading: there is no hop to an event loop. The first read runs on the
thread that subscribes, and every later read and delivery runs on the thread
that performed the write (an ``asyncio.to_thread`` worker for the local
view model). Subscribers that touch loop-owned state should consume
``updates()`` instead, which hands values to the loop thread-safely.
Re-reads of one query are serialized, so the last published value is never
older than the last write.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

from ..models import TareaEntity
from ..state import StateFlow, Unsubscribe
from .repositories import Repository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LiveQuery(StateFlow[Optional[T]], Generic[T]):
    def __init__(self, repo: Repository, query: Callable[[Repository], T]) -> None:
        super().__init__(None)
        self._repo = repo
        self._query = query
        self._remove_listener: Optional[Callable[[], None]] = None
        self._closed = False
        # read + publish as one step; reentrant for subscribers that write
        self._refresh_lock = threading.RLock()

    def _refresh(self) -> None:
        with self._refresh_lock:
            result = self._query(self._repo)
            self._emit(lambda _current: result)

    def _attach(self) -> None:
        with self._lock:
            if self._remove_listener is not None or self._closed:
                return
            self._remove_listener = self._repo.add_listener(self._refresh)
        self._refresh()

    def subscribe(self, callback: Callable[[Optional[T]], None]) -> Unsubscribe:
        self._attach()
        return super().subscribe(callback)

    def snapshot(self) -> Optional[T]:
        """Read the store now, publish the result and return it."""
        self._refresh()
        return self.value

    def close(self) -> None:
        """Stop following the store. The last value stays readable."""
        with self._lock:
            self._closed = True
            remove, self._remove_listener = self._remove_listener, None
        if remove is not None:
            remove()


# PUBLIC_INTERFACE
def observe_tarea(repo: Repository, tarea_id: int) -> LiveQuery[TareaEntity]:
    """Live read of one record by id (None while missing)."""
    return LiveQuery(repo, lambda r: r.get(tarea_id))


# PUBLIC_INTERFACE
def observe_tareas(repo: Repository) -> LiveQuery[List[TareaEntity]]:
    """Live read of every record in id order."""
    return LiveQuery(repo, lambda r: r.list())
