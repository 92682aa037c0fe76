"""
Observable state containers.

A holder keeps a ``MutableStateFlow`` private and hands out the read-only
``StateFlow`` view. Observers either register a callback with ``subscribe``
or consume snapshots with ``async for value in flow.updates()``.

Snapshots are expected to be immutable; writers replace them
(copy-on-update) instead of mutating them in place.
"""

from __future__ import annotations

import asyncio
import dataclasses
import threading
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Generic, List, Optional, Tuple, TypeVar

from .models import Tarea

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class StateFlow(Generic[T]):
    """
    Read side of an observable value.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._lock = threading.RLock()
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """
        Register ``callback``. It is called right away with the current value
        and then once per new value. Returns a function removing it again.
        """
        with self._lock:
            self._subscribers.append(callback)
            current = self._value
        callback(current)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    async def updates(self) -> AsyncIterator[T]:
        """
        Async iterator over snapshots, starting with the current one.

        Values published from other threads are handed to the consuming loop
        with ``call_soon_threadsafe``.
        """
        loop = asyncio.get_running_loop()
        queue: "asyncio.Queue[T]" = asyncio.Queue()

        def deliver(value: T) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, value)

        unsubscribe = self.subscribe(deliver)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    def _emit(self, fn: Callable[[T], T]) -> None:
        with self._lock:
            value = fn(self._value)
            if value == self._value:
                return
            self._value = value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(value)


class _ReadOnlyStateFlow(StateFlow[T]):
    def __init__(self, source: StateFlow[T]) -> None:
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        return self._source.subscribe(callback)

    def updates(self) -> AsyncIterator[T]:
        return self._source.updates()


class MutableStateFlow(StateFlow[T]):
    """
    Write side, owned by exactly one holder.
    """

    def set(self, value: T) -> None:
        self._emit(lambda _current: value)

    def update(self, fn: Callable[[T], T]) -> None:
        """Replace the value with ``fn(current)``."""
        self._emit(fn)

    def as_read_only(self) -> StateFlow[T]:
        return _ReadOnlyStateFlow(self)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class TareasUIState:
    """
    Snapshot of the remote task list screen.

    ``loading`` and ``error`` are independent: both false/None means the last
    operation finished without problems.
    """

    tareas: Tuple[Tarea, ...] = ()
    loading: bool = False
    error: Optional[str] = None

    def copy(self, **changes) -> "TareasUIState":
        if "tareas" in changes:
            changes["tareas"] = tuple(changes["tareas"])
        return dataclasses.replace(self, **changes)
