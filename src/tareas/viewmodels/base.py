from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewModel:
    """
    Base for state holders.

    Every operation is started with ``launch`` as an independent asyncio task
    owned by the holder. ``close`` cancels whatever is still running. There
    is no ordering between launched tasks: the last one to write wins.
    """

    def __init__(self) -> None:
        self._tasks: Set["asyncio.Task[Any]"] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def launch(self, coro: Coroutine[Any, Any, T]) -> "asyncio.Task[T]":
        """Start ``coro`` on the running loop and return its handle."""
        if self._closed:
            coro.close()
            raise RuntimeError(f"{type(self).__name__} is closed")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: "asyncio.Task[Any]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "%s task %s failed",
                type(self).__name__,
                task.get_name(),
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def join(self) -> None:
        """
        Wait until no launched task is running, including tasks launched by
        other tasks while waiting. Failures are not re-raised here.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel every in-flight task. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        logger.debug("%s closed, cancelled %d task(s)", type(self).__name__, len(pending))
