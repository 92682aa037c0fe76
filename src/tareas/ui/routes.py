from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

HOME = "home"

TAREA_LISTADO = "tareas/listado"
TAREA_ADD = "tareas/nueva"
TAREA_VIEW = "tareas/detalle/{id}"

TAREA_LISTADO_API = "tareas/listado_api"
TAREA_ADD_API = "tareas/nueva_api"
TAREA_VIEW_API = "tareas/detalle_api/{id}"

ALL_ROUTES = (HOME, TAREA_LISTADO, TAREA_ADD, TAREA_VIEW, TAREA_LISTADO_API, TAREA_ADD_API, TAREA_VIEW_API)


def tarea_view(tarea_id: int) -> str:
    return TAREA_VIEW.format(id=tarea_id)


def tarea_view_api(tarea_id: int) -> str:
    return TAREA_VIEW_API.format(id=tarea_id)


@dataclass(frozen=True)
class RouteMatch:
    pattern: str
    tarea_id: Optional[int] = None


def _pattern_regex(pattern: str) -> "re.Pattern[str]":
    return re.compile("^" + re.escape(pattern).replace(re.escape("{id}"), r"(?P<id>\d+)") + "$")


_MATCHERS = [(p, _pattern_regex(p)) for p in ALL_ROUTES]


def match(route: str) -> Optional[RouteMatch]:
    """Resolve a concrete route (e.g. 'tareas/detalle/3') to its pattern and id."""
    for pattern, regex in _MATCHERS:
        m = regex.match(route)
        if m is None:
            continue
        raw_id = m.groupdict().get("id")
        return RouteMatch(pattern=pattern, tarea_id=int(raw_id) if raw_id is not None else None)
    return None


class Navigator:
    """Back stack of concrete routes, starting at HOME."""

    def __init__(self, start: str = HOME) -> None:
        self._stack: List[str] = [start]

    @property
    def current(self) -> str:
        return self._stack[-1]

    @property
    def back_stack(self) -> List[str]:
        return list(self._stack)

    def navigate(self, route: str) -> None:
        if match(route) is None:
            raise ValueError(f"Unknown route: {route}")
        logger.debug("navigate %s -> %s", self.current, route)
        self._stack.append(route)

    def pop_back_stack(self) -> bool:
        """Go back one screen. Returns False when already at the start route."""
        if len(self._stack) <= 1:
            return False
        left = self._stack.pop()
        logger.debug("back %s -> %s", left, self.current)
        return True
