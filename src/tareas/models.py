from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Tarea:
    """
    Task as the UI sees it.

    Fields:
    - id: integer identifier assigned by the server or the local store; never changes
    - titulo: short title, required when creating
    - descripcion: free text, may be empty
    """

    id: int
    titulo: str
    descripcion: str = ""


# PUBLIC_INTERFACE
class TareaEntity(TypedDict):
    """
    Record shape of the local persistent store. Same fields as Tarea; the
    store owns its lifecycle.
    """

    id: int
    titulo: str
    descripcion: str


def tarea_from_entity(entity: TareaEntity) -> Tarea:
    """Map a local-store record to the UI-facing Tarea."""
    return Tarea(
        id=int(entity["id"]),
        titulo=entity["titulo"],
        descripcion=entity["descripcion"] or "",
    )
