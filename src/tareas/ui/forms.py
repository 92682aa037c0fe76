"""
Content components for the create and detail screens.

They only know about callbacks (``on_save``, ``on_back``), never about a
state holder, so the same form serves the remote and the local slice. The
editable ``titulo``/``descripcion`` are transient copies local to the form.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from ..models import Tarea

OnBack = Callable[[], None]
OnSave = Callable[[str, str], None]

LOADING_TEXT = "Cargando..."


class NuevaTareaForm:
    """Create form. Starts blank; save is disabled while the title is blank."""

    title_bar = "Nueva Tarea"
    save_label = "Guardar Tarea"

    def __init__(self, on_back: OnBack, on_save: OnSave) -> None:
        self._on_back = on_back
        self._on_save = on_save
        self.titulo = ""
        self.descripcion = ""

    @property
    def can_save(self) -> bool:
        return bool(self.titulo.strip())

    def save(self) -> bool:
        """Call ``on_save`` if the action is enabled. Returns whether it fired."""
        if not self.can_save:
            return False
        self._on_save(self.titulo, self.descripcion)
        return True

    def back(self) -> None:
        self._on_back()

    def render(self) -> List[str]:
        action = f"[{self.save_label}]" if self.can_save else f"({self.save_label})"
        return [
            f"< {self.title_bar}",
            f"Título: {self.titulo}",
            f"Descripción: {self.descripcion}",
            action,
        ]


class DetalleTareaForm:
    """
    Detail form. Shows a loading placeholder until a task is bound, then
    edits copies of its fields.
    """

    title_bar = "Detalle de Tarea"
    save_label = "Actualizar Tarea"

    def __init__(self, on_back: OnBack, on_save: OnSave, tarea: Optional[Tarea] = None) -> None:
        self._on_back = on_back
        self._on_save = on_save
        self.tarea: Optional[Tarea] = None
        self.titulo = ""
        self.descripcion = ""
        self.bind(tarea)

    def bind(self, tarea: Optional[Tarea]) -> None:
        """
        Take a newly delivered task. The editable copies are re-seeded only
        when the task actually changed, so user edits survive re-emissions of
        the same value.
        """
        if tarea is None or tarea == self.tarea:
            return
        self.tarea = tarea
        self.titulo = tarea.titulo
        self.descripcion = tarea.descripcion

    @property
    def is_loading(self) -> bool:
        return self.tarea is None

    @property
    def can_save(self) -> bool:
        return not self.is_loading

    def save(self) -> bool:
        if not self.can_save:
            return False
        self._on_save(self.titulo, self.descripcion)
        return True

    def back(self) -> None:
        self._on_back()

    def render(self) -> List[str]:
        header = f"< {self.title_bar}"
        if self.is_loading:
            return [header, LOADING_TEXT]
        return [
            header,
            f"Título: {self.titulo}",
            f"Descripción: {self.descripcion}",
            f"[{self.save_label}]",
        ]
