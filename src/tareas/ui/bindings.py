"""
Route bindings: one per (slice x screen). They wire a state holder to a
content form and to back navigation and hold no logic of their own.

Forms are updated on whatever thread publishes: the loop thread for the
remote holder, the writing worker thread for local live queries (see
``tareas.local.live``). Building a room route runs its first store read
synchronously.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from ..models import Tarea, TareaEntity, tarea_from_entity
from ..viewmodels.local import TareasViewModel
from ..viewmodels.remote import TareasRemoteViewModel
from .forms import DetalleTareaForm, NuevaTareaForm
from .routes import Navigator

Form = Union[NuevaTareaForm, DetalleTareaForm]


@dataclass
class RouteBinding:
    form: Form
    _disposers: List[Callable[[], None]] = field(default_factory=list)

    def dispose(self) -> None:
        """Drop the subscriptions this screen made."""
        while self._disposers:
            self._disposers.pop()()


# PUBLIC_INTERFACE
def detalle_tarea_remote_route(
    tarea_id: int, vm: TareasRemoteViewModel, on_back: Callable[[], None]
) -> RouteBinding:
    """Load the task, show it, update on save and go back once the update succeeded."""

    def on_save(titulo: str, descripcion: str) -> None:
        vm.update_tarea(tarea_id, titulo, descripcion, lambda exito: on_back() if exito else None)

    form = DetalleTareaForm(on_back=on_back, on_save=on_save)
    binding = RouteBinding(form=form)

    def on_selected(tarea: Optional[Tarea]) -> None:
        # "selected" may still hold the task of a previous detail screen
        if tarea is not None and tarea.id == tarea_id:
            form.bind(tarea)

    binding._disposers.append(vm.selected.subscribe(on_selected))
    vm.load_tarea(tarea_id)
    return binding


# PUBLIC_INTERFACE
def nueva_tarea_remote_route(vm: TareasRemoteViewModel, on_back: Callable[[], None]) -> RouteBinding:
    """Create on save and go back once the creation succeeded."""

    def on_save(titulo: str, descripcion: str) -> None:
        vm.add_tarea(titulo, descripcion, lambda exito: on_back() if exito else None)

    return RouteBinding(form=NuevaTareaForm(on_back=on_back, on_save=on_save))


# PUBLIC_INTERFACE
def detalle_tarea_room_route(tarea_id: int, navigator: Navigator, vm: TareasViewModel) -> RouteBinding:
    """Follow the record live, update on save and go back right away."""

    def on_save(titulo: str, descripcion: str) -> None:
        vm.update_tarea(tarea_id, titulo, descripcion)
        navigator.pop_back_stack()

    form = DetalleTareaForm(on_back=navigator.pop_back_stack, on_save=on_save)
    binding = RouteBinding(form=form)

    def on_entity(entity: Optional[TareaEntity]) -> None:
        form.bind(tarea_from_entity(entity) if entity is not None else None)

    binding._disposers.append(vm.get_tarea(tarea_id).subscribe(on_entity))
    return binding


# PUBLIC_INTERFACE
def nueva_tarea_room_route(navigator: Navigator, vm: TareasViewModel) -> RouteBinding:
    """Insert on save and go back right away."""

    def on_save(titulo: str, descripcion: str) -> None:
        vm.add_tarea(titulo, descripcion)
        navigator.pop_back_stack()

    return RouteBinding(form=NuevaTareaForm(on_back=navigator.pop_back_stack, on_save=on_save))
