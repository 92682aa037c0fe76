"""
Command line front end.

    tareas serve [--host HOST] [--port PORT]
    tareas [--local] list
    tareas [--local] show ID
    tareas [--local] add TITULO [--descripcion TEXT]
    tareas [--local] update ID TITULO [--descripcion TEXT]
    tareas [--local] delete ID

Without ``--local`` commands go through the REST API at TAREAS_API_BASE_URL;
with it they go to the local store at SQLITE_DB_PATH. Each command drives the
same state holders and route bindings a screen would.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from . import __version__
from .local.repositories import get_repository
from .logging_setup import setup_logging
from .models import Tarea, TareaEntity, tarea_from_entity
from .remote.client import TareaAPI
from .settings import Settings, get_settings
from .ui import routes
from .ui.bindings import (
    detalle_tarea_remote_route,
    detalle_tarea_room_route,
    nueva_tarea_remote_route,
    nueva_tarea_room_route,
)
from .ui.forms import DetalleTareaForm
from .viewmodels.local import TareasViewModel
from .viewmodels.remote import TareasRemoteViewModel

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tareas", description="Manage tareas locally or through the REST API.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--local", action="store_true", help="use the local store instead of the REST API")
    parser.add_argument("--log-level", default=None, help="logging level (default: TAREAS_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the development API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    sub.add_parser("list", help="list every tarea")

    show = sub.add_parser("show", help="show one tarea")
    show.add_argument("id", type=int)

    add = sub.add_parser("add", help="create a tarea")
    add.add_argument("titulo")
    add.add_argument("--descripcion", default="")

    update = sub.add_parser("update", help="replace titulo/descripcion of a tarea")
    update.add_argument("id", type=int)
    update.add_argument("titulo")
    update.add_argument("--descripcion", default=None, help="keep the current one when omitted")

    delete = sub.add_parser("delete", help="delete a tarea")
    delete.add_argument("id", type=int)
    return parser


def _print_rows(rows: Sequence[Tarea]) -> None:
    for t in rows:
        print(f"{t.id}\t{t.titulo}\t{t.descripcion}")


def _print_form(form: DetalleTareaForm) -> None:
    for line in form.render():
        print(line)


async def _run_remote(args: argparse.Namespace, settings: Settings) -> int:
    async with TareaAPI.from_settings(settings) as api:
        vm = TareasRemoteViewModel(api)
        navigator = routes.Navigator(routes.TAREA_LISTADO_API)
        try:
            return await _remote_command(args, vm, navigator)
        finally:
            vm.close()


async def _remote_command(args: argparse.Namespace, vm: TareasRemoteViewModel, navigator: routes.Navigator) -> int:
    if args.command == "list":
        vm.load_tareas()
        await vm.join()
        state = vm.state.value
        if state.error:
            print(f"error: {state.error}", file=sys.stderr)
            return EXIT_FAILED
        _print_rows(state.tareas)
        return EXIT_OK

    if args.command == "delete":
        results: List[bool] = []
        vm.delete_tarea(args.id, on_result=results.append)
        await vm.join()
        if results != [True]:
            print(f"error: could not delete tarea {args.id}", file=sys.stderr)
            return EXIT_FAILED
        return EXIT_OK

    if args.command == "add":
        navigator.navigate(routes.TAREA_ADD_API)
        binding = nueva_tarea_remote_route(vm, on_back=navigator.pop_back_stack)
    else:
        navigator.navigate(routes.tarea_view_api(args.id))
        binding = detalle_tarea_remote_route(args.id, vm, on_back=navigator.pop_back_stack)
        await vm.join()
    form = binding.form
    screen = navigator.current
    try:
        if isinstance(form, DetalleTareaForm) and form.is_loading:
            print(f"error: {vm.state.value.error or 'tarea not found'}", file=sys.stderr)
            return EXIT_FAILED
        if args.command == "show":
            _print_form(form)
            return EXIT_OK

        form.titulo = args.titulo
        if args.descripcion is not None:
            form.descripcion = args.descripcion
        if not form.save():
            print("error: titulo must not be blank", file=sys.stderr)
            return EXIT_USAGE
        await vm.join()
        if navigator.current == screen:
            print(f"error: {vm.state.value.error}", file=sys.stderr)
            return EXIT_FAILED
        _print_rows(vm.state.value.tareas)
        return EXIT_OK
    finally:
        binding.dispose()


async def _run_local(args: argparse.Namespace, settings: Settings) -> int:
    vm = TareasViewModel(get_repository(settings))
    navigator = routes.Navigator(routes.TAREA_LISTADO)
    try:
        return await _local_command(args, vm, navigator)
    finally:
        vm.close()


async def _local_command(args: argparse.Namespace, vm: TareasViewModel, navigator: routes.Navigator) -> int:
    if args.command == "delete":
        deleted = await vm.delete_tarea(args.id)
        if not deleted:
            print(f"error: tarea {args.id} not found", file=sys.stderr)
            return EXIT_FAILED
        return EXIT_OK

    if args.command in ("show", "update"):
        navigator.navigate(routes.tarea_view(args.id))
        binding = detalle_tarea_room_route(args.id, navigator, vm)
        form = binding.form
        try:
            if isinstance(form, DetalleTareaForm) and form.is_loading:
                print(f"error: tarea {args.id} not found", file=sys.stderr)
                return EXIT_FAILED
            if args.command == "show":
                _print_form(form)
                return EXIT_OK
            form.titulo = args.titulo
            if args.descripcion is not None:
                form.descripcion = args.descripcion
            form.save()
            await vm.join()
        finally:
            binding.dispose()
    elif args.command == "add":
        navigator.navigate(routes.TAREA_ADD)
        binding = nueva_tarea_room_route(navigator, vm)
        binding.form.titulo = args.titulo
        binding.form.descripcion = args.descripcion
        if not binding.form.save():
            print("error: titulo must not be blank", file=sys.stderr)
            return EXIT_USAGE
        await vm.join()

    rows: List[TareaEntity] = vm.tareas().snapshot() or []
    _print_rows([tarea_from_entity(e) for e in rows])
    return EXIT_OK


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .server.main import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    if args.command == "serve":
        return _serve(args)
    if args.local:
        return asyncio.run(_run_local(args, settings))
    return asyncio.run(_run_remote(args, settings))


if __name__ == "__main__":
    sys.exit(main())
