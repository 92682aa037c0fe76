from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from tareas.local.db import SQLiteRepository
from tareas.local.repositories import InMemoryRepository
from tareas.remote.client import TareaAPI
from tareas.schemas import TareaDTO
from tareas.server.main import create_app
from tareas.viewmodels.remote import TareasRemoteViewModel

from .fakes import FakeTareaAPI


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from ./data and from any real API configured in the shell."""
    monkeypatch.setenv("SQLITE_DB_PATH", str(tmp_path / "tareas.db"))
    monkeypatch.setenv("TAREAS_API_BASE_URL", "http://testserver")
    monkeypatch.delenv("ENABLE_BASIC_AUTH", raising=False)
    monkeypatch.delenv("PERSISTENCE_BACKEND", raising=False)


@pytest.fixture()
def memory_repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture()
def sqlite_repo(tmp_path: Path) -> SQLiteRepository:
    return SQLiteRepository(str(tmp_path / "local" / "tareas.db"))


@pytest.fixture(params=["memory", "sqlite"])
def repo(request: pytest.FixtureRequest, tmp_path: Path):
    """Every Repository implementation."""
    if request.param == "memory":
        return InMemoryRepository()
    return SQLiteRepository(str(tmp_path / "param" / "tareas.db"))


@pytest.fixture()
def server_app(memory_repo: InMemoryRepository):
    """Development server backed by a fresh in-memory repository."""
    return create_app(repository=memory_repo)


@pytest.fixture()
async def api(server_app):
    """TareaAPI talking to the in-process development server."""
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=server_app), base_url="http://testserver")
    async with TareaAPI(client) as tarea_api:
        yield tarea_api


@pytest.fixture()
def fake_api() -> FakeTareaAPI:
    return FakeTareaAPI(
        [
            TareaDTO(id=1, titulo="Comprar pan", descripcion="Integral"),
            TareaDTO(id=2, titulo="Llamar a Ana", descripcion=""),
        ]
    )


@pytest.fixture()
async def remote_vm(fake_api: FakeTareaAPI):
    vm = TareasRemoteViewModel(fake_api)  # type: ignore[arg-type]
    yield vm
    vm.close()
