from __future__ import annotations

import json

import httpx
import pytest

from tareas.remote.client import ApiResponse, TareaAPI
from tareas.schemas import TareaCreateRequest, TareaDTO, TareaUpdateRequest
from tareas.settings import get_settings


def _mock_api(handler) -> TareaAPI:
    return TareaAPI(httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api.test"))


class TestWireFormat:
    async def test_requests_hit_expected_endpoints(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content) if request.content else None
            seen.append((request.method, request.url.path, body))
            if request.method == "DELETE":
                return httpx.Response(204)
            if request.method == "GET" and request.url.path == "/tareas":
                return httpx.Response(200, json=[])
            return httpx.Response(200, json={"id": 5, "titulo": "t", "descripcion": "d"})

        async with _mock_api(handler) as api:
            await api.listar()
            await api.detalle(5)
            await api.crear(TareaCreateRequest(titulo="t", descripcion="d"))
            await api.actualizar(5, TareaUpdateRequest(titulo="t", descripcion="d"))
            await api.eliminar(5)

        assert seen == [
            ("GET", "/tareas", None),
            ("GET", "/tareas/5", None),
            ("POST", "/tareas", {"titulo": "t", "descripcion": "d"}),
            ("PUT", "/tareas/5", {"titulo": "t", "descripcion": "d"}),
            ("DELETE", "/tareas/5", None),
        ]

    async def test_list_body_is_parsed_in_order(self):
        payload = [
            {"id": 2, "titulo": "b", "descripcion": None},
            {"id": 1, "titulo": "a", "descripcion": "x"},
        ]
        async with _mock_api(lambda r: httpx.Response(200, json=payload)) as api:
            res = await api.listar()
        assert res.is_successful
        assert res.body == [
            TareaDTO(id=2, titulo="b", descripcion=""),
            TareaDTO(id=1, titulo="a", descripcion="x"),
        ]

    @pytest.mark.parametrize("content", [b"", b"null", b"  "])
    async def test_absent_body_is_none(self, content):
        async with _mock_api(lambda r: httpx.Response(200, content=content)) as api:
            listed = await api.listar()
            detail = await api.detalle(1)
        assert listed.body is None
        assert detail.body is None
        assert detail.is_successful

    async def test_error_status_is_not_parsed(self):
        async with _mock_api(lambda r: httpx.Response(500, text="<html>boom</html>")) as api:
            res = await api.listar()
        assert res == ApiResponse(status_code=500)
        assert not res.is_successful

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(201, json={"status": "created"}),
            httpx.Response(200, text="ok"),
            httpx.Response(201, json=[1, 2]),
        ],
    )
    async def test_write_with_unexpected_body_keeps_status(self, response):
        async with _mock_api(lambda r: response) as api:
            created = await api.crear(TareaCreateRequest(titulo="t"))
            updated = await api.actualizar(1, TareaUpdateRequest(titulo="t"))
        assert created == ApiResponse(status_code=response.status_code)
        assert updated.is_successful and updated.body is None

    async def test_transport_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with _mock_api(handler) as api:
            with pytest.raises(httpx.ConnectError):
                await api.listar()


class TestAgainstServer:
    async def test_crud(self, api):
        created = await api.crear(TareaCreateRequest(titulo="  Leer  ", descripcion="Capítulo 3"))
        assert created.status_code == 201
        assert created.body.titulo == "Leer"

        listed = await api.listar()
        assert listed.body == [created.body]

        updated = await api.actualizar(created.body.id, TareaUpdateRequest(titulo="Leer más", descripcion=""))
        assert updated.body == TareaDTO(id=created.body.id, titulo="Leer más", descripcion="")

        deleted = await api.eliminar(created.body.id)
        assert deleted.status_code == 204

        missing = await api.detalle(created.body.id)
        assert missing.status_code == 404
        assert missing.body is None


async def test_from_settings_uses_env(monkeypatch):
    monkeypatch.setenv("TAREAS_API_BASE_URL", "http://tareas.example:9000/")
    monkeypatch.setenv("TAREAS_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("TAREAS_API_USERNAME", "ana")
    monkeypatch.setenv("TAREAS_API_PASSWORD", "secreto")
    async with TareaAPI.from_settings(get_settings()) as api:
        client = api._client
        assert client.base_url.host == "tareas.example"
        assert client.base_url.port == 9000
        assert client.timeout.read == 2.5
        assert isinstance(client.auth, httpx.BasicAuth)
