from __future__ import annotations

import httpx
import pytest

from tareas import cli
from tareas.remote.client import TareaAPI
from tareas.ui import routes


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # setup_logging swaps root handlers; keep pytest's capture in place.
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)


@pytest.fixture()
def remote(monkeypatch, server_app):
    def from_settings(settings=None):
        transport = httpx.ASGITransport(app=server_app)
        return TareaAPI(httpx.AsyncClient(transport=transport, base_url="http://testserver"))

    monkeypatch.setattr(cli.TareaAPI, "from_settings", from_settings)


def _rows(out: str):
    return [line.split("\t") for line in out.strip().splitlines()]


class TestLocalCommands:
    def test_add_list_update_delete(self, capsys):
        assert cli.main(["--local", "add", "Regar", "--descripcion", "balcón"]) == 0
        assert _rows(capsys.readouterr().out) == [["1", "Regar", "balcón"]]

        assert cli.main(["--local", "update", "1", "Regar mucho"]) == 0
        assert _rows(capsys.readouterr().out) == [["1", "Regar mucho", "balcón"]]

        assert cli.main(["--local", "show", "1"]) == 0
        assert "Título: Regar mucho" in capsys.readouterr().out

        assert cli.main(["--local", "delete", "1"]) == 0
        assert cli.main(["--local", "list"]) == 0
        assert capsys.readouterr().out == ""

    def test_blank_title_is_usage_error(self, capsys):
        assert cli.main(["--local", "add", "   "]) == cli.EXIT_USAGE
        assert "blank" in capsys.readouterr().err

    def test_missing_records(self, capsys):
        assert cli.main(["--local", "show", "9"]) == cli.EXIT_FAILED
        assert cli.main(["--local", "delete", "9"]) == cli.EXIT_FAILED


class TestRemoteCommands:
    def test_add_update_show_delete(self, remote, capsys):
        assert cli.main(["add", "Remota", "--descripcion", "uno"]) == 0
        assert _rows(capsys.readouterr().out) == [["1", "Remota", "uno"]]

        assert cli.main(["update", "1", "Remota 2"]) == 0
        assert _rows(capsys.readouterr().out) == [["1", "Remota 2", "uno"]]

        assert cli.main(["show", "1"]) == 0
        assert "Título: Remota 2" in capsys.readouterr().out

        assert cli.main(["delete", "1"]) == 0
        assert cli.main(["list"]) == 0
        assert capsys.readouterr().out == ""

    def test_failures_exit_non_zero(self, remote, capsys):
        assert cli.main(["show", "5"]) == cli.EXIT_FAILED
        assert "HTTP 404" in capsys.readouterr().err
        assert cli.main(["delete", "5"]) == cli.EXIT_FAILED
        assert cli.main(["update", "5", "x"]) == cli.EXIT_FAILED

    def test_unreachable_api(self, monkeypatch, capsys):
        def from_settings(settings=None):
            def refuse(request):
                raise httpx.ConnectError("Connection refused", request=request)

            return TareaAPI(httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://x"))

        monkeypatch.setattr(cli.TareaAPI, "from_settings", from_settings)
        assert cli.main(["list"]) == cli.EXIT_FAILED
        assert "Connection refused" in capsys.readouterr().err

    async def test_delete_without_outcome_is_a_failure(self, remote_vm, monkeypatch, capsys):
        # e.g. the delete task was cancelled before it reported back
        monkeypatch.setattr(remote_vm, "delete_tarea", lambda tarea_id, on_result=None: None)
        args = cli.build_parser().parse_args(["delete", "1"])
        navigator = routes.Navigator(routes.TAREA_LISTADO_API)
        assert await cli._remote_command(args, remote_vm, navigator) == cli.EXIT_FAILED
        assert "could not delete tarea 1" in capsys.readouterr().err
