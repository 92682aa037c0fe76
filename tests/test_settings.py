from tareas.settings import get_settings


def test_defaults(monkeypatch):
    for name in ("TAREAS_API_BASE_URL", "TAREAS_HTTP_TIMEOUT", "SQLITE_DB_PATH", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.api_base_url == "http://localhost:8000"
    assert s.http_timeout == 10.0
    assert s.persistence_backend == "sqlite"
    assert s.sqlite_db_path == "./data/tareas.db"
    assert s.cors_allow_origins == ["*"]
    assert s.enable_basic_auth is False


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("TAREAS_HTTP_TIMEOUT", "soon")
    monkeypatch.setenv("PERSISTENCE_BACKEND", "postgres")
    monkeypatch.setenv("ENABLE_BASIC_AUTH", "maybe")
    s = get_settings()
    assert s.http_timeout == 10.0
    assert s.persistence_backend == "sqlite"
    assert s.enable_basic_auth is False


def test_origins_and_auth(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("ENABLE_BASIC_AUTH", "yes")
    monkeypatch.setenv("BASIC_AUTH_USERNAME", "ana")
    monkeypatch.setenv("BASIC_AUTH_PASSWORD", "pw")
    s = get_settings()
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert (s.basic_auth_username, s.basic_auth_password) == ("ana", "pw")
