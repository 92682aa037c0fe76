from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars (client):
    - TAREAS_API_BASE_URL: base URL of the tareas REST API. Default 'http://localhost:8000'
    - TAREAS_HTTP_TIMEOUT: request timeout in seconds. Default 10
    - TAREAS_API_USERNAME / TAREAS_API_PASSWORD: optional HTTP Basic credentials sent by the client
    - TAREAS_LOG_LEVEL: logging level name. Default 'INFO'

    Env vars (local store and development server):
    - PERSISTENCE_BACKEND: 'sqlite' (default) or 'memory'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/tareas.db'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - ENABLE_BASIC_AUTH: 'true' to protect the development server with HTTP Basic Auth
    - BASIC_AUTH_USERNAME / BASIC_AUTH_PASSWORD: expected credentials when ENABLE_BASIC_AUTH=true
    """

    api_base_url: str
    http_timeout: float
    api_username: Optional[str]
    api_password: Optional[str]
    log_level: str
    persistence_backend: str
    sqlite_db_path: str
    cors_allow_origins: List[str]
    enable_basic_auth: bool
    basic_auth_username: Optional[str]
    basic_auth_password: Optional[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    base_url = _get_env("TAREAS_API_BASE_URL", "http://localhost:8000").strip().rstrip("/")
    timeout = _parse_float(_get_env("TAREAS_HTTP_TIMEOUT", "10"), 10.0)

    backend = _get_env("PERSISTENCE_BACKEND", "sqlite").strip().lower()
    if backend not in {"memory", "sqlite"}:
        backend = "sqlite"

    sqlite_path = _get_env("SQLITE_DB_PATH", "./data/tareas.db").strip()
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))

    enable_basic_auth = _parse_bool(_get_env("ENABLE_BASIC_AUTH", "false"), False)
    basic_user = os.getenv("BASIC_AUTH_USERNAME") if enable_basic_auth else None
    basic_pass = os.getenv("BASIC_AUTH_PASSWORD") if enable_basic_auth else None

    return Settings(
        api_base_url=base_url,
        http_timeout=timeout,
        api_username=os.getenv("TAREAS_API_USERNAME") or None,
        api_password=os.getenv("TAREAS_API_PASSWORD") or None,
        log_level=_get_env("TAREAS_LOG_LEVEL", "INFO").strip().upper(),
        persistence_backend=backend,
        sqlite_db_path=sqlite_path,
        cors_allow_origins=origins,
        enable_basic_auth=enable_basic_auth,
        basic_auth_username=basic_user,
        basic_auth_password=basic_pass,
    )
