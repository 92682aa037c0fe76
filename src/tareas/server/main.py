"""
Development server for the tareas REST API.

Serves the endpoints the remote slice consumes, backed by a local Repository,
so the client can be exercised without an external backend:

    tareas serve --port 8000
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..local.repositories import Repository, get_repository
from ..settings import Settings, get_settings
from .auth import get_basic_auth_dependency
from .routers import tareas as tareas_router

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "tareas", "description": "CRUD operations for tareas."},
]


class _LazyRepository:
    """Creates the configured repository on first use, once per app."""

    def __init__(self, settings: Settings, repository: Optional[Repository]) -> None:
        self._settings = settings
        self._repository = repository
        self._lock = threading.Lock()

    def __call__(self) -> Repository:
        with self._lock:
            if self._repository is None:
                self._repository = get_repository(self._settings)
                logger.info("Server repository backend=%s", self._settings.persistence_backend)
            return self._repository


# PUBLIC_INTERFACE
def create_app(repository: Optional[Repository] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API app. ``repository`` overrides the one chosen by settings."""
    s = settings or get_settings()
    app = FastAPI(
        title="Tareas API",
        description="REST API for tareas (development server).",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = s
    app.state.get_repository = _LazyRepository(s, repository)

    allow_all = (s.cors_allow_origins == ["*"]) or (len(s.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else s.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        logger.info("Rejected %s %s: validation failed", request.method, request.url.path)
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_errors(exc),
            },
        )

    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": s.persistence_backend}

    auth_dep = get_basic_auth_dependency(s)
    app.include_router(tareas_router.router, dependencies=[Depends(auth_dep)])
    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    # pydantic puts the raw exception into "ctx" for custom validators
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors


app = create_app()
