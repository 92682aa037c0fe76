from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..settings import Settings

_security = HTTPBasic(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


# PUBLIC_INTERFACE
def get_basic_auth_dependency(settings: Settings):
    """
    Return a FastAPI dependency callable that enforces HTTP Basic Auth only when
    ENABLE_BASIC_AUTH is enabled in settings. When disabled, the dependency is a no-op.

    Behavior:
    - If settings.enable_basic_auth is False (default): returns a dependency that does nothing.
    - If True: validates provided credentials against BASIC_AUTH_USERNAME/BASIC_AUTH_PASSWORD.
      If credentials are missing or invalid, raises 401 with WWW-Authenticate: Basic.
    """
    if not settings.enable_basic_auth:
        async def _noop() -> None:
            """No-op dependency (auth disabled)."""
            return None

        return _noop

    expected_user: Optional[str] = settings.basic_auth_username
    expected_pass: Optional[str] = settings.basic_auth_password

    async def _enforce(creds: Optional[HTTPBasicCredentials] = Depends(_security)) -> None:
        if creds is None or creds.username is None or creds.password is None:
            raise _unauthorized("Not authenticated")

        if expected_user is None or expected_pass is None:
            # auth enabled but username/password not provided
            raise _unauthorized("Server authentication not configured")

        user_ok = secrets.compare_digest(creds.username, expected_user)
        pass_ok = secrets.compare_digest(creds.password, expected_pass)
        if not (user_ok and pass_ok):
            raise _unauthorized("Invalid authentication credentials")

    return _enforce
