from __future__ import annotations

from typing import Optional

DEFAULT_LOAD_LIST_ERROR = "Error cargando tareas"
DEFAULT_LOAD_DETAIL_ERROR = "Error cargando detalle"
DEFAULT_CREATE_ERROR = "Error al crear"
DEFAULT_UPDATE_ERROR = "Error al actualizar"

CREATE_FAILED = "Error creando tarea"
UPDATE_FAILED = "Error actualizando"
MISSING_BODY = "Sin body"


class OperationFailed(RuntimeError):
    """
    A data-access operation did not succeed.

    Non-2xx responses and missing bodies are raised as this error so that they
    travel the same failure path as transport exceptions.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @classmethod
    def for_status(cls, status_code: int) -> "OperationFailed":
        return cls(f"HTTP {status_code}", status_code=status_code)


def failure_message(exc: BaseException, default: str) -> str:
    """
    Human-readable message of a failure, or ``default`` when the exception
    carries none.
    """
    message = str(exc).strip()
    return message or default
