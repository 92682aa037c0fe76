from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Tarea

TITULO_MAX_LENGTH = 200


def _clean_titulo(value: str) -> str:
    s = value.strip()
    if not (1 <= len(s) <= TITULO_MAX_LENGTH):
        raise ValueError(f"titulo length must be between 1 and {TITULO_MAX_LENGTH} characters")
    return s


# PUBLIC_INTERFACE
class TareaDTO(BaseModel):
    """
    Task record as returned by the API.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 7,
                "titulo": "Comprar pan",
                "descripcion": "Integral, sin semillas",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the task")
    titulo: str = Field(..., description="Short title of the task")
    descripcion: str = Field(default="", description="Free text description, may be empty")

    @field_validator("descripcion", mode="before")
    @classmethod
    def null_descripcion(cls, v: Optional[str]) -> str:
        """
        Servers may send null for an empty description.
        """
        return "" if v is None else v


# PUBLIC_INTERFACE
class TareaCreateRequest(BaseModel):
    """
    Body of POST /tareas.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"titulo": "Comprar pan", "descripcion": "Integral"}}
    )

    titulo: str = Field(..., description="Short title of the task", min_length=1, max_length=TITULO_MAX_LENGTH)
    descripcion: str = Field(default="", description="Free text description")

    @field_validator("titulo")
    @classmethod
    def validate_titulo(cls, v: str) -> str:
        """
        Strip whitespace and enforce 1..200 length.
        """
        return _clean_titulo(v)

    @field_validator("descripcion", mode="before")
    @classmethod
    def null_descripcion(cls, v: Optional[str]) -> str:
        return "" if v is None else v


# PUBLIC_INTERFACE
class TareaUpdateRequest(TareaCreateRequest):
    """
    Body of PUT /tareas/{id}. Full replacement of titulo and descripcion.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"titulo": "Comprar pan y leche", "descripcion": ""}}
    )


# PUBLIC_INTERFACE
def to_tarea(dto: TareaDTO) -> Tarea:
    """Map a wire record to the UI-facing Tarea."""
    return Tarea(id=dto.id, titulo=dto.titulo, descripcion=dto.descripcion)


# PUBLIC_INTERFACE
def to_tareas(dtos: Iterable[TareaDTO]) -> List[Tarea]:
    """Map wire records to Tareas, keeping response order."""
    return [to_tarea(dto) for dto in dtos]
