from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ...local.repositories import Repository
from ...schemas import TareaCreateRequest, TareaDTO, TareaUpdateRequest

NOT_FOUND = "Tarea no encontrada"

router = APIRouter(
    prefix="/tareas",
    tags=["tareas"],
)


def _get_repo(request: Request) -> Repository:
    """
    Dependency returning the repository attached to the running app.
    """
    return request.app.state.get_repository()


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TareaDTO],
    summary="List Tareas",
    description="List every task in creation order.",
)
def list_tareas(repo: Repository = Depends(_get_repo)) -> List[TareaDTO]:
    return [TareaDTO(**it) for it in repo.list()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TareaDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create Tarea",
    description="Create a new task and return the created resource.",
    responses={
        201: {"description": "Tarea created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_tarea(payload: TareaCreateRequest, repo: Repository = Depends(_get_repo)) -> TareaDTO:
    created = repo.create(payload.titulo, payload.descripcion)
    return TareaDTO(**created)


# PUBLIC_INTERFACE
@router.get(
    "/{tarea_id}",
    response_model=TareaDTO,
    summary="Get Tarea",
    responses={
        200: {"description": "Tarea found"},
        404: {"description": "Tarea not found"},
    },
)
def get_tarea(tarea_id: int, repo: Repository = Depends(_get_repo)) -> TareaDTO:
    item = repo.get(tarea_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return TareaDTO(**item)


# PUBLIC_INTERFACE
@router.put(
    "/{tarea_id}",
    response_model=TareaDTO,
    summary="Replace Tarea",
    description="Replace titulo and descripcion of an existing task.",
    responses={
        200: {"description": "Tarea updated"},
        404: {"description": "Tarea not found"},
    },
)
def put_tarea(tarea_id: int, payload: TareaUpdateRequest, repo: Repository = Depends(_get_repo)) -> TareaDTO:
    updated = repo.update(tarea_id, payload.titulo, payload.descripcion)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return TareaDTO(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{tarea_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Tarea",
    responses={
        204: {"description": "Tarea deleted"},
        404: {"description": "Tarea not found"},
    },
)
def delete_tarea(tarea_id: int, repo: Repository = Depends(_get_repo)) -> None:
    """
    Delete a task. Returns 204 on success, 404 if not found.
    """
    if not repo.delete(tarea_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return None
