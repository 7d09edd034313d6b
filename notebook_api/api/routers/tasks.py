"""
Endpoints para `tasks` (variante plana del notebook).
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status

from notebook_api.api.deps import get_task_service
from notebook_api.api.schemas.task import TaskCreate, TaskOut, TaskPatch
from notebook_api.services.task_service import TaskService


router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=List[TaskOut], summary="Listar tareas")
def list_tasks(service: TaskService = Depends(get_task_service)) -> List[TaskOut]:
    return [TaskOut(**t) for t in service.list_tasks()]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskOut, summary="Crear tarea")
def create_task(
    payload: Optional[TaskCreate] = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> TaskOut:
    return TaskOut(**service.create_task(payload.title if payload else None))


@router.patch(
    "/{task_id}",
    response_model=TaskOut,
    summary="Marcar tarea",
    description="Con `done` fija el valor; sin `done` (o sin cuerpo) invierte el actual.",
)
def patch_task(
    task_id: str,
    payload: Optional[TaskPatch] = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> TaskOut:
    done = payload.done if payload else None
    return TaskOut(**service.set_done(task_id, done))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Borrar tarea")
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)) -> Response:
    service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
