from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.repositories.task_repository import TaskRepository
from app.domain.task import Task

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


def get_task_repository(request: Request) -> TaskRepository:
    return request.app.state.task_repository


# ---------- Схемы (Swagger-модели) ----------


class CreateTaskRequest(BaseModel):
    title: str = Field(
        ...,
        min_length=1,
        description="Короткое название задачи",
        examples=["Test Task"],
    )
    description: str = Field(
        "",
        description="Произвольное описание",
        examples=["This is a test task"],
    )


class UpdateTaskRequest(BaseModel):
    """
    Частичное обновление: меняются только переданные поля.
    Любые другие ключи (в т.ч. id, createdAt) отклоняются.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(
        None,
        min_length=1,
        description="Новое название",
        examples=["Updated Task"],
    )
    description: Optional[str] = Field(
        None,
        description="Новое описание",
    )

    @field_validator("title", "description")
    @classmethod
    def _reject_null(cls, value: Optional[str]) -> str:
        # null не означает "не менять": поле нужно просто не передавать
        if value is None:
            raise ValueError("must not be null")
        return value


class TaskResponse(BaseModel):
    id: str = Field(
        ...,
        description="Идентификатор задачи (24 hex-символа)",
        examples=["665f1c2e8b3e4a0012345678"],
    )
    title: str
    description: str
    created_at: datetime = Field(
        ...,
        serialization_alias="createdAt",
        description="Момент создания (ISO 8601, UTC)",
    )


class MessageResponse(BaseModel):
    message: str


def _to_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=str(task.id),
        title=task.title,
        description=task.description,
        created_at=task.created_at,
    )


# ---------- Эндпоинты ----------


@router.post(
    "",
    response_model=TaskResponse,
    status_code=201,
    summary="Создать задачу",
)
async def create_task(
    payload: CreateTaskRequest,
    repo: TaskRepository = Depends(get_task_repository),
) -> TaskResponse:
    task = await repo.create(
        Task(title=payload.title, description=payload.description)
    )
    return _to_response(task)


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="Список задач",
    description="Возвращает все задачи в порядке хранилища.",
)
async def list_tasks(
    repo: TaskRepository = Depends(get_task_repository),
) -> List[TaskResponse]:
    tasks = await repo.find_all()
    return [_to_response(t) for t in tasks]


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Получить задачу",
)
async def get_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
) -> TaskResponse:
    task = await repo.get_by_id(task_id)
    return _to_response(task)


@router.put(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Обновить задачу",
    description="Меняет только переданные поля (title, description).",
)
async def update_task(
    task_id: str,
    payload: UpdateTaskRequest,
    repo: TaskRepository = Depends(get_task_repository),
) -> MessageResponse:
    await repo.update(task_id, payload.model_dump(exclude_unset=True))
    return MessageResponse(message="Task updated successfully")


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Удалить задачу",
)
async def delete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
) -> MessageResponse:
    await repo.delete(task_id)
    return MessageResponse(message="Task deleted successfully")
