from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping

from app.domain.task import Task


class TaskRepository(ABC):
    """
    Абстракция над хранилищем задач.

    Все методы принимают внешний строковый идентификатор и сами его разбирают.
    Ошибки наследуются от TaskError:
    InvalidTaskIdError, InvalidTaskUpdateError, TaskNotFoundError, StorageError.
    """

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """
        Persist new task, return it with id and created_at assigned.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, task_id: str) -> Task:
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> List[Task]:
        raise NotImplementedError

    @abstractmethod
    async def update(self, task_id: str, fields: Mapping[str, Any]) -> None:
        """
        Merge given fields into the stored task. Unnamed fields stay untouched.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        raise NotImplementedError
