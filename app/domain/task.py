from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .value_objects import TaskId

UPDATABLE_FIELDS = frozenset({"title", "description"})


@dataclass(frozen=True)
class Task:
    """
    Задача пользователя.

    id          — 24 hex-символа, назначается репозиторием при создании
    title       — короткое название, обязательно
    description — произвольный текст
    created_at  — момент создания (UTC), назначается репозиторием
    """
    title: str
    description: str = ""
    id: Optional[TaskId] = None
    created_at: Optional[datetime] = None
