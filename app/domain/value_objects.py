from __future__ import annotations

from typing import NewType

from bson import ObjectId
from bson.errors import InvalidId

from .errors import InvalidTaskIdError

TaskId = NewType("TaskId", str)


def parse_task_id(value: str) -> ObjectId:
    """
    Переводит внешний идентификатор (24 hex-символа) в ObjectId хранилища.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidTaskIdError(value) from exc
