from .errors import (
    TaskError,
    InvalidTaskIdError,
    InvalidTaskUpdateError,
    TaskNotFoundError,
    StorageError,
)
from .task import Task, UPDATABLE_FIELDS
from .value_objects import TaskId, parse_task_id

__all__ = [
    "Task",
    "TaskId",
    "UPDATABLE_FIELDS",
    "parse_task_id",
    "TaskError",
    "InvalidTaskIdError",
    "InvalidTaskUpdateError",
    "TaskNotFoundError",
    "StorageError",
]
