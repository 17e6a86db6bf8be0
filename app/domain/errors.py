from __future__ import annotations


class TaskError(Exception):
    """
    Базовая ошибка доменного слоя задач.
    """


class InvalidTaskIdError(TaskError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid task id: {value!r}")
        self.value = value


class InvalidTaskUpdateError(TaskError):
    pass


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StorageError(TaskError):
    """
    Сбой хранилища (нет соединения, таймаут и т.п.).
    Исходная ошибка доступна через __cause__.
    """
