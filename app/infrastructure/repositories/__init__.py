from .task_mongo_repository import TaskMongoRepository

__all__ = [
    "TaskMongoRepository",
]
