from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from bson import ObjectId
from pymongo.errors import PyMongoError

from app.domain.errors import InvalidTaskUpdateError, StorageError, TaskNotFoundError
from app.domain.repositories.task_repository import TaskRepository
from app.domain.task import UPDATABLE_FIELDS, Task
from app.domain.value_objects import TaskId, parse_task_id
from app.infrastructure.db.mongo import MongoDatabase

logger = logging.getLogger(__name__)

COLLECTION_NAME = "tasks"


def _utcnow() -> datetime:
    # MongoDB хранит даты с точностью до миллисекунд
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class TaskMongoRepository(TaskRepository):
    """
    MongoDB-based implementation of TaskRepository.

    Каждая операция делает один вызов коллекции `tasks`.
    Ошибки драйвера оборачиваются в StorageError без повторов.
    """

    def __init__(self, db: MongoDatabase) -> None:
        self._collection = db.collection(COLLECTION_NAME)

    async def create(self, task: Task) -> Task:
        """
        Assigns id and created_at, inserts the document.
        """
        object_id = ObjectId()
        created = replace(task, id=TaskId(str(object_id)), created_at=_utcnow())

        try:
            await self._collection.insert_one(self._map_task_to_document(created, object_id))
        except PyMongoError as exc:
            raise StorageError("Failed to create task") from exc

        logger.info("Task created: id=%s", created.id)
        return created

    async def get_by_id(self, task_id: str) -> Task:
        object_id = parse_task_id(task_id)

        try:
            document = await self._collection.find_one({"_id": object_id})
        except PyMongoError as exc:
            raise StorageError("Failed to get task") from exc

        if document is None:
            raise TaskNotFoundError(task_id)

        return self._map_document_to_task(document)

    async def find_all(self) -> List[Task]:
        try:
            documents = await self._collection.find({}).to_list()
        except PyMongoError as exc:
            raise StorageError("Failed to get tasks") from exc

        return [self._map_document_to_task(doc) for doc in documents]

    async def update(self, task_id: str, fields: Mapping[str, Any]) -> None:
        """
        Merges fields with $set. Only title/description may be changed.
        """
        object_id = parse_task_id(task_id)

        if not fields:
            raise InvalidTaskUpdateError("No fields to update")

        unknown = sorted(set(fields) - UPDATABLE_FIELDS)
        if unknown:
            raise InvalidTaskUpdateError(f"Unknown fields: {', '.join(unknown)}")

        try:
            result = await self._collection.update_one(
                {"_id": object_id},
                {"$set": dict(fields)},
            )
        except PyMongoError as exc:
            raise StorageError("Failed to update task") from exc

        if result.matched_count == 0:
            raise TaskNotFoundError(task_id)

        logger.debug("Task updated: id=%s fields=%s", task_id, sorted(fields))

    async def delete(self, task_id: str) -> None:
        object_id = parse_task_id(task_id)

        try:
            result = await self._collection.delete_one({"_id": object_id})
        except PyMongoError as exc:
            raise StorageError("Failed to delete task") from exc

        if result.deleted_count == 0:
            raise TaskNotFoundError(task_id)

        logger.info("Task deleted: id=%s", task_id)

    @staticmethod
    def _map_task_to_document(task: Task, object_id: ObjectId) -> Dict[str, Any]:
        return {
            "_id": object_id,
            "title": task.title,
            "description": task.description,
            "createdAt": task.created_at,
        }

    @staticmethod
    def _map_document_to_task(document: Mapping[str, Any]) -> Task:
        """
        Maps stored document to Task domain model.
        """
        try:
            return Task(
                id=TaskId(str(document["_id"])),
                title=document["title"],
                description=document.get("description", ""),
                created_at=document["createdAt"],
            )
        except KeyError as exc:
            raise StorageError(f"Malformed task document: {document.get('_id')}") from exc
