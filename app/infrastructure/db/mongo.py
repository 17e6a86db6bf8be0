from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MongoConfig:
    uri: str
    database: str
    timeout_ms: int


def load_config_from_env() -> MongoConfig:
    """
    Загружает конфиг MongoDB из переменных окружения.
    Верхние слои про это не знают — они просто получают уже готовый MongoDatabase.
    """
    uri = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    database = os.getenv("MONGO_DB_NAME", "taskdb")
    timeout_ms = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    return MongoConfig(
        uri=uri,
        database=database,
        timeout_ms=timeout_ms,
    )


class MongoDatabase:
    """
    Инфраструктурный класс работы с MongoDB.

    Владелец (lifespan приложения) вызывает connect() при старте и close()
    при остановке. Репозитории получают из него коллекции и не знают про URI.
    """

    def __init__(self, config: MongoConfig) -> None:
        self._config = config
        self._client: Optional[AsyncMongoClient] = None

    @property
    def database(self) -> AsyncDatabase:
        if self._client is None:
            raise RuntimeError("MongoDatabase is not connected")
        return self._client[self._config.database]

    async def connect(self) -> None:
        if self._client is not None:
            return

        client: AsyncMongoClient = AsyncMongoClient(
            self._config.uri,
            serverSelectionTimeoutMS=self._config.timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except PyMongoError:
            await client.close()
            raise

        self._client = client
        logger.info("MongoDB connected: db=%s", self._config.database)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")

    async def ping(self) -> bool:
        """
        Проверка доступности сервера. Используется health-эндпоинтом.
        """
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            logger.warning("MongoDB ping failed", exc_info=True)
            return False
        return True

    def collection(self, name: str) -> AsyncCollection[Any]:
        return self.database[name]
