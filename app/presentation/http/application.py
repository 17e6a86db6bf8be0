from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.infrastructure.db.mongo import MongoDatabase
from app.infrastructure.repositories.task_mongo_repository import TaskMongoRepository
from app.presentation.http.errors import register_error_handlers
from app.presentation.http.health_router import router as health_router
from app.presentation.http.task_router import router as task_router


def create_app(database: MongoDatabase) -> FastAPI:
    """
    Собирает FastAPI-приложение вокруг переданного MongoDatabase.

    Соединение открывается при старте и закрывается при остановке (lifespan);
    репозиторий создаётся один раз и кладётся в app.state.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await database.connect()
        app.state.database = database
        app.state.task_repository = TaskMongoRepository(database)
        try:
            yield
        finally:
            await database.close()

    app = FastAPI(title="Task Service", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(task_router)
    app.include_router(health_router)

    return app
