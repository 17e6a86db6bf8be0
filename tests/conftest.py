# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.repositories.task_mongo_repository import TaskMongoRepository
from app.presentation.http.application import create_app

from .fakes import FakeCollection, FakeMongoDatabase


@pytest.fixture()
def database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def collection(database: FakeMongoDatabase) -> FakeCollection:
    return database.collection_impl


@pytest.fixture()
def repo(database: FakeMongoDatabase) -> TaskMongoRepository:
    return TaskMongoRepository(database)


@pytest.fixture()
def client(database: FakeMongoDatabase) -> Iterator[TestClient]:
    """
    TestClient over the real app; entering the context runs the lifespan,
    which connects the fake database and wires the repository.
    """
    app = create_app(database)
    with TestClient(app) as c:
        yield c
