# tests/test_task_api.py

from __future__ import annotations

import logging
import re
from datetime import datetime

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.domain.errors import StorageError
from app.presentation.http.application import create_app

from .fakes import BrokenCollection, FailingCollection, FakeMongoDatabase

HEX24 = re.compile(r"^[0-9a-f]{24}$")


def _create(client: TestClient, **body) -> dict:
    resp = client.post("/tasks", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_lifespan_connects_and_closes(database) -> None:
    with TestClient(create_app(database)):
        assert database.connected
        assert not database.closed
    assert database.closed


def test_full_task_lifecycle(client, collection) -> None:
    created = _create(client, title="Test Task", description="This is a test task")

    assert HEX24.match(created["id"])
    assert created["title"] == "Test Task"
    assert created["description"] == "This is a test task"
    datetime.fromisoformat(created["createdAt"].replace("Z", "+00:00"))
    assert collection.documents[0]["_id"] == ObjectId(created["id"])

    listed = client.get("/tasks")
    assert listed.status_code == 200
    assert created in listed.json()

    resp = client.put(f"/tasks/{created['id']}", json={"title": "Updated Task"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Task updated successfully"}

    stored = collection.documents[0]
    assert stored["title"] == "Updated Task"
    assert stored["description"] == "This is a test task"

    resp = client.delete(f"/tasks/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Task deleted successfully"}
    assert collection.documents == []


def test_create_defaults_description(client) -> None:
    created = _create(client, title="Only title")
    assert created["description"] == ""


def test_create_rejects_bad_body(client) -> None:
    for body in ({}, {"description": "no title"}, {"title": ""}, {"title": 5}):
        resp = client.post("/tasks", json=body)
        assert resp.status_code == 400, body
        assert resp.json() == {"error": "Invalid input"}

    resp = client.post(
        "/tasks",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400


def test_list_empty(client) -> None:
    resp = client.get("/tasks")
    assert resp.status_code == 200
    assert resp.json() == []


def test_list_returns_all_created(client) -> None:
    _create(client, title="Task 1", description="First task")
    _create(client, title="Task 2", description="Second task")

    tasks = client.get("/tasks").json()

    assert len(tasks) == 2
    assert {t["title"] for t in tasks} == {"Task 1", "Task 2"}


def test_get_by_id(client) -> None:
    created = _create(client, title="Single Task", description="Task description")

    resp = client.get(f"/tasks/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == created


def test_get_missing_is_404(client) -> None:
    resp = client.get(f"/tasks/{ObjectId()}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Task not found"}


def test_malformed_id_is_400(client) -> None:
    for method, kwargs in (
        ("GET", {}),
        ("PUT", {"json": {"title": "x"}}),
        ("DELETE", {}),
    ):
        resp = client.request(method, "/tasks/not-a-valid-id", **kwargs)
        assert resp.status_code == 400, method
        assert resp.json() == {"error": "Invalid task id"}


def test_update_missing_is_404(client) -> None:
    resp = client.put(f"/tasks/{ObjectId()}", json={"title": "x"})
    assert resp.status_code == 404


def test_delete_missing_is_404(client) -> None:
    resp = client.delete(f"/tasks/{ObjectId()}")
    assert resp.status_code == 404


def test_update_rejects_unknown_fields(client, collection) -> None:
    created = _create(client, title="A", description="B")

    for body in ({"createdAt": "2000-01-01T00:00:00Z"}, {"id": "x"}, {"priority": 1}):
        resp = client.put(f"/tasks/{created['id']}", json=body)
        assert resp.status_code == 400, body
        assert "error" in resp.json()

    assert client.get(f"/tasks/{created['id']}").json() == created


def test_update_with_empty_body_is_400(client) -> None:
    created = _create(client, title="A")

    resp = client.put(f"/tasks/{created['id']}", json={})

    assert resp.status_code == 400
    assert resp.json() == {"error": "No fields to update"}


def test_update_description_only(client) -> None:
    created = _create(client, title="A", description="B")

    client.put(f"/tasks/{created['id']}", json={"description": "D"})

    fetched = client.get(f"/tasks/{created['id']}").json()
    assert fetched["title"] == "A"
    assert fetched["description"] == "D"
    assert fetched["createdAt"] == created["createdAt"]


def test_storage_failure_is_500_without_details(caplog) -> None:
    caplog.set_level(logging.ERROR, logger="app.presentation.http.errors")
    database = FakeMongoDatabase(collection_impl=BrokenCollection())

    with TestClient(create_app(database)) as client:
        responses = [
            client.post("/tasks", json={"title": "A"}),
            client.get("/tasks"),
            client.get(f"/tasks/{ObjectId()}"),
            client.put(f"/tasks/{ObjectId()}", json={"title": "A"}),
            client.delete(f"/tasks/{ObjectId()}"),
        ]

    for resp in responses:
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}

    failures = [r for r in caplog.records if r.name == "app.presentation.http.errors"]
    assert len(failures) == 5
    for record in failures:
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None
        assert isinstance(record.exc_info[1], StorageError)
        assert isinstance(record.exc_info[1].__cause__, ServerSelectionTimeoutError)


def test_document_without_created_at_is_json_500(database, collection) -> None:
    legacy_id = ObjectId()
    collection.documents.append({"_id": legacy_id, "title": "legacy"})

    with TestClient(create_app(database), raise_server_exceptions=False) as client:
        for resp in (client.get("/tasks"), client.get(f"/tasks/{legacy_id}")):
            assert resp.status_code == 500
            assert resp.headers["content-type"] == "application/json"
            assert resp.json() == {"error": "Internal server error"}


def test_unexpected_error_is_json_500(caplog) -> None:
    caplog.set_level(logging.ERROR, logger="app.presentation.http.errors")
    database = FakeMongoDatabase(collection_impl=FailingCollection(RuntimeError("boom")))

    with TestClient(create_app(database), raise_server_exceptions=False) as client:
        resp = client.get(f"/tasks/{ObjectId()}")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert any(
        r.exc_info is not None and isinstance(r.exc_info[1], RuntimeError)
        for r in caplog.records
    )


def test_unknown_route_uses_error_body(client) -> None:
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_health(database) -> None:
    with TestClient(create_app(database)) as client:
        assert client.get("/health").json() == {"status": "ok"}

        database.reachable = False
        resp = client.get("/health")
        assert resp.status_code == 503
        assert resp.json() == {"error": "Database unavailable"}


def test_update_rejects_explicit_null(client) -> None:
    created = _create(client, title="A", description="B")

    for body in ({"title": None, "description": "D"}, {"title": None}, {"description": None}):
        resp = client.put(f"/tasks/{created['id']}", json=body)
        assert resp.status_code == 400, body
        assert resp.json() == {"error": "Invalid input"}

    fetched = client.get(f"/tasks/{created['id']}").json()
    assert fetched["title"] == "A"
    assert fetched["description"] == "B"
