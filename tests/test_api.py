# tests/test_api.py

from __future__ import annotations

import json

from fastapi.testclient import TestClient

from tasktracker.api.app import create_app
from tasktracker.core.state import AppState
from tasktracker.parser.facade import TranscriptParser
from tasktracker.parser.model_extractor import ModelExtractor

from .fakes import FakeTextGenerator


def _create(client: TestClient, **body) -> dict:
    resp = client.post("/api/tasks", json={"title": "Buy milk", **body})
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["llm"] is False


def test_create_applies_defaults_and_trims(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={"title": "  Buy milk  ", "description": " 2 liters "})

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    task = body["data"]
    assert task["title"] == "Buy milk"
    assert task["description"] == "2 liters"
    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["dueDate"] is None
    assert task["id"]
    assert task["createdAt"] == task["updatedAt"]


def test_create_validation_errors(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={"priority": "whenever", "dueDate": "someday"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    assert "Title is required" in body["details"]
    assert any(d.startswith("Priority must be one of") for d in body["details"])
    assert "Due date must be a valid date" in body["details"]


def test_wrong_body_types_are_400(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={"title": ["not", "a", "string"]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"


def test_get_update_patch_delete_roundtrip(client: TestClient) -> None:
    task = _create(client)
    tid = task["id"]

    assert client.get(f"/api/tasks/{tid}").json()["data"]["title"] == "Buy milk"

    resp = client.put(f"/api/tasks/{tid}", json={"priority": "urgent", "dueDate": "2026-10-19T18:00:00.000Z"})
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["priority"] == "urgent"
    assert updated["dueDate"] == "2026-10-19T18:00:00.000Z"
    assert updated["title"] == "Buy milk"

    resp = client.patch(f"/api/tasks/{tid}/status", json={"status": "in_progress"})
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "in_progress"

    resp = client.patch(f"/api/tasks/{tid}/status", json={"status": "archived"})
    assert resp.status_code == 400

    resp = client.delete(f"/api/tasks/{tid}")
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == tid
    assert client.get(f"/api/tasks/{tid}").status_code == 404


def test_missing_task_is_404(client: TestClient) -> None:
    for resp in (
        client.get("/api/tasks/nope"),
        client.put("/api/tasks/nope", json={"title": "x"}),
        client.patch("/api/tasks/nope/status", json={"status": "done"}),
        client.delete("/api/tasks/nope"),
    ):
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Task not found"}


def test_list_filters_and_ignores_invalid_enums(client: TestClient) -> None:
    _create(client, title="Write report", priority="high")
    _create(client, title="Buy milk", status="done")

    all_resp = client.get("/api/tasks").json()
    assert all_resp["count"] == 2

    done = client.get("/api/tasks", params={"status": "done"}).json()
    assert [t["title"] for t in done["data"]] == ["Buy milk"]

    ignored = client.get("/api/tasks", params={"status": "archived"}).json()
    assert ignored["count"] == 2

    found = client.get("/api/tasks", params={"search": "REPORT"}).json()
    assert [t["title"] for t in found["data"]] == ["Write report"]


def test_parse_endpoint_rule_based(client: TestClient) -> None:
    resp = client.post("/api/tasks/parse", json={"transcript": "  mark as done buy groceries  "})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["transcript"] == "mark as done buy groceries"
    assert data["parsed"]["title"] == "Buy groceries"
    assert data["parsed"]["status"] == "done"
    assert set(data["parsed"]) == {"title", "description", "priority", "dueDate", "status"}


def test_parse_endpoint_requires_transcript(client: TestClient) -> None:
    for body in ({"transcript": "   "}, {}):
        resp = client.post("/api/tasks/parse", json=body)
        assert resp.status_code == 400
        assert resp.json()["details"] == ["Transcript is required"]


def test_parse_endpoint_with_model(settings, store) -> None:
    payload = {"title": "Buy milk", "description": "", "priority": "high", "dueDate": None, "status": "todo"}
    gen = FakeTextGenerator("```json\n" + json.dumps(payload) + "\n```")
    state = AppState(settings=settings, parser=TranscriptParser(ModelExtractor(gen)), task_store=store)
    client = TestClient(create_app(state))

    resp = client.post("/api/tasks/parse", json={"transcript": "buy milk, important"})

    assert resp.json()["data"]["parsed"] == payload
    assert client.get("/api/health").json()["llm"] is True
    # parsing never persists anything
    assert store.count_tasks() == 0


def test_unknown_route(client: TestClient) -> None:
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Route not found"}
