# tests/test_task_store.py

from __future__ import annotations

import json
from pathlib import Path

from tasktracker.tasks.task_models import Task, TaskPriority, TaskStatus
from tasktracker.tasks.task_store import TaskStore


def _task(task_id: str, title: str, **kw) -> Task:
    return Task(
        id=task_id,
        title=title,
        description=kw.get("description", ""),
        status=kw.get("status", TaskStatus.TODO),
        priority=kw.get("priority", TaskPriority.MEDIUM),
        due_date=kw.get("due_date"),
        created_at=kw.get("created_at", "2026-10-01T10:00:00.000Z"),
        updated_at=kw.get("created_at", "2026-10-01T10:00:00.000Z"),
    )


def test_store_creates_file_on_init(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "tasks.json"
    store = TaskStore(db)

    assert json.loads(db.read_text("utf-8")) == {"tasks": []}
    assert store.count_tasks() == 0


def test_create_get_update_delete(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.json")

    store.create_task(_task("t1", "Buy milk"))
    assert store.get_task("t1").title == "Buy milk"
    assert store.get_task("missing") is None

    updated = store.update_task("t1", {"status": "done", "dueDate": "2026-10-19T18:00:00.000Z"})
    assert updated is not None
    assert updated.status == TaskStatus.DONE
    assert updated.due_date == "2026-10-19T18:00:00.000Z"
    assert updated.id == "t1"
    assert store.get_task("t1").status == TaskStatus.DONE

    assert store.update_task("missing", {"title": "x"}) is None

    deleted = store.delete_task("t1")
    assert deleted is not None and deleted.id == "t1"
    assert store.delete_task("t1") is None
    assert store.count_tasks() == 0


def test_file_uses_camel_case_task_shape(tmp_path: Path) -> None:
    db = tmp_path / "tasks.json"
    store = TaskStore(db)
    store.create_task(_task("t1", "Buy milk", due_date="2026-10-19T18:00:00.000Z"))

    raw = json.loads(db.read_text("utf-8"))["tasks"][0]
    assert raw == {
        "id": "t1",
        "title": "Buy milk",
        "description": "",
        "status": "todo",
        "priority": "medium",
        "dueDate": "2026-10-19T18:00:00.000Z",
        "createdAt": "2026-10-01T10:00:00.000Z",
        "updatedAt": "2026-10-01T10:00:00.000Z",
    }


def test_corrupt_file_reads_as_empty(tmp_path: Path) -> None:
    db = tmp_path / "tasks.json"
    db.write_text("{not json", "utf-8")
    store = TaskStore(db)

    assert store.get_all_tasks() == []
    store.create_task(_task("t1", "Recovered"))
    assert [t.id for t in store.get_all_tasks()] == ["t1"]


def test_query_filters_and_sorting(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.json")
    store.create_task(
        _task(
            "a",
            "Write report",
            description="Quarterly numbers",
            priority=TaskPriority.HIGH,
            due_date="2026-10-20T18:00:00.000Z",
            created_at="2026-10-01T10:00:00.000Z",
        )
    )
    store.create_task(
        _task(
            "b",
            "Buy milk",
            status=TaskStatus.DONE,
            due_date="2026-10-25T18:00:00.000Z",
            created_at="2026-10-02T10:00:00.000Z",
        )
    )
    store.create_task(_task("c", "Call mom", created_at="2026-10-03T10:00:00.000Z"))

    assert [t.id for t in store.query_tasks()] == ["c", "b", "a"]
    assert [t.id for t in store.query_tasks(sort_order="asc")] == ["a", "b", "c"]
    assert [t.id for t in store.query_tasks(status="done")] == ["b"]
    assert [t.id for t in store.query_tasks(priority="high")] == ["a"]
    assert [t.id for t in store.query_tasks(search="QUARTERLY")] == ["a"]
    assert [t.id for t in store.query_tasks(search="milk")] == ["b"]

    in_range = store.query_tasks(due_date_from="2026-10-21", sort_order="asc")
    assert [t.id for t in in_range] == ["b"]
    upto = store.query_tasks(due_date_to="2026-10-21", sort_order="asc")
    assert [t.id for t in upto] == ["a"]

    by_due = store.query_tasks(sort_by="dueDate", sort_order="asc")
    assert [t.id for t in by_due] == ["c", "a", "b"]
