# src/tasktracker/tasks/task_api.py

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from ..core.state import AppState
from ..parser.models import ParseResult
from .task_models import VALID_PRIORITIES, VALID_STATUSES, Task, TaskPriority, TaskStatus
from .validation import validate_task

logger = logging.getLogger(__name__)


class TaskError(RuntimeError):
    pass


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task '{task_id}' not found")
        self.task_id = task_id


class TaskValidationError(TaskError):
    def __init__(self, details: list[str]) -> None:
        super().__init__("Validation failed: " + "; ".join(details))
        self.details = details


def _now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def list_tasks(
    state: AppState,
    *,
    status: str | None = None,
    priority: str | None = None,
    search: str | None = None,
    due_date_from: str | None = None,
    due_date_to: str | None = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> list[Task]:
    """Invalid enum filters are ignored rather than rejected."""
    return state.task_store.query_tasks(
        status=status if status in VALID_STATUSES else None,
        priority=priority if priority in VALID_PRIORITIES else None,
        search=search or None,
        due_date_from=due_date_from or None,
        due_date_to=due_date_to or None,
        sort_by=sort_by or "createdAt",
        sort_order=sort_order or "desc",
    )


def get_task(state: AppState, task_id: str) -> Task:
    task = state.task_store.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def create_task(state: AppState, payload: dict[str, Any]) -> Task:
    errors = validate_task(payload)
    if errors:
        raise TaskValidationError(errors)

    now = _now_iso()
    task = Task(
        id=str(uuid.uuid4()),
        title=payload["title"].strip(),
        description=(payload.get("description") or "").strip(),
        status=TaskStatus(payload.get("status") or TaskStatus.TODO),
        priority=TaskPriority(payload.get("priority") or TaskPriority.MEDIUM),
        due_date=payload.get("dueDate") or None,
        created_at=now,
        updated_at=now,
    )
    state.task_store.create_task(task)
    logger.info("Task created id=%s priority=%s status=%s", task.id, task.priority, task.status)
    return task


def create_task_from_parse(state: AppState, parsed: ParseResult) -> Task:
    return create_task(state, parsed.to_dict())


def update_task(state: AppState, task_id: str, payload: dict[str, Any]) -> Task:
    """Partial update: only keys present in `payload` change."""
    get_task(state, task_id)

    errors = validate_task(payload, is_update=True)
    if errors:
        raise TaskValidationError(errors)

    updates: dict[str, Any] = {"updatedAt": _now_iso()}
    if payload.get("title") is not None:
        updates["title"] = payload["title"].strip()
    if payload.get("description") is not None:
        updates["description"] = payload["description"].strip()
    if payload.get("status"):
        updates["status"] = payload["status"]
    if payload.get("priority"):
        updates["priority"] = payload["priority"]
    if "dueDate" in payload:
        updates["dueDate"] = payload["dueDate"] or None

    updated = state.task_store.update_task(task_id, updates)
    if updated is None:
        raise TaskNotFoundError(task_id)
    logger.info("Task updated id=%s keys=%s", task_id, sorted(updates))
    return updated


def change_status(state: AppState, task_id: str, status: str | None) -> Task:
    if not status or status not in VALID_STATUSES:
        raise TaskValidationError([f"Status must be one of: {', '.join(VALID_STATUSES)}"])
    get_task(state, task_id)
    updated = state.task_store.update_task(task_id, {"status": status, "updatedAt": _now_iso()})
    if updated is None:
        raise TaskNotFoundError(task_id)
    logger.info("Task status id=%s -> %s", task_id, status)
    return updated


def delete_task(state: AppState, task_id: str) -> Task:
    deleted = state.task_store.delete_task(task_id)
    if deleted is None:
        raise TaskNotFoundError(task_id)
    logger.info("Task deleted id=%s", task_id)
    return deleted


def parse_transcript(state: AppState, transcript: Any) -> tuple[str, ParseResult]:
    """
    Trim + validate the transcript, then run the parser.

    Returns (trimmed_transcript, parsed). Nothing is persisted here.
    """
    text = transcript.strip() if isinstance(transcript, str) else ""
    if not text:
        raise TaskValidationError(["Transcript is required"])
    return text, state.parser.parse(text)
