# src/tasktracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Kanban column a task lives in."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def coerce(cls, raw: Any, default: TaskStatus | None = None) -> TaskStatus | None:
        """Map loose spellings ("In Progress", "to do", "completed") onto a member."""
        s = str(raw or "").strip().lower().replace("-", "_").replace(" ", "_")
        aliases = {
            "to_do": "todo",
            "pending": "todo",
            "inprogress": "in_progress",
            "doing": "in_progress",
            "started": "in_progress",
            "completed": "done",
            "finished": "done",
        }
        s = aliases.get(s, s)
        try:
            return cls(s)
        except ValueError:
            return default


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def coerce(cls, raw: Any, default: TaskPriority | None = None) -> TaskPriority | None:
        s = str(raw or "").strip().lower()
        aliases = {"critical": "urgent", "normal": "medium"}
        s = aliases.get(s, s)
        try:
            return cls(s)
        except ValueError:
            return default


VALID_STATUSES = [s.value for s in TaskStatus]
VALID_PRIORITIES = [p.value for p in TaskPriority]


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: str | None
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        """JSON shape shared by the task file and the HTTP API."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            status=TaskStatus.coerce(data.get("status"), TaskStatus.TODO),  # type: ignore[arg-type]
            priority=TaskPriority.coerce(data.get("priority"), TaskPriority.MEDIUM),  # type: ignore[arg-type]
            due_date=data.get("dueDate") or None,
            created_at=str(data.get("createdAt") or ""),
            updated_at=str(data.get("updatedAt") or ""),
        )

    def with_updates(self, updates: dict[str, Any]) -> Task:
        """Return a copy with camelCase `updates` applied (the id never changes)."""
        return Task.from_dict({**self.to_dict(), **updates, "id": self.id})
