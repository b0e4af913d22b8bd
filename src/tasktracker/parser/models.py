# src/tasktracker/parser/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_models import TaskPriority, TaskStatus

UNTITLED_TASK = "Untitled Task"


@dataclass(frozen=True, slots=True)
class ParseResult:
    """
    Structured task fields extracted from a transcript.

    Produced fresh per parse call and never persisted by the parser; the caller
    decides whether to submit it as a new task.
    """

    title: str
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: str | None = None
    status: TaskStatus = TaskStatus.TODO

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "status": self.status.value,
        }
