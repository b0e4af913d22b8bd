# src/tasktracker/tasks/validation.py

from __future__ import annotations

from datetime import datetime
from typing import Any

from .task_models import VALID_PRIORITIES, VALID_STATUSES


def is_iso_timestamp(value: Any) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        datetime.fromisoformat(value.strip())
    except ValueError:
        return False
    return True


def validate_task(payload: dict[str, Any], *, is_update: bool = False) -> list[str]:
    """Return human-readable validation errors (empty list when the payload is valid)."""
    errors: list[str] = []

    title = payload.get("title")
    if not is_update and (not isinstance(title, str) or not title.strip()):
        errors.append("Title is required")
    elif is_update and title is not None and (not isinstance(title, str) or not title.strip()):
        errors.append("Title cannot be empty")

    description = payload.get("description")
    if description is not None and not isinstance(description, str):
        errors.append("Description must be a string")

    status = payload.get("status")
    if status and status not in VALID_STATUSES:
        errors.append(f"Status must be one of: {', '.join(VALID_STATUSES)}")

    priority = payload.get("priority")
    if priority and priority not in VALID_PRIORITIES:
        errors.append(f"Priority must be one of: {', '.join(VALID_PRIORITIES)}")

    due_date = payload.get("dueDate")
    if due_date and not is_iso_timestamp(due_date):
        errors.append("Due date must be a valid date")

    return errors
