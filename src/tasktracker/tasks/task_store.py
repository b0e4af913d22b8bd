# src/tasktracker/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Flat JSON file task store: {"tasks": [...]}.

    Every operation reads the whole file, mutates the list and rewrites the file.
    There is no locking; a single writer process is assumed.

    Writes go through a temp file + os.replace so a crash never leaves half a file.
    """

    def __init__(self, db_path: str | Path = "tasks.json") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        if not self._db_path.exists():
            self._write({"tasks": []})
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self._db_path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("TaskStore: unreadable file %s, treating as empty.", self._db_path)
            return {"tasks": []}
        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            return {"tasks": []}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        tmp = self._db_path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._db_path)

    def _load_tasks(self) -> list[Task]:
        return [Task.from_dict(raw) for raw in self._read()["tasks"] if isinstance(raw, dict)]

    def _save_tasks(self, tasks: list[Task]) -> None:
        self._write({"tasks": [t.to_dict() for t in tasks]})

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._read()["tasks"])

    def get_all_tasks(self) -> list[Task]:
        return self._load_tasks()

    def get_task(self, task_id: str) -> Task | None:
        for t in self._load_tasks():
            if t.id == task_id:
                return t
        return None

    def create_task(self, task: Task) -> Task:
        tasks = self._load_tasks()
        tasks.append(task)
        self._save_tasks(tasks)
        logger.debug("TaskStore: created id=%s", task.id)
        return task

    def update_task(self, task_id: str, updates: dict[str, Any]) -> Task | None:
        """Merge camelCase `updates` into the task. Returns None if it does not exist."""
        tasks = self._load_tasks()
        for i, t in enumerate(tasks):
            if t.id == task_id:
                tasks[i] = t.with_updates(updates)
                self._save_tasks(tasks)
                logger.debug("TaskStore: updated id=%s keys=%s", task_id, sorted(updates))
                return tasks[i]
        return None

    def delete_task(self, task_id: str) -> Task | None:
        tasks = self._load_tasks()
        for i, t in enumerate(tasks):
            if t.id == task_id:
                deleted = tasks.pop(i)
                self._save_tasks(tasks)
                logger.debug("TaskStore: deleted id=%s", task_id)
                return deleted
        return None

    def query_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        search: str | None = None,
        due_date_from: str | None = None,
        due_date_to: str | None = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> list[Task]:
        """
        Filter + sort over the whole file.

        - search: case-insensitive substring of title or description
        - due_date_from / due_date_to: inclusive ISO string bounds; tasks without a
          due date never match a bound
        - sort_by: any Task JSON key; ascending only when sort_order == "asc"
        """
        tasks = self._load_tasks()

        if status:
            tasks = [t for t in tasks if t.status == status]
        if priority:
            tasks = [t for t in tasks if t.priority == priority]
        if search:
            needle = search.lower()
            tasks = [
                t for t in tasks if needle in t.title.lower() or needle in (t.description or "").lower()
            ]
        if due_date_from:
            tasks = [t for t in tasks if t.due_date and t.due_date >= due_date_from]
        if due_date_to:
            tasks = [t for t in tasks if t.due_date and t.due_date <= due_date_to]

        sort_key = sort_by or "createdAt"

        def key(t: Task) -> tuple[bool, str]:
            value = t.to_dict().get(sort_key)
            # Missing values sort before present ones (ascending).
            return (value is not None, "" if value is None else str(value))

        tasks.sort(key=key, reverse=sort_order != "asc")
        return tasks
