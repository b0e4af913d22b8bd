# src/tasktracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The parser and the front-ends depend on Protocols instead of concrete
implementations, so the LLM provider and the task storage stay swappable and
tests can plug in fakes.
"""

from datetime import datetime
from typing import Any, Protocol


class TextGenerator(Protocol):
    """Single-shot text completion (OpenAI-compatible chat endpoint)."""

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str: ...


class TranscriptParser(Protocol):
    def parse(self, transcript: str, now: datetime | None = None) -> Any: ...


class TaskRepo(Protocol):
    def get_all_tasks(self) -> list[Any]: ...
    def get_task(self, task_id: str) -> Any | None: ...
    def create_task(self, task: Any) -> Any: ...
    def update_task(self, task_id: str, updates: dict[str, Any]) -> Any | None: ...
    def delete_task(self, task_id: str) -> Any | None: ...
    def count_tasks(self) -> int: ...

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
    ) -> list[Any]: ...
