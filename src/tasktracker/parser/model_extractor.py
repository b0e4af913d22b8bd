# src/tasktracker/parser/model_extractor.py

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import Any

from ..core.ports import TextGenerator
from ..tasks.task_models import TaskPriority, TaskStatus
from ..tasks.validation import is_iso_timestamp
from .errors import ExtractionFailure
from .models import ParseResult
from .normalize import local_naive

logger = logging.getLogger(__name__)

FENCE_MARKER = "```"
# First fenced block; an optional language tag ("json") after the opening fence.
FENCED_BLOCK_RE = re.compile(r"```[A-Za-z0-9_-]*\s*([\s\S]*?)```")

TASK_PARSER_PROMPT = """
You are a task parsing assistant. Extract task details from the voice transcript
below and return a JSON object.

Current date and time: {now}

Voice transcript: "{transcript}"

Fields:
1. title: the main task, as a clean actionable title without time or priority words.
2. description: any additional details or context (may be an empty string).
3. priority: one of "low", "medium", "high", "urgent". Look for words like "urgent",
   "critical", "asap", "high priority", "important", "low priority", "not urgent",
   "no rush". Default to "medium".
4. dueDate: resolve any date/time reference ("tomorrow", "next Monday", "in 3 days",
   "by Friday", "next week") against the current date and time and return it in ISO
   8601 format. If a day is given without a time, use 18:00. Return null when no date
   is mentioned.
5. status: one of "todo", "in_progress", "done". Default to "todo".

Return ONLY a valid JSON object with exactly these keys, no explanation, no Markdown:
{{
  "title": "...",
  "description": "...",
  "priority": "...",
  "dueDate": "..." or null,
  "status": "..."
}}
""".strip()


def build_prompt(transcript: str, now: datetime) -> str:
    return TASK_PARSER_PROMPT.format(now=now.astimezone().isoformat(timespec="seconds"), transcript=transcript)


def extract_json_text(raw: str) -> str:
    """Strip Markdown fencing: the first fenced block wins, otherwise the whole text."""
    content = (raw or "").strip()
    if FENCE_MARKER not in content:
        return content
    m = FENCED_BLOCK_RE.search(content)
    if not m:
        raise ExtractionFailure("Model response has an unterminated code fence.")
    return m.group(1).strip()


def _coerce_payload(data: Any) -> ParseResult:
    """Clamp a model-produced object onto the ParseResult schema."""
    if not isinstance(data, dict):
        raise ExtractionFailure(f"Model response is not a JSON object ({type(data).__name__}).")

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ExtractionFailure("Model response has no title.")

    description = data.get("description")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        description = str(description)

    priority = TaskPriority.coerce(data.get("priority"))
    if priority is None:
        logger.warning("Model returned unknown priority=%r; using medium.", data.get("priority"))
        priority = TaskPriority.MEDIUM

    status = TaskStatus.coerce(data.get("status"))
    if status is None:
        logger.warning("Model returned unknown status=%r; using todo.", data.get("status"))
        status = TaskStatus.TODO

    due_date = data.get("dueDate") or None
    if due_date is not None and not is_iso_timestamp(due_date):
        logger.warning("Model returned unparseable dueDate=%r; dropping it.", due_date)
        due_date = None

    return ParseResult(
        title=title.strip(),
        description=description,
        priority=priority,
        due_date=due_date,
        status=status,
    )


class ModelExtractor:
    """
    Prompted JSON extraction through an external text-generation service.

    One attempt per call. Every failure (service error, non-JSON, wrong shape) is
    raised as ExtractionFailure for the caller to handle.
    """

    def __init__(self, generator: TextGenerator, *, max_tokens: int = 500, temperature: float = 0.3) -> None:
        self._generator = generator
        self.max_tokens = max_tokens
        self.temperature = temperature

    def extract(self, transcript: str, now: datetime | None = None) -> ParseResult:
        prompt = build_prompt(transcript, local_naive(now))

        try:
            raw = self._generator.complete(prompt, max_tokens=self.max_tokens, temperature=self.temperature)
        except Exception as e:
            raise ExtractionFailure(f"Text generation failed: {e}") from e

        json_text = extract_json_text(raw)
        try:
            data = json.loads(json_text)
        except ValueError as e:
            raise ExtractionFailure(f"Model response is not valid JSON: {json_text[:200]!r}") from e

        result = _coerce_payload(data)
        logger.debug("Model parse result=%s", result.to_dict())
        return result
