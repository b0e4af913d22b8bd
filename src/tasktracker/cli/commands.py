# src/tasktracker/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..parser.models import ParseResult
from ..tasks import task_api
from ..tasks.task_api import TaskError, TaskNotFoundError, TaskValidationError
from ..tasks.task_models import VALID_STATUSES, Task, TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskNotFoundError as e:
            return f"Task not found: {e.task_id}"
        except TaskValidationError as e:
            return "Validation failed:\n" + "\n".join(f"  - {d}" for d in e.details)
        except TaskError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_due(due: str | None) -> str:
    if not due:
        return "no due date"
    try:
        return datetime.fromisoformat(due).astimezone().strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return due


def _fmt_ts(ts: str) -> str:
    return _fmt_due(ts) if ts else "-"


def format_parse_result(parsed: ParseResult) -> str:
    lines = [
        f"  Title:    {parsed.title}",
        f"  Priority: {parsed.priority}",
        f"  Status:   {parsed.status}",
        f"  Due:      {_fmt_due(parsed.due_date)}",
    ]
    if parsed.description:
        lines.append(f"  Details:  {parsed.description}")
    return "\n".join(lines)


def format_task_line(task: Task) -> str:
    return f"{task.id[:8]} [{task.status}] ({task.priority}) {task.title} - {_fmt_due(task.due_date)}"


def _resolve_task_id(state: AppState, raw: str) -> str:
    """Accept a full id or an unambiguous prefix (the console shows 8 chars)."""
    if state.task_store.get_task(raw) is not None:
        return raw
    matches = [t.id for t in state.task_store.get_all_tasks() if t.id.startswith(raw)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise TaskError(f"Ambiguous task id prefix: {raw}")
    raise TaskNotFoundError(raw)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    s = state.settings
    mode = "LLM + rule-based fallback" if state.llm_enabled else "rule-based only"
    api = (
        f"http://{getattr(s, 'api_host', '?')}:{getattr(s, 'api_port', '?')}"
        if getattr(s, "api_enabled", False)
        else "OFF"
    )
    return (
        "Status:\n"
        f"  Parser: {mode}\n"
        f"  Task file: {getattr(s, 'tasks_db_path', '?')}\n"
        f"  Tasks: {state.task_store.count_tasks()}\n"
        f"  HTTP API: {api}"
    )


def cmd_parse(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/parse <transcript> -> preview the parsed fields without saving."""
    if emit and state.llm_enabled:
        with contextlib.suppress(Exception):
            emit("[PARSE] Asking the model...")
    _, parsed = task_api.parse_transcript(state, " ".join(args))
    return "Parsed:\n" + format_parse_result(parsed)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/add <transcript> -> parse and save as a new task."""
    if emit and state.llm_enabled:
        with contextlib.suppress(Exception):
            emit("[PARSE] Asking the model...")
    _, parsed = task_api.parse_transcript(state, " ".join(args))
    task = task_api.create_task_from_parse(state, parsed)
    return f"Task created: {format_task_line(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list          -> all tasks, newest first
    /list <status> -> only tasks in that column
    """
    status = TaskStatus.coerce(args[0]) if args else None
    if args and status is None:
        return f"Unknown status: {args[0]}. Use one of: {', '.join(VALID_STATUSES)}."
    tasks = task_api.list_tasks(state, status=status.value if status else None)
    if not tasks:
        return "No tasks."
    return "\n".join(format_task_line(t) for t in tasks)


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <id>"
    task = task_api.get_task(state, _resolve_task_id(state, args[0]))
    lines = [
        format_task_line(task),
        f"  Created: {_fmt_ts(task.created_at)}",
        f"  Updated: {_fmt_ts(task.updated_at)}",
    ]
    if task.description:
        lines.append(f"  {task.description}")
    return "\n".join(lines)


def cmd_move(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return f"Usage: /move <id> <{'|'.join(VALID_STATUSES)}>"
    status = TaskStatus.coerce(" ".join(args[1:]))
    task = task_api.change_status(
        state, _resolve_task_id(state, args[0]), status.value if status else args[1]
    )
    return f"Moved: {format_task_line(task)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <id>"
    task = task_api.delete_task(state, _resolve_task_id(state, args[0]))
    return f"Deleted: {format_task_line(task)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show parser mode, task file and API address.")
registry.register("parse", cmd_parse, help_text="Preview parsed fields: /parse <text>.")
registry.register("add", cmd_add, help_text="Parse text and save it as a task: /add <text>.")
registry.register("list", cmd_list, help_text="List tasks: /list [todo|in_progress|done].", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("move", cmd_move, help_text="Change status: /move <id> <status>.", aliases=["mv"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
