# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from tasktracker.api.app import create_app
from tasktracker.core.state import AppState
from tasktracker.parser.facade import TranscriptParser
from tasktracker.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="tasktracker-test",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.json",
        api_enabled=False,
        api_host="127.0.0.1",
        api_port=5001,
        cors_origins=["*"],
        openai_api_key=None,
        llm_max_tokens=500,
        llm_temperature=0.3,
    )


@pytest.fixture()
def now() -> datetime:
    """Pinned local 'now' so relative dates are deterministic."""
    return datetime(2026, 10, 18, 9, 30)


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState with a real JSON TaskStore and a rule-based-only parser."""
    return AppState(settings=settings, parser=TranscriptParser(), task_store=store)


@pytest.fixture()
def client(state: AppState) -> TestClient:
    return TestClient(create_app(state))
