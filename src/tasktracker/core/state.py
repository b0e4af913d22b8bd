# src/tasktracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskRepo, TranscriptParser


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    parser: TranscriptParser
    task_store: TaskRepo

    @property
    def llm_enabled(self) -> bool:
        return bool(getattr(self.parser, "model_enabled", False))
