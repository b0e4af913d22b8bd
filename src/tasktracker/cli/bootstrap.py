# src/tasktracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- decides whether the model-based parser is available,
- wires concrete implementations into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TextGenerator
from ..core.state import AppState
from ..llm.client import OpenAICompletionClient, friendly_llm_error_message
from ..parser.facade import TranscriptParser
from ..parser.model_extractor import ModelExtractor
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_parser(settings, generator: TextGenerator | None = None) -> TranscriptParser:
    """
    Build the TranscriptParser.

    The model path is attempted only when an API key is configured (or a generator
    is injected, e.g. by tests). Otherwise the parser runs rule-based only.
    """
    if generator is None and getattr(settings, "openai_api_key", None):
        try:
            generator = OpenAICompletionClient(settings)
        except RuntimeError as e:
            logger.warning("LLM client unavailable: %s", friendly_llm_error_message(e))

    if generator is None:
        logger.info("Transcript parser: rule-based only (no LLM configured).")
        return TranscriptParser()

    logger.info("Transcript parser: LLM with rule-based fallback.")
    return TranscriptParser(
        ModelExtractor(
            generator,
            max_tokens=int(getattr(settings, "llm_max_tokens", 500)),
            temperature=float(getattr(settings, "llm_temperature", 0.3)),
        )
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(
        settings=settings,
        parser=create_parser(settings),
        task_store=TaskStore(settings.tasks_db_path),
    )
