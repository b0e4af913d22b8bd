# src/tasktracker/parser/facade.py

from __future__ import annotations

import logging
from datetime import datetime

from .errors import ExtractionFailure
from .model_extractor import ModelExtractor
from .models import ParseResult
from .rule_extractor import RuleExtractor

logger = logging.getLogger(__name__)


class TranscriptParser:
    """
    Single entry point for transcript parsing.

    The model-based extractor is optional and decided at construction time
    (bootstrap passes one only when an API key is configured). When it fails,
    the rule-based extractor answers instead, so parse() always returns a
    complete ParseResult.
    """

    def __init__(
        self,
        model_extractor: ModelExtractor | None = None,
        rule_extractor: RuleExtractor | None = None,
    ) -> None:
        self._model = model_extractor
        self._rules = rule_extractor or RuleExtractor()

    @property
    def model_enabled(self) -> bool:
        return self._model is not None

    def parse(self, transcript: str, now: datetime | None = None) -> ParseResult:
        if self._model is not None:
            try:
                result = self._model.extract(transcript, now)
                logger.info("Transcript parsed by model (priority=%s status=%s)", result.priority, result.status)
                return result
            except ExtractionFailure as e:
                logger.warning("AI parsing failed, falling back to rule-based: %s", e)

        result = self._rules.extract(transcript, now)
        logger.info("Transcript parsed by rules (priority=%s status=%s)", result.priority, result.status)
        return result
