# src/tasktracker/parser/errors.py

from __future__ import annotations


class ExtractionFailure(RuntimeError):
    """The model-based extractor could not produce a usable result."""
