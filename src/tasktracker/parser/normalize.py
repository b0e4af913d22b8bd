# src/tasktracker/parser/normalize.py

from __future__ import annotations

from datetime import datetime


def normalize_transcript(transcript: str) -> str:
    """Trimmed, lowercased copy used for keyword matching (titles are cut from the raw text)."""
    return (transcript or "").strip().lower()


def local_naive(now: datetime | None = None) -> datetime:
    """`now` as a naive local-time datetime (aware values are converted first)."""
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now
