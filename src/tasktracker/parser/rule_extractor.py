# src/tasktracker/parser/rule_extractor.py

"""
Deterministic transcript parser.

Keyword groups decide priority and status, dateparser finds the due date, and a
fixed sequence of regex passes derives the title. Every step is total over
strings, so this is the backstop when the model-based extractor is unavailable.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime

from dateparser.search import search_dates

from ..tasks.task_models import TaskPriority, TaskStatus
from .models import UNTITLED_TASK, ParseResult
from .normalize import local_naive, normalize_transcript

logger = logging.getLogger(__name__)

# Checked in order; first match wins.
PRIORITY_RULES: tuple[tuple[TaskPriority, re.Pattern[str]], ...] = (
    (
        TaskPriority.URGENT,
        re.compile(r"\b(urgent|critical|asap|immediately|right away|right now)\b"),
    ),
    (TaskPriority.HIGH, re.compile(r"\b(high priority|important|high)\b")),
    (
        TaskPriority.LOW,
        re.compile(r"\b(low priority|not urgent|whenever|low|no rush|no hurry)\b"),
    ),
)

STATUS_RULES: tuple[tuple[TaskStatus, re.Pattern[str]], ...] = (
    (TaskStatus.IN_PROGRESS, re.compile(r"\b(in progress|working on|started)\b")),
    (TaskStatus.DONE, re.compile(r"\b(done|completed|finished)\b")),
)

_WEEKDAYS = "monday|tuesday|wednesday|thursday|friday|saturday|sunday"

LEADING_FILLER_RE = re.compile(
    r"^(create a |add a |make a |remind me to |i need to |i want to |please |can you )",
    re.IGNORECASE,
)
PRIORITY_PHRASE_RE = re.compile(
    r"\b(not urgent|urgent|critical|asap|immediately|right away|right now|high priority"
    r"|low priority|important|whenever|no rush|no hurry|it's|its)\b",
    re.IGNORECASE,
)
# A temporal marker removes itself and everything after it.
TEMPORAL_TAIL_RE = re.compile(
    rf"\b(by|before|until|due|on|at|tomorrow|today|next week|next (?:{_WEEKDAYS})|this week"
    r"|in \d+ days?|in \d+ hours?)\b.*",
    re.IGNORECASE | re.DOTALL,
)
STATUS_PHRASE_RE = re.compile(
    r"\b(status is|mark as|set to) (todo|to do|in progress|done|completed)\b",
    re.IGNORECASE,
)
TRAILING_PUNCT_RE = re.compile(r"[,.]$")
WHITESPACE_RE = re.compile(r"\s+")

# Phrases that carry a time of day or an offset from now ("in 3 days") keep it;
# anything else is date-only.
EXPLICIT_TIME_RE = re.compile(
    r"\d:\d{2}|\d\s*(?:(?:am|pm)\b|a\.m\.|p\.m\.)|\b(noon|midday|midnight|now"
    r"|days?|weeks?|hours?|hrs?|minutes?|mins?|seconds?|secs?)\b",
    re.IGNORECASE,
)

# A month name on its own ("may I ...", "march in ...") is an ordinary word, not a date.
BARE_MONTH_RE = re.compile(
    r"^\W*(?:(?:in|on|of|the|i)\s+)*"
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
    r"(?:\s+(?:in|on|of|the|i))*\W*$",
    re.IGNORECASE,
)

DATE_ONLY_HOUR = 12
END_OF_DAY_HOUR = 18


def extract_priority(transcript: str) -> TaskPriority:
    text = normalize_transcript(transcript)
    for priority, pattern in PRIORITY_RULES:
        if pattern.search(text):
            return priority
    return TaskPriority.MEDIUM


def extract_status(transcript: str) -> TaskStatus:
    text = normalize_transcript(transcript)
    for status, pattern in STATUS_RULES:
        if pattern.search(text):
            return status
    return TaskStatus.TODO


def default_to_end_of_day(when: datetime) -> datetime:
    """Exactly noon means "no time given": move it to 18:00 the same day."""
    if (when.hour, when.minute, when.second, when.microsecond) == (DATE_ONLY_HOUR, 0, 0, 0):
        return when.replace(hour=END_OF_DAY_HOUR)
    return when


def to_iso_utc(when: datetime) -> str:
    """Naive values are local time. Output looks like 2026-10-19T16:00:00.000Z."""
    return when.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def extract_due_date(transcript: str, now: datetime | None = None) -> str | None:
    base = local_naive(now)
    settings = {
        "RELATIVE_BASE": base,
        "PREFER_DATES_FROM": "future",
        "RETURN_AS_TIMEZONE_AWARE": False,
    }
    try:
        found = search_dates(transcript, languages=["en"], settings=settings)
    except Exception:
        logger.debug("Date search failed for transcript=%r", transcript[:200], exc_info=True)
        return None

    matches = [(phrase, when) for phrase, when in found or () if not BARE_MONTH_RE.match(phrase)]
    if not matches:
        return None

    phrase, when = matches[0]
    if when.tzinfo is not None:
        when = when.astimezone().replace(tzinfo=None)

    # dateparser keeps the base time-of-day for date-only phrases ("tomorrow").
    if not EXPLICIT_TIME_RE.search(phrase):
        when = when.replace(hour=DATE_ONLY_HOUR, minute=0, second=0, microsecond=0)

    when = default_to_end_of_day(when)
    logger.debug("Due date phrase=%r -> %s", phrase, when.isoformat())
    return to_iso_utc(when)


def extract_title(transcript: str) -> str:
    title = LEADING_FILLER_RE.sub("", transcript, count=1)
    title = PRIORITY_PHRASE_RE.sub("", title)
    title = TEMPORAL_TAIL_RE.sub("", title, count=1)
    title = STATUS_PHRASE_RE.sub("", title)
    title = TRAILING_PUNCT_RE.sub("", title.rstrip(), count=1)
    title = WHITESPACE_RE.sub(" ", title).strip()
    if not title:
        return UNTITLED_TASK
    return title[0].upper() + title[1:]


class RuleExtractor:
    """Keyword/regex extractor. Never raises; description is always empty."""

    def extract(self, transcript: str, now: datetime | None = None) -> ParseResult:
        return ParseResult(
            title=extract_title(transcript),
            description="",
            priority=extract_priority(transcript),
            due_date=extract_due_date(transcript, now),
            status=extract_status(transcript),
        )
