# tests/test_rule_extractor.py

from __future__ import annotations

from datetime import datetime

import pytest

from tasktracker.parser.rule_extractor import (
    RuleExtractor,
    default_to_end_of_day,
    extract_priority,
    extract_status,
    extract_title,
    to_iso_utc,
)
from tasktracker.tasks.task_models import VALID_PRIORITIES, VALID_STATUSES


def _local(iso: str) -> datetime:
    return datetime.fromisoformat(iso).astimezone().replace(tzinfo=None)


def test_reminder_with_tomorrow_and_urgency(now: datetime) -> None:
    result = RuleExtractor().extract("remind me to call the dentist tomorrow urgent", now)

    assert result.priority == "urgent"
    assert result.status == "todo"
    assert result.title == "Call the dentist"
    assert result.description == ""
    assert result.due_date is not None
    assert result.due_date.endswith("Z")
    assert _local(result.due_date) == datetime(2026, 10, 19, 18, 0)


def test_status_phrase_is_removed_from_title(now: datetime) -> None:
    result = RuleExtractor().extract("mark as done buy groceries", now)

    assert result.status == "done"
    assert result.title == "Buy groceries"


def test_low_priority_and_filler_removed(now: datetime) -> None:
    result = RuleExtractor().extract("low priority clean the garage whenever", now)

    assert result.priority == "low"
    assert result.title == "Clean the garage"


def test_no_keywords_gives_defaults(now: datetime) -> None:
    result = RuleExtractor().extract("xyz", now)

    assert result.to_dict() == {
        "title": "Xyz",
        "description": "",
        "priority": "medium",
        "dueDate": None,
        "status": "todo",
    }


def test_title_falls_back_when_everything_is_stripped() -> None:
    assert extract_title("urgent asap") == "Untitled Task"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("urgent and important", "urgent"),
        ("this is critical, high priority", "urgent"),
        ("fix it right away", "urgent"),
        ("important: renew passport", "high"),
        ("high priority and low effort", "high"),
        ("no rush on the photos", "low"),
        ("this is not urgent", "urgent"),
        ("not urgent but important", "urgent"),
        ("walk the dog", "medium"),
        ("clean the highway sign", "medium"),
        ("buy a LOWER shelf", "medium"),
    ],
)
def test_priority_precedence_and_word_boundaries(text: str, expected: str) -> None:
    assert extract_priority(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("working on the slides, almost done", "in_progress"),
        ("started the migration", "in_progress"),
        ("Finished the essay", "done"),
        ("the undone laundry", "todo"),
        ("write docs", "todo"),
    ],
)
def test_status_precedence(text: str, expected: str) -> None:
    assert extract_status(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("submit the report by friday", "Submit the report"),
        ("Please water the plants today", "Water the plants"),
        ("can you book flights next tuesday with the team", "Book flights"),
        ("I need to pay rent in 3 days", "Pay rent"),
        ("Email Bob, before lunch", "Email Bob"),
        ("it's important to stretch.", "To stretch"),
        ("status is in progress   refactor    the parser", "Refactor the parser"),
        ("add a   new   card", "New card"),
    ],
)
def test_title_cleaning_passes(text: str, expected: str) -> None:
    assert extract_title(text) == expected


def test_only_one_leading_filler_is_stripped() -> None:
    assert extract_title("please please feed the cat") == "Please feed the cat"


def test_noon_means_no_time_and_moves_to_evening() -> None:
    assert default_to_end_of_day(datetime(2026, 10, 19, 12, 0)) == datetime(2026, 10, 19, 18, 0)
    assert default_to_end_of_day(datetime(2026, 10, 19, 12, 0, 0, 1000)) == datetime(2026, 10, 19, 12, 0, 0, 1000)
    assert default_to_end_of_day(datetime(2026, 10, 19, 15, 30)) == datetime(2026, 10, 19, 15, 30)


def test_iso_output_is_utc_and_round_trips() -> None:
    local = datetime(2026, 10, 19, 18, 0)
    iso = to_iso_utc(local)

    assert iso.endswith(".000Z")
    assert _local(iso) == local


@pytest.mark.parametrize("text", ["may I schedule a call", "march in the parade", "buy milk"])
def test_month_name_used_as_a_word_is_not_a_due_date(text: str, now: datetime) -> None:
    assert RuleExtractor().extract(text, now).due_date is None


def test_month_with_day_is_still_a_due_date(now: datetime) -> None:
    due = RuleExtractor().extract("pay rent on March 3", now).due_date

    assert due is not None
    local = _local(due)
    assert (local.month, local.day, local.hour, local.minute) == (3, 3, 18, 0)


def test_day_offset_keeps_current_time_of_day(now: datetime) -> None:
    due = RuleExtractor().extract("pay rent in 3 days", now).due_date

    assert due is not None
    assert _local(due) == datetime(2026, 10, 21, 9, 30)


@pytest.mark.parametrize("text", ["!!!", "   x   ", "ñandú", "on", "due", "12345", "done done done", "a\nb"])
def test_rule_extractor_is_total(text: str, now: datetime) -> None:
    result = RuleExtractor().extract(text, now)

    assert result.title.strip()
    assert result.priority in VALID_PRIORITIES
    assert result.status in VALID_STATUSES
    assert result.description == ""
    if result.due_date is not None:
        datetime.fromisoformat(result.due_date)
