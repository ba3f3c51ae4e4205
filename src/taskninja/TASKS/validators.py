# TASKS/validators.py
import re
from datetime import date, datetime
from typing import Optional

import dateparser

from taskninja.TASKS.errors import EmptyTitleError, InvalidDateError, InvalidEnumError

ALLOWED_STATUSES = ("todo", "in-progress", "done")
ALLOWED_PRIORITIES = ("low", "medium", "high")
SEARCH_FIELDS = ("title", "description", "both")
SORT_CRITERIA = ("dueDate", "priority", "status")

_SEPARATORS = re.compile(r"[-_\s]+")
_YEAR_FIRST = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})$")


def validate_status(value: str) -> str:
    """Return the normalized status or raise InvalidEnumError."""
    normalized = (value or "").strip().lower()
    if normalized not in ALLOWED_STATUSES:
        raise InvalidEnumError("status", value, ALLOWED_STATUSES)
    return normalized


def validate_priority(value: str) -> str:
    """Return the normalized priority or raise InvalidEnumError."""
    normalized = (value or "").strip().lower()
    if normalized not in ALLOWED_PRIORITIES:
        raise InvalidEnumError("priority", value, ALLOWED_PRIORITIES)
    return normalized


def validate_title(value: str) -> str:
    title = (value or "").strip()
    if not title:
        raise EmptyTitleError()
    return title


def parse_due_date(text: Optional[str]) -> Optional[date]:
    """
    Parse a due date permissively.
    ISO text is tried first, then natural language ("tomorrow", "15 Jan 2026").
    Returns None when nothing matches.
    """
    if text is None or not str(text).strip():
        return None
    text = str(text).strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    # year-first numeric dates never go to the fuzzy parser
    match = _YEAR_FIRST.match(text)
    if match:
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError:
            return None

    parsed = dateparser.parse(text)
    if parsed:
        return parsed.date()
    return None


def validate_due_date(text: str) -> str:
    """Validate a due date and return it normalized to YYYY-MM-DD."""
    parsed = parse_due_date(text)
    if parsed is None:
        raise InvalidDateError(text)
    return parsed.isoformat()


def normalize_criterion(value: str) -> str:
    """Map 'due-date', 'DUE_DATE', 'due date' etc. onto a SORT_CRITERIA entry."""
    key = _SEPARATORS.sub("", (value or "").lower())
    for criterion in SORT_CRITERIA:
        if criterion.lower() == key:
            return criterion
    raise InvalidEnumError("sort criterion", value, SORT_CRITERIA)


def validate_search_field(value: str) -> str:
    normalized = (value or "").strip().lower()
    if normalized not in SEARCH_FIELDS:
        raise InvalidEnumError("search field", value, SEARCH_FIELDS)
    return normalized
