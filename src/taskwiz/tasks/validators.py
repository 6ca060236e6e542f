# src/taskwiz/tasks/validators.py

"""
Field validators.

Pure functions: no IO, no store access. The reference date is always
passed in by the caller so "today" is evaluated at validation time.
"""

from __future__ import annotations

import logging
import re
from datetime import date

from ..errors import EmptyFieldError, MalformedDate, PastDate
from .task_models import TaskStatus

logger = logging.getLogger(__name__)

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

STATUS_CODES: dict[str, TaskStatus] = {
    "0": TaskStatus.NOT_STARTED,
    "1": TaskStatus.IN_PROGRESS,
    "2": TaskStatus.DONE,
}
DEFAULT_STATUS = TaskStatus.NOT_STARTED


def validate_non_empty(text: str | None, field: str = "value") -> str:
    value = (text or "").strip()
    if not value:
        raise EmptyFieldError(field)
    return value


def parse_iso_date(date_text: str | None) -> date:
    raw = (date_text or "").strip()
    if not ISO_DATE_RE.match(raw):
        raise MalformedDate(raw)
    try:
        return date.fromisoformat(raw)
    except ValueError:
        # e.g. 2024-13-40 or 2023-02-29
        raise MalformedDate(raw) from None


def validate_future_or_today(date_text: str | None, reference_date: date) -> str:
    """
    Accept a YYYY-MM-DD date that is not before `reference_date`.

    Returns the trimmed text as entered (stored as-is).
    """
    raw = (date_text or "").strip()
    parsed = parse_iso_date(raw)
    if parsed < reference_date:
        raise PastDate(raw)
    return raw


def decode_status(code: str | None) -> TaskStatus:
    """
    Map a menu code ("0", "1", "2") to a TaskStatus.

    Unknown codes fall back to DEFAULT_STATUS instead of failing.
    """
    key = (code or "").strip()
    status = STATUS_CODES.get(key)
    if status is None:
        logger.debug("Unknown status code %r, falling back to %s", key, DEFAULT_STATUS.value)
        return DEFAULT_STATUS
    return status
