# src/taskwiz/console/field_editor.py

"""
Per-field prompt workflows.

Each workflow prompts, validates and retries until a valid value is entered.
Retries are unbounded: the only ways out are a valid value or end of input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime

from ..errors import DateError, EmptyFieldError
from ..tasks.task_models import TaskField, TaskStatus
from ..tasks.validators import decode_status, validate_future_or_today, validate_non_empty
from .terminal import ConsoleIO

logger = logging.getLogger(__name__)

TodayProvider = Callable[[], date]

STATUS_MENU = """
Select a NEW status:

0 - "Not Started"
1 - "In Progress"
2 - "Done"
"""


def utc_today() -> date:
    return datetime.now(UTC).date()


class FieldEditor:
    def __init__(self, console: ConsoleIO, *, today: TodayProvider = utc_today) -> None:
        self.console = console
        self._today = today

    # ---- shared workflows (create + edit) ----

    def prompt_text(self, field: TaskField, prompt: str) -> str:
        while True:
            raw = self.console.ask(prompt)
            try:
                return validate_non_empty(raw, field=field.value)
            except EmptyFieldError as e:
                logger.debug("Rejected empty %s", field.value)
                self.console.say(f"\n{e}")
                self.console.pause()

    def prompt_due_date(self) -> str:
        while True:
            raw = self.console.ask("\nEnter Due Date (YYYY-MM-DD): ")
            try:
                # "today" is re-read on every attempt
                return validate_future_or_today(raw, self._today())
            except DateError as e:
                logger.debug("Rejected due date %r: %s", raw, type(e).__name__)
                self.console.say(f"\n{e}")
                self.console.pause()

    def prompt_status(self) -> TaskStatus:
        self.console.say(STATUS_MENU)
        return decode_status(self.console.ask("Enter NEW status: "))

    # ---- edit entry point ----

    def new_value(self, field: TaskField) -> str:
        """Gather a validated replacement value for `field` (as stored)."""
        if field is TaskField.STATUS:
            return self.prompt_status().value
        if field is TaskField.DUE_DATE:
            return self.prompt_due_date()
        return self.prompt_text(field, f"\nEnter NEW {field.value}: ")
