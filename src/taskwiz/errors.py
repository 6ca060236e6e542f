# src/taskwiz/errors.py

"""
Error taxonomy.

Field and ordinal errors are recovered at the prompt (re-prompt);
store errors are reported and the action returns to the menu.
"""

from __future__ import annotations


class TaskWizError(Exception):
    """Base class for every recoverable TaskWiz error."""


class EmptyFieldError(TaskWizError, ValueError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field.capitalize()} cannot be empty. Please enter a {field}.")


class DateError(TaskWizError, ValueError):
    pass


class MalformedDate(DateError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__("Invalid date format. Please enter the date in the format YYYY-MM-DD.")


class PastDate(DateError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__("Due date must be today or in the future.")


class SelectionError(TaskWizError, ValueError):
    pass


class NotANumber(SelectionError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__("Invalid input. Please enter a number.")


class OutOfRange(SelectionError):
    def __init__(self, number: int | None, size: int) -> None:
        self.number = number
        self.size = size
        super().__init__("Invalid task number.")


class NotFound(TaskWizError, LookupError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task id={task_id} not found.")


class ValidationFailure(TaskWizError):
    """
    Store-level write rejection.

    `errors` maps a field name to the list of human-readable reasons.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = {k: list(v) for k, v in errors.items()}
        super().__init__(self.summary())

    def summary(self) -> str:
        parts = [f"{field}: {reason}" for field, reasons in self.errors.items() for reason in reasons]
        return "; ".join(parts) or "unknown validation error"
