# src/taskwiz/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are the labels stored in the database and shown in listings.
    """

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.NOT_STARTED
        try:
            return cls(raw)
        except ValueError:
            return cls.NOT_STARTED


class TaskField(StrEnum):
    """User-editable task fields (everything except id and timestamps)."""

    TITLE = "title"
    STATUS = "status"
    DESCRIPTION = "description"
    DUE_DATE = "due_date"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    title: str
    status: TaskStatus
    description: str
    due_date: str

    created_at: float
    updated_at: float

    def display_row(self) -> list[str]:
        return [str(self.id), self.title, self.status.value, self.description, self.due_date]
