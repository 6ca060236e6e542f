# src/taskwiz/tasks/selection.py

"""
Ordinal selection.

A snapshot is the tuple of tasks shown to the user in one listing;
ordinals 1..N refer to positions in that tuple, not to task ids.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..core.ports import TaskRepo
from ..errors import NotANumber, OutOfRange
from .task_models import Task

Snapshot = tuple[Task, ...]

ORDINAL_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


def take_snapshot(repo: TaskRepo) -> Snapshot:
    return tuple(repo.list())


def resolve_ordinal(snapshot: Sequence[Task], raw: str | None) -> Task:
    text = (raw or "").strip()
    if not ORDINAL_RE.match(text):
        raise NotANumber(text)

    negative = text.startswith("-")
    digits = text.lstrip("+-").lstrip("0") or "0"
    # anything wider than the snapshot size cannot be in range
    if len(digits) > len(str(len(snapshot))):
        raise OutOfRange(None, len(snapshot))

    number = -int(digits) if negative else int(digits)
    if number <= 0 or number > len(snapshot):
        raise OutOfRange(number, len(snapshot))
    return snapshot[number - 1]
