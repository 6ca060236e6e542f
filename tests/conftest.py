# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskwiz.core.state import AppState
from taskwiz.tasks.task_store import TaskStore

FIXED_TODAY = date(2030, 6, 15)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the session.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="TaskWiz",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "tasks.sqlite3",
        table_width=120,
    )


@pytest.fixture()
def task_store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def state(settings: SimpleNamespace, task_store: TaskStore) -> AppState:
    """AppState wired with a real SQLite store in tmp_path."""
    return AppState(settings=settings, task_store=task_store)


@pytest.fixture()
def today() -> date:
    return FIXED_TODAY
