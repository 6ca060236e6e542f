# src/taskwiz/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..errors import MalformedDate, NotFound, ValidationFailure
from .task_models import Task, TaskField, TaskStatus
from .validators import parse_iso_date

logger = logging.getLogger(__name__)

EDITABLE_FIELDS: tuple[str, ...] = tuple(f.value for f in TaskField)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Writes are checked before touching the database; a rejected write raises
    ValidationFailure with per-field reasons and leaves the row untouched.

    Each method opens its own SQLite connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'Not Started',
                    description TEXT NOT NULL,
                    due_date TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("status", "TEXT NOT NULL DEFAULT 'Not Started'")
            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("due_date", "TEXT NOT NULL DEFAULT ''")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            status=TaskStatus.from_db(row["status"]),
            description=str(row["description"] or ""),
            due_date=str(row["due_date"] or ""),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    @staticmethod
    def _clean_fields(fields: Mapping[str, Any], *, required: bool) -> dict[str, str]:
        """
        Check and normalize a write payload.

        `required=True` (create) demands every editable field; otherwise only
        the provided ones are checked.
        """
        errors: dict[str, list[str]] = {}
        clean: dict[str, str] = {}

        for name in fields:
            if name not in EDITABLE_FIELDS:
                errors.setdefault(str(name), []).append("is not an editable field")

        for name in EDITABLE_FIELDS:
            if name not in fields:
                if required:
                    errors.setdefault(name, []).append("can't be blank")
                continue

            raw = fields[name]
            value = "" if raw is None else str(raw).strip()
            if not value:
                errors.setdefault(name, []).append("can't be blank")
                continue

            if name == TaskField.STATUS:
                try:
                    value = TaskStatus(value).value
                except ValueError:
                    errors.setdefault(name, []).append("is invalid")
                    continue

            if name == TaskField.DUE_DATE:
                try:
                    parse_iso_date(value)
                except MalformedDate:
                    errors.setdefault(name, []).append("is invalid")
                    continue

            clean[name] = value

        if errors:
            raise ValidationFailure(errors)
        return clean

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def list(self) -> list[Task]:
        """All tasks in insertion order."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY id ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def get(self, task_id: int) -> Task:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFound(int(task_id))
        return self._row_to_task(row)

    def create(self, fields: Mapping[str, Any]) -> Task:
        payload = dict(fields)
        payload.setdefault(TaskField.STATUS.value, TaskStatus.NOT_STARTED.value)
        clean = self._clean_fields(payload, required=True)

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(title, status, description, due_date, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    clean["title"],
                    clean["status"],
                    clean["description"],
                    clean["due_date"],
                    now,
                    now,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
        finally:
            conn.close()

        logger.debug(
            "Task added id=%s status=%s due_date=%s", task_id, clean["status"], clean["due_date"]
        )
        return self.get(task_id)

    def update(self, task: Task, fields: Mapping[str, Any]) -> Task:
        """Apply a partial update; only the given fields change."""
        clean = self._clean_fields(fields, required=False)
        if not clean:
            return self.get(task.id)

        assignments = [f"{name} = ?" for name in clean]
        params: list[Any] = list(clean.values())
        assignments.append("updated_at = ?")
        params.append(time.time())
        params.append(int(task.id))

        sql = f"UPDATE tasks SET {', '.join(assignments)} WHERE id = ?"

        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            updated = cur.rowcount
        finally:
            conn.close()

        if updated != 1:
            raise NotFound(task.id)
        logger.debug("Task updated id=%s fields=%s", task.id, sorted(clean))
        return self.get(task.id)

    def delete(self, task: Task) -> Task:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task.id),))
            conn.commit()
            deleted = cur.rowcount
        finally:
            conn.close()

        if deleted != 1:
            raise NotFound(task.id)
        logger.debug("Task deleted id=%s", task.id)
        return task
