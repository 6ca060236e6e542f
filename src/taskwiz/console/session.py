# src/taskwiz/console/session.py

"""
Interactive menu session.

State machine: MENU -> {LISTING, CREATING, EDITING, DELETING, EXITING}.
Every action returns to MENU; EXITING is terminal. The session never ends
the process itself: `run()` returns an exit status for the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from ..core.ports import TaskRepo
from ..core.state import AppState
from ..errors import NotFound, SelectionError, ValidationFailure
from ..tasks.selection import Snapshot, resolve_ordinal, take_snapshot
from ..tasks.task_models import Task, TaskField, TaskStatus
from .field_editor import FieldEditor, TodayProvider, utc_today
from .tables import render_listing
from .terminal import ConsoleIO

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    MENU = "menu"
    LISTING = "listing"
    CREATING = "creating"
    EDITING = "editing"
    DELETING = "deleting"
    EXITING = "exiting"


MAIN_CHOICES: dict[str, SessionState] = {
    "1": SessionState.LISTING,
    "2": SessionState.CREATING,
    "3": SessionState.EDITING,
    "4": SessionState.DELETING,
    "5": SessionState.EXITING,
}

EDIT_CHOICES: dict[str, TaskField] = {
    "1": TaskField.TITLE,
    "2": TaskField.STATUS,
    "3": TaskField.DESCRIPTION,
    "4": TaskField.DUE_DATE,
}
EDIT_BACK = "5"

EDIT_MENU = """
====== EDIT A TASK =======
Which do you want to edit?

1. Edit a Title
2. Edit a Status
3. Edit a Description
4. Edit a Due Date
5. Back to main menu
"""

WRONG_INPUT = "\nERROR! Wrong input. Please try again."
NO_TASKS = "No tasks available."
FAREWELL = "\nExiting..."


def build_main_menu(app_name: str) -> str:
    return (
        "\n\n"
        f"=========== {app_name} ============\n"
        "=== A Task Management System ===\n"
        "\n"
        "1. View All Tasks\n"
        "2. Add a Task\n"
        "3. Edit a Task\n"
        "4. Delete a Task\n"
        "5. EXIT\n"
    )


class ConsoleSession:
    def __init__(
        self,
        repo: TaskRepo,
        console: ConsoleIO,
        *,
        app_name: str = "TaskWiz",
        table_width: int = 120,
        today: TodayProvider = utc_today,
    ) -> None:
        self.repo = repo
        self.console = console
        self.editor = FieldEditor(console, today=today)
        self._menu = build_main_menu(app_name)
        self._table_width = table_width
        self._actions: dict[SessionState, Callable[[], None]] = {
            SessionState.LISTING: self.list_tasks,
            SessionState.CREATING: self.add_task,
            SessionState.EDITING: self.edit_task,
            SessionState.DELETING: self.delete_task,
        }

    # ---- loop ----

    def run(self) -> int:
        logger.info("Console session started.")
        state = SessionState.MENU
        while state is not SessionState.EXITING:
            try:
                state = self.step()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                state = SessionState.EXITING
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                state = SessionState.EXITING

        self.console.say(FAREWELL)
        logger.info("Console session finished.")
        return 0

    def step(self) -> SessionState:
        """Show the menu, read one choice and carry out the chosen action."""
        self.console.say(self._menu)
        choice = self.console.ask("Enter your choice: ")
        target = MAIN_CHOICES.get(choice)

        if target is None:
            logger.debug("Unknown menu choice %r", choice)
            self.console.say(WRONG_INPUT)
            self.console.pause()
            return SessionState.MENU

        return self.dispatch(target)

    def dispatch(self, target: SessionState) -> SessionState:
        if target is SessionState.EXITING:
            return SessionState.EXITING

        action = self._actions[target]
        try:
            action()
        except (EOFError, KeyboardInterrupt):
            raise
        except Exception:
            logger.exception("Action %s crashed.", target.value)
            self.console.say("\nInternal error while handling the action.")
            self.console.pause()
        return SessionState.MENU

    # ---- helpers ----

    def _show_listing(self) -> Snapshot:
        snapshot = take_snapshot(self.repo)
        if not snapshot:
            self.console.say(NO_TASKS)
        else:
            self.console.say("\n\n=== MY TASKS ===\n")
            self.console.say(render_listing(snapshot, width=self._table_width))
        return snapshot

    def _select(self, snapshot: Snapshot, prompt: str) -> Task:
        """Ask for an ordinal until it resolves against `snapshot`."""
        while True:
            raw = self.console.ask(prompt)
            try:
                return resolve_ordinal(snapshot, raw)
            except SelectionError as e:
                logger.debug("Rejected ordinal %r: %s", raw, type(e).__name__)
                self.console.say(f"\n{e}")
                self.console.pause()

    # ---- actions ----

    def list_tasks(self) -> None:
        self._show_listing()
        self.console.pause()

    def add_task(self) -> None:
        self.console.say("\n\n===== ADD A TASK =====\n")
        fields = {
            "title": self.editor.prompt_text(TaskField.TITLE, "\nEnter Title: "),
            "status": TaskStatus.NOT_STARTED.value,
            "description": self.editor.prompt_text(TaskField.DESCRIPTION, "\nEnter Description: "),
            "due_date": self.editor.prompt_due_date(),
        }

        try:
            task = self.repo.create(fields)
        except ValidationFailure as e:
            logger.info("Create rejected: %s", e.errors)
            self.console.say(f"\nFailed to add task: {e}")
        else:
            logger.info("Task created id=%s", task.id)
            self.console.say("\nTask added successfully.")
        self.console.pause()

    def edit_task(self) -> None:
        while True:
            self.console.say(EDIT_MENU)
            choice = self.console.ask("Enter your choice: ")
            if choice == EDIT_BACK:
                return
            field = EDIT_CHOICES.get(choice)
            if field is not None:
                self.edit_field(field)
                return
            logger.debug("Unknown edit choice %r", choice)
            self.console.say(WRONG_INPUT)
            self.console.pause()

    def edit_field(self, field: TaskField) -> None:
        snapshot = self._show_listing()
        if not snapshot:
            self.console.pause()
            return

        task = self._select(snapshot, "\nEnter number of task to edit: ")
        value = self.editor.new_value(field)

        try:
            self.repo.update(task, {field.value: value})
        except (ValidationFailure, NotFound) as e:
            logger.info("Update rejected task_id=%s field=%s: %s", task.id, field.value, e)
            self.console.say(f"\nFailed to update task: {e}")
        else:
            logger.info("Task updated id=%s field=%s", task.id, field.value)
            self.console.say(f"\n{field.label} updated successfully.")
        self.console.pause()

    def delete_task(self) -> None:
        snapshot = self._show_listing()
        if not snapshot:
            self.console.pause()
            return

        self.console.say("\n\n===== DELETE A TASK =====\n")
        task = self._select(snapshot, "\nEnter number of task to delete: ")

        try:
            self.repo.delete(task)
        except (ValidationFailure, NotFound) as e:
            logger.info("Delete rejected task_id=%s: %s", task.id, e)
            self.console.say(f"\nFailed to delete task: {e}")
        else:
            logger.info("Task deleted id=%s", task.id)
            self.console.say("\nTask deleted successfully.")
        self.console.pause()


def run_console_session(state: AppState, console: ConsoleIO | None = None) -> int:
    settings = state.settings
    session = ConsoleSession(
        state.task_store,
        console or ConsoleIO(),
        app_name=str(getattr(settings, "app_name", "TaskWiz")),
        table_width=int(getattr(settings, "table_width", 120)),
    )
    return session.run()
