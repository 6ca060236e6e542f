# tests/test_session.py

from __future__ import annotations

from datetime import date

from taskwiz.console.session import (
    EDIT_MENU,
    NO_TASKS,
    WRONG_INPUT,
    ConsoleSession,
    SessionState,
    run_console_session,
)
from taskwiz.core.state import AppState
from taskwiz.errors import ValidationFailure
from taskwiz.tasks.task_models import TaskStatus

from .fakes import FakeConsole, FakeTaskRepo, make_task


def _session(repo, lines: list[str], today: date) -> tuple[ConsoleSession, FakeConsole]:
    console = FakeConsole(lines)
    return ConsoleSession(repo, console, today=lambda: today), console


def test_exit_returns_status_without_reading_more(today: date) -> None:
    session, console = _session(FakeTaskRepo(), ["5", "unread"], today)

    assert session.run() == 0
    assert console.output[-1] == "\nExiting..."
    assert console.lines == ["unread"]


def test_step_returns_next_state(today: date) -> None:
    session, _ = _session(FakeTaskRepo(), ["5"], today)
    assert session.step() is SessionState.EXITING

    session, _ = _session(FakeTaskRepo(), ["1", ""], today)
    assert session.step() is SessionState.MENU


def test_end_of_input_ends_the_session(today: date) -> None:
    session, console = _session(FakeTaskRepo(), ["1", ""], today)
    assert session.run() == 0
    assert NO_TASKS in console.output
    assert console.output[-1] == "\nExiting..."


def test_unknown_menu_choice_reports_and_redisplays_menu(today: date) -> None:
    session, console = _session(FakeTaskRepo(), ["x", "", "5"], today)
    session.run()

    assert WRONG_INPUT in console.output
    assert console.text.count("1. View All Tasks") == 2


def test_create_task(today: date) -> None:
    repo = FakeTaskRepo()
    lines = ["2", "Ship report", "Finish Q3 report", "2099-01-01", "", "5"]
    session, console = _session(repo, lines, today)
    session.run()

    (task,) = repo.list()
    assert task.title == "Ship report"
    assert task.description == "Finish Q3 report"
    assert task.due_date == "2099-01-01"
    assert task.status is TaskStatus.NOT_STARTED
    assert "\nTask added successfully." in console.output
    assert console.lines == []


def test_create_task_retries_each_field(today: date) -> None:
    repo = FakeTaskRepo()
    lines = [
        "2",
        "", "",  # empty title + acknowledgment
        "Ship report",
        "   ", "",  # empty description + acknowledgment
        "Finish Q3 report",
        "next week", "",  # malformed date + acknowledgment
        "2000-01-01", "",  # past date + acknowledgment
        "2030-06-15",
        "",
        "5",
    ]
    session, console = _session(repo, lines, today)
    session.run()

    (task,) = repo.list()
    assert task.due_date == "2030-06-15"
    assert "\nTitle cannot be empty. Please enter a title." in console.output
    assert "\nDescription cannot be empty. Please enter a description." in console.output
    assert console.lines == []


def test_create_failure_is_reported_not_raised(today: date) -> None:
    repo = FakeTaskRepo()
    repo.fail_with = ValidationFailure({"title": ["can't be blank"]})
    session, console = _session(repo, ["2", "t", "d", "2099-01-01", "", "5"], today)

    assert session.run() == 0
    assert "\nFailed to add task: title: can't be blank" in console.output
    assert repo.list() == []


def test_edit_status_changes_only_status(today: date) -> None:
    original = make_task(1, "Ship report", description="Finish Q3 report")
    repo = FakeTaskRepo([original])
    session, console = _session(repo, ["3", "2", "1", "2", "", "5"], today)
    session.run()

    task = repo.get(1)
    assert task.status is TaskStatus.DONE
    assert (task.title, task.description, task.due_date) == (
        original.title,
        original.description,
        original.due_date,
    )
    assert repo.updates == [(1, {"status": "Done"})]
    assert "\nStatus updated successfully." in console.output


def test_edit_with_unknown_status_code_falls_back_to_not_started(today: date) -> None:
    repo = FakeTaskRepo([make_task(1, "A", status=TaskStatus.IN_PROGRESS)])
    session, _ = _session(repo, ["3", "2", "1", "7", "", "5"], today)
    session.run()

    assert repo.get(1).status is TaskStatus.NOT_STARTED


def test_edit_ordinal_retries_against_the_same_snapshot(today: date) -> None:
    repo = FakeTaskRepo([make_task(1, "A"), make_task(2, "B"), make_task(3, "C")])
    lines = ["3", "1", "two", "", "4", "", "2", "Renamed", "", "5"]
    session, console = _session(repo, lines, today)
    session.run()

    assert repo.get(2).title == "Renamed"
    assert console.text.count("=== MY TASKS ===") == 1
    assert repo.list_calls == 1
    assert "\nInvalid input. Please enter a number." in console.output
    assert "\nInvalid task number." in console.output
    assert console.text.count(EDIT_MENU) == 1


def test_edit_due_date(today: date) -> None:
    repo = FakeTaskRepo([make_task(1, "A")])
    session, console = _session(repo, ["3", "4", "1", "2030-06-14", "", "2030-07-01", "", "5"], today)
    session.run()

    assert repo.get(1).due_date == "2030-07-01"
    assert "\nDue date updated successfully." in console.output


def test_edit_submenu_wrong_input_and_back(today: date) -> None:
    repo = FakeTaskRepo([make_task(1, "A")])
    session, console = _session(repo, ["3", "9", "", "5", "5"], today)

    assert session.run() == 0
    assert console.text.count(EDIT_MENU) == 2
    assert WRONG_INPUT in console.output
    assert repo.updates == []
    assert console.text.count("1. View All Tasks") == 2


def test_delete_last_task_empties_the_store(today: date) -> None:
    repo = FakeTaskRepo([make_task(1, "A")])
    session, console = _session(repo, ["4", "1", "", "5"], today)
    session.run()

    assert repo.list() == []
    assert "\nTask deleted successfully." in console.output


def test_delete_with_no_tasks_skips_the_ordinal_prompt(today: date) -> None:
    session, console = _session(FakeTaskRepo(), ["4", "", "5"], today)
    session.run()

    assert NO_TASKS in console.output
    assert "\nEnter number of task to delete: " not in console.output
    assert console.lines == []


def test_delete_failure_is_reported(today: date) -> None:
    repo = FakeTaskRepo([make_task(1, "A")])
    repo.fail_with = ValidationFailure({"id": ["is stale"]})
    session, console = _session(repo, ["4", "1", "", "5"], today)
    session.run()

    assert "\nFailed to delete task: id: is stale" in console.output
    assert len(repo.list()) == 1


def test_unexpected_error_does_not_end_the_session(today: date) -> None:
    class BrokenRepo(FakeTaskRepo):
        def list(self):
            raise RuntimeError("disk on fire")

    session, console = _session(BrokenRepo(), ["1", "", "5"], today)

    assert session.run() == 0
    assert "\nInternal error while handling the action." in console.output
    assert console.output[-1] == "\nExiting..."


def test_create_then_list_with_sqlite_store(state: AppState) -> None:
    lines = ["2", "Ship report", "Finish Q3 report", "2099-01-01", "", "1", "", "5"]
    console = FakeConsole(lines)

    assert run_console_session(state, console) == 0

    listing = console.output[console.output.index("\n\n=== MY TASKS ===\n") + 1]
    assert "Ship report" in listing
    assert "Finish Q3 report" in listing
    assert "Not Started" in listing
    assert "2099-01-01" in listing
    assert "=========== TaskWiz ============" in console.text


def test_edit_then_delete_with_sqlite_store(state: AppState) -> None:
    store = state.task_store
    store.create({"title": "keep", "description": "d", "due_date": "2099-01-01"})
    store.create({"title": "drop", "description": "d", "due_date": "2099-01-01"})

    lines = ["3", "1", "1", "kept", "", "4", "2", "", "5"]
    run_console_session(state, FakeConsole(lines))

    assert [t.title for t in store.list()] == ["kept"]


def test_undecodable_menu_input_is_treated_as_wrong_input(today: date) -> None:
    bad = UnicodeDecodeError("utf-8", b"\xff\xfe", 0, 1, "invalid start byte")
    session, console = _session(FakeTaskRepo(), [bad, "", "5"], today)

    assert session.run() == 0
    assert WRONG_INPUT in console.output
    assert console.output[-1] == "\nExiting..."
    assert console.lines == []


def test_markup_like_titles_can_be_listed_and_deleted(state: AppState) -> None:
    store = state.task_store
    store.create({"title": "fix [/b] tag", "description": "[x] :thumbs_up:", "due_date": "2099-01-01"})

    console = FakeConsole(["1", "", "4", "1", "", "5"])
    run_console_session(state, console)

    assert "Internal error while handling the action." not in console.text
    assert "fix [/b] tag" in console.text
    assert "[x] :thumbs_up:" in console.text
    assert "\nTask deleted successfully." in console.output
    assert store.list() == []
