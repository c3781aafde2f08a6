"""Tests for the Typer command-line interface."""

import json
import logging
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tasktrack.__main__ import main
from tasktrack.interfaces.cli import app, common

from tests.fakes import FakeVersionControl

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the console handler the root callback installs on each run."""
    yield
    logger = logging.getLogger("tasktrack")
    for handler in list(logger.handlers):
        if handler.get_name() == "tasktrack-console":
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def vcs(monkeypatch) -> FakeVersionControl:
    fake = FakeVersionControl()
    monkeypatch.setattr(common, "GitOperations", lambda path: fake)
    return fake


@pytest.fixture
def cli(tmp_path: Path, vcs, monkeypatch):
    """Invoke the CLI against a task file in tmp_path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TASKTRACK_FILE", raising=False)
    tasks_file = tmp_path / "tasks.json"

    def invoke(*args: str, input: str | None = None):
        return runner.invoke(app, ["--file", str(tasks_file), *args], input=input)

    invoke.tasks_file = tasks_file
    return invoke


def stored_tasks(cli) -> list[dict]:
    return json.loads(cli.tasks_file.read_text(encoding="utf-8"))["tasks"]


def add(cli, title: str, *args: str) -> str:
    result = cli("add", title, *args)
    assert result.exit_code == 0, result.output
    return stored_tasks(cli)[-1]["id"]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "tasktrack version" in result.output


def test_entry_point_runs_the_app(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["tasktrack", "--version"])

    with pytest.raises(SystemExit) as exit_info:
        main()

    assert exit_info.value.code == 0
    assert "tasktrack version" in capsys.readouterr().out


def test_add_and_list(cli):
    add(cli, "Write docs", "-p", "high", "--due", "2026-11-01")

    result = cli("list")

    assert result.exit_code == 0
    assert "Write docs" in result.output
    assert "high" in result.output
    assert "2026-11-01" in result.output


def test_add_invalid_priority_exits_1(cli):
    result = cli("add", "Write docs", "-p", "urgent")
    assert result.exit_code == 1
    assert "Invalid priority" in result.output


def test_list_empty(cli):
    result = cli("list")
    assert result.exit_code == 0
    assert "No tasks." in result.output


def test_list_hides_archived(cli):
    add(cli, "keep one")
    add(cli, "keep two")
    archived = add(cli, "finish me")
    for command in ("start", "done"):
        assert cli(command, archived).exit_code == 0
    assert cli("task", "archive", archived).exit_code == 0

    default = cli("list")
    only_archived = cli("list", "--status", "archived")

    assert "finish me" not in default.output
    assert "keep one" in default.output
    assert "finish me" in only_archived.output
    assert "keep one" not in only_archived.output


def test_show_by_prefix(cli):
    task_id = add(cli, "Show me", "-d", "Details here")
    result = cli("task", "show", task_id[:8])
    assert result.exit_code == 0
    assert task_id in result.output
    assert "Details here" in result.output


def test_show_missing_exits_1(cli):
    result = cli("task", "show", "nope")
    assert result.exit_code == 1
    assert "Task not found" in result.output


def test_update_fields_and_clear(cli):
    task_id = add(cli, "Old title", "-p", "low")

    result = cli("task", "update", task_id, "--title", "New title", "--clear-priority")

    assert result.exit_code == 0
    task = stored_tasks(cli)[0]
    assert task["title"] == "New title"
    assert task["priority"] is None


def test_update_illegal_status_exits_1(cli):
    task_id = add(cli, "Jump ahead")
    result = cli("task", "update", task_id, "--status", "completed")
    assert result.exit_code == 1
    assert "cannot move from 'open' to 'completed'" in result.output


def test_delete_with_confirmation(cli):
    task_id = add(cli, "Delete me")

    declined = cli("task", "delete", task_id, input="n\n")
    assert declined.exit_code == 1
    assert len(stored_tasks(cli)) == 1

    accepted = cli("task", "delete", task_id, input="y\n")
    assert accepted.exit_code == 0
    assert stored_tasks(cli) == []


def test_start_creates_branch(cli, vcs):
    task_id = add(cli, "User Auth Feature!!")

    result = cli("start", task_id)

    assert result.exit_code == 0
    expected = f"feature/task-{task_id[:8]}-user-auth-feature"
    assert vcs.created == [expected]
    assert expected in result.output
    assert stored_tasks(cli)[0]["branch"] == expected
    assert stored_tasks(cli)[0]["status"] == "in_progress"


def test_start_outside_repository_warns(cli, vcs):
    vcs.repository = False
    task_id = add(cli, "No repo")

    result = cli("start", task_id)

    assert result.exit_code == 0
    assert "Not a git repository" in result.output
    assert stored_tasks(cli)[0]["branch"] is None


def test_start_with_uncommitted_changes_asks(cli, vcs):
    vcs.dirty = True
    task_id = add(cli, "Dirty tree")

    declined = cli("start", task_id, input="n\n")
    assert declined.exit_code == 1
    assert vcs.created == []
    assert stored_tasks(cli)[0]["status"] == "open"

    accepted = cli("start", task_id, input="y\n")
    assert accepted.exit_code == 0
    assert len(vcs.created) == 1


def test_start_yes_skips_prompt(cli, vcs):
    vcs.dirty = True
    task_id = add(cli, "Dirty tree")
    result = cli("start", task_id, "--yes")
    assert result.exit_code == 0
    assert len(vcs.created) == 1


def test_start_branch_failure_exits_1(cli, vcs):
    vcs.branch_error = "fatal: cannot lock ref"
    task_id = add(cli, "Broken")

    result = cli("start", task_id)

    assert result.exit_code == 1
    assert "cannot lock ref" in result.output
    assert "The task was not changed." in result.output
    assert stored_tasks(cli)[0]["status"] == "open"


def test_stop_and_current(cli, vcs):
    task_id = add(cli, "Current work")
    cli("start", task_id)

    current = cli("current")
    assert current.exit_code == 0
    assert "Current work" in current.output

    stopped = cli("task", "stop", task_id)
    assert stopped.exit_code == 0
    assert stored_tasks(cli)[0]["status"] == "open"


def test_done_requires_in_progress(cli):
    task_id = add(cli, "Not started")
    result = cli("done", task_id)
    assert result.exit_code == 1


def test_corrupt_files_exit_1(cli):
    cli.tasks_file.write_text("{")
    cli.tasks_file.with_name("tasks.json.bak").write_text("}")

    result = cli("list")

    assert result.exit_code == 1
    assert "manually" in result.output


def test_file_from_environment(tmp_path, vcs, monkeypatch):
    monkeypatch.chdir(tmp_path)
    env_file = tmp_path / "env" / "tasks.json"
    monkeypatch.setenv("TASKTRACK_FILE", str(env_file))

    result = runner.invoke(app, ["add", "From env"])

    assert result.exit_code == 0
    assert env_file.exists()
