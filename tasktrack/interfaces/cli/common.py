"""Shared utilities for tasktrack CLI commands.

This module provides common utilities used across CLI commands:
- Service construction from the resolved configuration
- Formatted output helpers (error, success, info, warning)
- Task formatting for display
- Mapping Err results to exit code 1
"""

from pathlib import Path
from typing import TypeVar

import typer

from tasktrack.application import TaskService
from tasktrack.config import TrackerConfig, resolve_config
from tasktrack.domain.shared import Err, Ok, Result, TaskError
from tasktrack.domain.task import Task, TaskStatus
from tasktrack.infrastructure import GitOperations, TaskRepository

T = TypeVar("T")

STATUS_COLORS = {
    TaskStatus.OPEN: typer.colors.WHITE,
    TaskStatus.IN_PROGRESS: typer.colors.YELLOW,
    TaskStatus.COMPLETED: typer.colors.GREEN,
    TaskStatus.ARCHIVED: typer.colors.BRIGHT_BLACK,
}

TITLE_WIDTH = 50

# Follow-up line printed under an error, keyed by TaskError.kind
ERROR_HINTS = {
    "storage_read": "Check that the task file and its directory are readable.",
    "storage_write": "Check that the task file directory is writable and has free space.",
    "collaborator": "The task was not changed.",
}


def get_config(ctx: typer.Context) -> TrackerConfig:
    """Get the configuration resolved by the root callback."""
    if isinstance(ctx.obj, TrackerConfig):
        return ctx.obj
    return resolve_config()


def build_service(config: TrackerConfig, workdir: Path | None = None) -> TaskService:
    """Wire the task service to the JSON repository and git.

    Args:
        config: Resolved task file locations.
        workdir: Directory git runs in. Defaults to the current directory.

    Returns:
        A TaskService ready for one command.
    """
    repo = TaskRepository(config.tasks_file, config.backup_file)
    git = GitOperations(workdir or Path.cwd())
    return TaskService(repo, git)


def get_service(ctx: typer.Context) -> TaskService:
    return build_service(get_config(ctx))


def unwrap(result: Result[T, TaskError]) -> T:
    """Return the Ok value, or print the error and exit with code 1.

    Raises:
        typer.Exit: If the result is an Err.
    """
    if isinstance(result, Err):
        print_error(result.error.message)
        hint = ERROR_HINTS.get(result.error.kind)
        if hint:
            typer.echo(hint, err=True)
        raise typer.Exit(1)
    assert isinstance(result, Ok)
    return result.value


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message.

    Args:
        msg: Success message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message.

    Args:
        msg: Info message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    """Print a formatted warning message.

    Args:
        msg: Warning message to display
    """
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 60) -> None:
    """Print a separator line.

    Args:
        char: Character to use for separator
        width: Width of the separator line
    """
    typer.echo(char * width)


def format_status(status: TaskStatus) -> str:
    return typer.style(f"{status.value:<11}", fg=STATUS_COLORS[status])


def print_task_table(tasks: list[Task]) -> None:
    """Print tasks as an aligned table, one row per task.

    Output format:
        ID       STATUS      PRI     DUE         TITLE
        ----------------------------------------------------------------------
        7a5c6ff0 in_progress high    2026-11-01  User auth feature
    """
    typer.echo(f"{'ID':<8} {'STATUS':<11} {'PRI':<7} {'DUE':<11} TITLE")
    typer.echo("-" * 70)
    for task in tasks:
        priority = task.priority.value if task.priority else "-"
        due = task.due_date.isoformat() if task.due_date else "-"
        title = task.title if len(task.title) <= TITLE_WIDTH else task.title[: TITLE_WIDTH - 3] + "..."
        typer.echo(f"{task.short_id:<8} {format_status(task.status)} {priority:<7} {due:<11} {title}")


def print_task(task: Task) -> None:
    """Print every field of a task."""
    print_separator()
    typer.echo(f"Task {task.id}")
    print_separator()
    typer.echo(f"Title:       {task.title}")
    typer.echo(f"Status:      {format_status(task.status)}")
    typer.echo(f"Priority:    {task.priority.value if task.priority else '-'}")
    typer.echo(f"Due:         {task.due_date.isoformat() if task.due_date else '-'}")
    typer.echo(f"Branch:      {task.branch or '-'}")
    typer.echo(f"Created:     {task.created_at.isoformat(timespec='seconds')}")
    typer.echo(f"Updated:     {task.updated_at.isoformat(timespec='seconds')}")
    if task.description:
        typer.echo("")
        typer.echo(task.description)


__all__ = [
    "get_config",
    "build_service",
    "get_service",
    "unwrap",
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
    "print_separator",
    "format_status",
    "print_task_table",
    "print_task",
]
