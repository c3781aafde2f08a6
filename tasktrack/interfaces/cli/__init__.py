"""CLI interface for tasktrack using Typer.

This module provides the command-line interface for tasktrack,
a personal task tracker with git branch integration.

Usage:
    tasktrack add "Title"        # Add a task
    tasktrack list               # Show open and active tasks
    tasktrack start <id>         # Start a task on its feature branch
    tasktrack done <id>          # Mark a task completed

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (task)
- common.py: Shared utilities for CLI commands
"""

from typing import Optional

import typer

from tasktrack import __version__
from tasktrack.config import ENV_TASKS_FILE, resolve_config
from tasktrack.logging_setup import configure_logging

# Import command groups
from tasktrack.interfaces.cli.commands import task

# Create the main Typer application
app = typer.Typer(
    name="tasktrack",
    help="Personal task tracker with git branch integration",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tasktrack version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help=f"Task file (or set {ENV_TASKS_FILE} env var)",
        envvar=ENV_TASKS_FILE,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """tasktrack - track tasks and the git branches they live on.

    Tasks are stored in .tasktrack/tasks.json under the current
    directory unless --file or TASKTRACK_FILE says otherwise.
    """
    configure_logging(verbose)
    ctx.obj = resolve_config(file)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("add")
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Task title (1-200 characters)"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Longer description"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="high, medium or low"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date as YYYY-MM-DD"),
) -> None:
    """Add a task (shortcut for 'task add')."""
    task.add(ctx, title=title, description=description, priority=priority, due=due)


@app.command("list")
def list_tasks(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Only tasks with this status"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="Only tasks with this priority"),
) -> None:
    """List tasks (shortcut for 'task list')."""
    task.list_tasks(ctx, status=status, priority=priority)


@app.command("start")
def start(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Proceed even with uncommitted changes"),
) -> None:
    """Start a task (shortcut for 'task start')."""
    task.start(ctx, task_id=task_id, yes=yes)


@app.command("done")
def done(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
) -> None:
    """Complete a task (shortcut for 'task done')."""
    task.done(ctx, task_id=task_id)


@app.command("current")
def current(ctx: typer.Context) -> None:
    """Show the task on the current branch (shortcut for 'task current')."""
    task.current(ctx)


__all__ = ["app"]
