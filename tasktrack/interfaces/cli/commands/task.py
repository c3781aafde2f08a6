"""Task management CLI commands.

Commands for the task lifecycle: adding, listing, editing, starting,
completing and archiving tasks.
"""

import typer

from tasktrack.domain.shared import ConfirmationRequiredError, Err
from tasktrack.domain.task import TaskChanges, TaskDraft, TaskFilter, validate_priority, validate_status
from tasktrack.interfaces.cli.common import (
    get_service,
    print_info,
    print_success,
    print_task,
    print_task_table,
    print_warning,
    unwrap,
)

app = typer.Typer(help="Task management commands")


# =============================================================================
# Commands
# =============================================================================


@app.command("add")
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Task title (1-200 characters)"),
    description: str | None = typer.Option(None, "--description", "-d", help="Longer description"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="high, medium or low"),
    due: str | None = typer.Option(None, "--due", help="Due date as YYYY-MM-DD"),
) -> None:
    """Add a new open task.

    Example:
        tasktrack add "Write release notes" -p high --due 2026-11-01
    """
    service = get_service(ctx)
    task = unwrap(service.create(TaskDraft(title=title, description=description, priority=priority, due_date=due)))
    print_success(f"Created task {task.short_id}: {task.title}")


@app.command("list")
def list_tasks(
    ctx: typer.Context,
    status: str | None = typer.Option(None, "--status", "-s", help="Only tasks with this status"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="Only tasks with this priority"),
) -> None:
    """List tasks in creation order.

    Archived tasks are hidden unless --status archived is given.
    """
    task_filter = TaskFilter(
        status=unwrap(validate_status(status)) if status else None,
        priority=unwrap(validate_priority(priority)),
    )
    tasks = unwrap(get_service(ctx).list(task_filter))

    if not tasks:
        typer.echo("No tasks.")
        return
    print_task_table(tasks)


@app.command("show")
def show(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
) -> None:
    """Show all fields of a task."""
    print_task(unwrap(get_service(ctx).get(task_id)))


@app.command("update")
def update(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(None, "--description", "-d", help="New description"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="high, medium or low"),
    due: str | None = typer.Option(None, "--due", help="Due date as YYYY-MM-DD"),
    status: str | None = typer.Option(None, "--status", "-s", help="Next status (one legal step)"),
    clear_description: bool = typer.Option(False, "--clear-description", help="Remove the description"),
    clear_priority: bool = typer.Option(False, "--clear-priority", help="Remove the priority"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
) -> None:
    """Edit fields of a task.

    Only the options given are changed. A status change must follow the
    lifecycle: open -> in_progress -> completed -> archived, or
    in_progress -> open.
    """
    fields: dict[str, str | None] = {}
    if title is not None:
        fields["title"] = title
    if description is not None or clear_description:
        fields["description"] = None if clear_description else description
    if priority is not None or clear_priority:
        fields["priority"] = None if clear_priority else priority
    if due is not None or clear_due:
        fields["due_date"] = None if clear_due else due
    if status is not None:
        fields["status"] = status

    task = unwrap(get_service(ctx).update(task_id, TaskChanges(**fields)))
    print_success(f"Updated task {task.short_id}")


@app.command("delete")
def delete(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a task permanently."""
    service = get_service(ctx)
    task = unwrap(service.get(task_id))

    if not yes:
        typer.confirm(f"Delete task {task.short_id} '{task.title}'?", abort=True)

    removed = unwrap(service.delete(task.id))
    print_success(f"Deleted task {removed.short_id}")


@app.command("start")
def start(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Proceed even with uncommitted changes"),
) -> None:
    """Start a task and switch to its feature branch.

    Creates feature/task-<id>-<slug> when run inside a git repository.
    Asks before branching off a working tree with uncommitted changes.
    """
    service = get_service(ctx)
    result = service.start(task_id, confirm_uncommitted=yes)

    if isinstance(result, Err) and isinstance(result.error, ConfirmationRequiredError):
        print_warning(result.error.message)
        typer.confirm("Create the branch anyway?", abort=True)
        result = service.start(task_id, confirm_uncommitted=True)

    outcome = unwrap(result)
    if outcome.notice:
        print_warning(outcome.notice)
    if outcome.already_started:
        print_info(f"Task {outcome.task.short_id} is already in progress")
        return
    if outcome.branch_created:
        print_info(f"Switched to branch {outcome.task.branch}")
    print_success(f"Started task {outcome.task.short_id}: {outcome.task.title}")


@app.command("done")
def done(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
) -> None:
    """Mark an in-progress task completed."""
    task = unwrap(get_service(ctx).complete(task_id))
    print_success(f"Completed task {task.short_id}: {task.title}")


@app.command("stop")
def stop(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
) -> None:
    """Put an in-progress task back to open. The branch is kept."""
    task = unwrap(get_service(ctx).interrupt(task_id))
    print_success(f"Stopped task {task.short_id}; it is open again")


@app.command("archive")
def archive(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id or unique prefix"),
) -> None:
    """Archive a completed task. Archived tasks are hidden from listings."""
    task = unwrap(get_service(ctx).archive(task_id))
    print_success(f"Archived task {task.short_id}")


@app.command("current")
def current(ctx: typer.Context) -> None:
    """Show the task linked to the checked-out git branch."""
    print_task(unwrap(get_service(ctx).current_task()))
