"""Task application service.

Orchestrates task lifecycle operations: every mutating call loads the
collection, locates and validates, mutates a copy, and saves, as one unit.
Failures come back as ``Err`` values; nothing here swallows an error from
the storage or version-control ports.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel

from tasktrack.application.ports import TaskStorage, VersionControl
from tasktrack.domain.shared import (
    CollaboratorError,
    ConfirmationRequiredError,
    Err,
    InvalidTransitionError,
    NotFoundError,
    Ok,
    Result,
    TaskError,
    ValidationError,
    flat_map,
    map_result,
)
from tasktrack.domain.task import (
    Task,
    TaskChanges,
    TaskCollection,
    TaskDraft,
    TaskFilter,
    TaskStatus,
    check_transition,
    validate_due_date,
    validate_priority,
    validate_status,
    validate_title,
)
from tasktrack.domain.types import BranchName

logger = logging.getLogger(__name__)

# Shortest id prefix accepted in place of a full id
MIN_ID_PREFIX = 4


class StartOutcome(BaseModel):
    """Result of starting a task.

    Attributes:
        task: The task after the operation.
        branch_created: Whether a branch was created and checked out.
        already_started: The task was in progress already; nothing changed.
        notice: Non-fatal message for the user (e.g. no repository found).
    """

    task: Task
    branch_created: bool = False
    already_started: bool = False
    notice: str | None = None


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid4())


class TaskService:
    """Task lifecycle manager.

    Enforces the domain rules and drives the storage and version-control
    ports. Holds no task state between calls.

    Example:
        service = TaskService(TaskRepository(path), GitOperations(Path.cwd()))
        result = service.create(TaskDraft(title="Write docs"))
        if isinstance(result, Ok):
            service.start(result.value.id)
    """

    def __init__(
        self,
        storage: TaskStorage,
        vcs: VersionControl | None = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        """Initialize the service.

        Args:
            storage: Where the task collection lives.
            vcs: Version-control collaborator. None disables branch creation.
            clock: Source of timestamps.
            id_factory: Source of new task ids.
        """
        self._storage = storage
        self._vcs = vcs
        self._clock = clock
        self._id_factory = id_factory

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, task_filter: TaskFilter | None = None) -> Result[list[Task], TaskError]:
        """List tasks in creation order.

        Archived tasks are left out unless the filter asks for them.
        """
        task_filter = task_filter or TaskFilter()
        return map_result(
            self._storage.load(),
            lambda collection: [t for t in collection.tasks if task_filter.matches(t)],
        )

    def get(self, task_id: str) -> Result[Task, TaskError]:
        """Get a task by id or unique id prefix."""
        return flat_map(self._storage.load(), lambda collection: _locate(collection, task_id))

    def current_task(self) -> Result[Task, TaskError]:
        """Find the task whose branch is checked out in the repository."""
        if self._vcs is None or not self._vcs.is_repository_present():
            return Err(NotFoundError("Not inside a git repository"))

        branch_result = self._vcs.current_branch_name()
        if isinstance(branch_result, Err):
            return branch_result
        branch = branch_result.value

        loaded = self._storage.load()
        if isinstance(loaded, Err):
            return loaded

        for task in loaded.value.tasks:
            if task.branch == branch:
                return Ok(task)
        return Err(NotFoundError(f"No task is linked to branch '{branch}'"))

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create(self, draft: TaskDraft) -> Result[Task, TaskError]:
        """Validate input and append a new open task.

        Args:
            draft: Raw title, description, priority and due date.

        Returns:
            Ok(Task) with the persisted task, or Err(TaskError) if the input
            is invalid or the collection cannot be loaded or saved.
        """
        title = validate_title(draft.title)
        if isinstance(title, Err):
            return title
        priority = validate_priority(draft.priority)
        if isinstance(priority, Err):
            return priority
        due_date = validate_due_date(draft.due_date)
        if isinstance(due_date, Err):
            return due_date

        loaded = self._storage.load()
        if isinstance(loaded, Err):
            return loaded
        collection = loaded.value

        now = self._clock()
        task = Task(
            id=self._fresh_id(collection),
            title=title.value,
            description=draft.description,
            status=TaskStatus.OPEN,
            priority=priority.value,
            due_date=due_date.value,
            created_at=now,
            updated_at=now,
        )

        saved = self._storage.save(collection.model_copy(update={"tasks": [*collection.tasks, task]}))
        if isinstance(saved, Err):
            return saved

        logger.info(f"Created task {task.short_id}: {task.title}")
        return Ok(task)

    def update(self, task_id: str, changes: TaskChanges) -> Result[Task, TaskError]:
        """Apply a partial update.

        Only fields the caller explicitly set on ``changes`` are applied,
        each checked with the same rules as ``create``. A status change must
        be a single legal step of the state machine.

        Args:
            task_id: Id or unique id prefix of the task.
            changes: Fields to change.

        Returns:
            Ok(Task) with the updated task, or Err(TaskError).
        """
        supplied = changes.model_fields_set
        if not supplied:
            return Err(ValidationError("No changes supplied"))

        loaded = self._storage.load()
        if isinstance(loaded, Err):
            return loaded
        collection = loaded.value

        located = _locate(collection, task_id)
        if isinstance(located, Err):
            return located
        task = located.value

        if task.status == TaskStatus.ARCHIVED:
            return Err(
                InvalidTransitionError(
                    f"Task {task.short_id} is archived and can no longer be modified",
                    current=task.status.value,
                    requested=changes.status or task.status.value,
                    task_id=task.id,
                )
            )

        updates = _collect_updates(task, changes)
        if isinstance(updates, Err):
            return updates

        updated = task.model_copy(update={**updates.value, "updated_at": self._clock()})
        saved = self._storage.save(_replace(collection, updated))
        if isinstance(saved, Err):
            return saved

        logger.info(f"Updated task {updated.short_id}: {', '.join(sorted(updates.value))}")
        return Ok(updated)

    def delete(self, task_id: str) -> Result[Task, TaskError]:
        """Remove a task and return it."""
        loaded = self._storage.load()
        if isinstance(loaded, Err):
            return loaded
        collection = loaded.value

        located = _locate(collection, task_id)
        if isinstance(located, Err):
            return located
        task = located.value

        remaining = [t for t in collection.tasks if t.id != task.id]
        saved = self._storage.save(collection.model_copy(update={"tasks": remaining}))
        if isinstance(saved, Err):
            return saved

        logger.info(f"Deleted task {task.short_id}")
        return Ok(task)

    def start(self, task_id: str, confirm_uncommitted: bool = False) -> Result[StartOutcome, TaskError]:
        """Start work on an open task, creating its feature branch.

        Starting a task that is already in progress changes nothing. When
        no repository is present the task is started without a branch and
        the outcome carries a notice. Uncommitted changes stop the call with
        ConfirmationRequiredError unless ``confirm_uncommitted`` is set. If
        the branch cannot be created, nothing is saved.

        Args:
            task_id: Id or unique id prefix of the task.
            confirm_uncommitted: Caller confirmed proceeding over uncommitted changes.

        Returns:
            Ok(StartOutcome) on success, or Err(TaskError).
        """
        loaded = self._storage.load()
        if isinstance(loaded, Err):
            return loaded
        collection = loaded.value

        located = _locate(collection, task_id)
        if isinstance(located, Err):
            return located
        task = located.value

        if task.status == TaskStatus.IN_PROGRESS:
            logger.debug(f"Task {task.short_id} already in progress")
            return Ok(StartOutcome(task=task, already_started=True))

        allowed = check_transition(task.status, TaskStatus.IN_PROGRESS, task.id)
        if isinstance(allowed, Err):
            return allowed

        branch: str | None = None
        notice: str | None = None

        if self._vcs is None or not self._vcs.is_repository_present():
            notice = "Not a git repository; task started without a branch"
        else:
            dirty = self._vcs.has_uncommitted_changes()
            if isinstance(dirty, Err):
                return dirty
            if dirty.value and not confirm_uncommitted:
                return Err(
                    ConfirmationRequiredError(
                        "Working tree has uncommitted changes; confirm to create the branch anyway",
                        task_id=task.id,
                    )
                )

            name = str(BranchName.from_task(task.id, task.title))
            created = self._vcs.create_and_switch_branch(name)
            if isinstance(created, Err):
                logger.warning(f"Branch creation failed for task {task.short_id}: {created.error}")
                return Err(
                    CollaboratorError(
                        f"Could not create branch '{name}' for task {task.short_id}: {created.error}",
                        operation=created.error.operation,
                    )
                )
            branch = name

        updates: dict[str, Any] = {"status": TaskStatus.IN_PROGRESS, "updated_at": self._clock()}
        if branch is not None:
            updates["branch"] = branch
        updated = task.model_copy(update=updates)

        saved = self._storage.save(_replace(collection, updated))
        if isinstance(saved, Err):
            return saved

        logger.info(f"Started task {updated.short_id}" + (f" on {branch}" if branch else ""))
        return Ok(StartOutcome(task=updated, branch_created=branch is not None, notice=notice))

    def complete(self, task_id: str) -> Result[Task, TaskError]:
        """Mark an in-progress task completed."""
        return self._transition(task_id, TaskStatus.COMPLETED)

    def interrupt(self, task_id: str) -> Result[Task, TaskError]:
        """Put an in-progress task back to open. Its branch is kept."""
        return self._transition(task_id, TaskStatus.OPEN)

    def archive(self, task_id: str) -> Result[Task, TaskError]:
        """Archive a completed task."""
        return self._transition(task_id, TaskStatus.ARCHIVED)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _transition(self, task_id: str, requested: TaskStatus) -> Result[Task, TaskError]:
        loaded = self._storage.load()
        if isinstance(loaded, Err):
            return loaded
        collection = loaded.value

        located = _locate(collection, task_id)
        if isinstance(located, Err):
            return located
        task = located.value

        allowed = check_transition(task.status, requested, task.id)
        if isinstance(allowed, Err):
            return allowed

        updated = task.model_copy(update={"status": requested, "updated_at": self._clock()})
        saved = self._storage.save(_replace(collection, updated))
        if isinstance(saved, Err):
            return saved

        logger.info(f"Task {task.short_id}: {task.status.value} -> {requested.value}")
        return Ok(updated)

    def _fresh_id(self, collection: TaskCollection) -> str:
        taken = collection.ids()
        task_id = self._id_factory()
        while task_id in taken:
            task_id = self._id_factory()
        return task_id


def _locate(collection: TaskCollection, task_id: str) -> Result[Task, TaskError]:
    """Find a task by exact id, falling back to a unique id prefix."""
    key = task_id.strip()
    task = collection.find(key)
    if task is not None:
        return Ok(task)

    if len(key) >= MIN_ID_PREFIX:
        matches = [t for t in collection.tasks if t.id.startswith(key)]
        if len(matches) == 1:
            return Ok(matches[0])
        if len(matches) > 1:
            return Err(ValidationError(f"Ambiguous task id '{key}' matches {len(matches)} tasks", field="id"))

    return Err(NotFoundError.for_id(key))


def _replace(collection: TaskCollection, updated: Task) -> TaskCollection:
    tasks = [updated if t.id == updated.id else t for t in collection.tasks]
    return collection.model_copy(update={"tasks": tasks})


def _collect_updates(task: Task, changes: TaskChanges) -> Result[dict[str, Any], TaskError]:
    """Validate the explicitly supplied fields of ``changes``."""
    supplied = changes.model_fields_set
    updates: dict[str, Any] = {}

    if "title" in supplied:
        if changes.title is None:
            return Err(ValidationError("Title cannot be cleared", field="title"))
        title = validate_title(changes.title)
        if isinstance(title, Err):
            return title
        updates["title"] = title.value

    if "description" in supplied:
        updates["description"] = changes.description

    if "priority" in supplied:
        priority = validate_priority(changes.priority)
        if isinstance(priority, Err):
            return priority
        updates["priority"] = priority.value

    if "due_date" in supplied:
        due_date = validate_due_date(changes.due_date)
        if isinstance(due_date, Err):
            return due_date
        updates["due_date"] = due_date.value

    if "status" in supplied:
        if changes.status is None:
            return Err(ValidationError("Status cannot be cleared", field="status"))
        status = validate_status(changes.status)
        if isinstance(status, Err):
            return status
        allowed = check_transition(task.status, status.value, task.id)
        if isinstance(allowed, Err):
            return allowed
        updates["status"] = allowed.value

    return Ok(updates)
