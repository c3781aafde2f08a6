"""Task domain models.

Pure domain models for the task collection. Uses Pydantic for
serialization; attribute names are snake_case in Python and camelCase
in the persisted JSON.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.0"


class TaskStatus(str, Enum):
    """Lifecycle status of a task."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class Priority(str, Enum):
    """Optional task priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(_CamelModel):
    """One trackable unit of work.

    Tasks are created and mutated only by the task service. The id is
    a random UUID rendered as text and never changes.
    """

    id: str
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.OPEN
    priority: Priority | None = None
    due_date: date | None = None
    branch: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def short_id(self) -> str:
        """First eight characters of the id, as shown by the CLI."""
        return self.id[:8]


class TaskCollection(_CamelModel):
    """The persisted aggregate: a schema version tag plus tasks in creation order."""

    version: str = SCHEMA_VERSION
    tasks: list[Task] = Field(default_factory=list)

    def find(self, task_id: str) -> Task | None:
        """Return the task with exactly this id, if any."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def ids(self) -> set[str]:
        return {task.id for task in self.tasks}


class TaskDraft(BaseModel):
    """Raw input for creating a task.

    Values are unvalidated strings as supplied by the caller; the task
    service checks them before anything is persisted.
    """

    title: str
    description: str | None = None
    priority: str | None = None
    due_date: str | None = None


class TaskChanges(BaseModel):
    """Raw input for a partial update.

    Only fields explicitly set by the caller are applied (see
    ``model_fields_set``). Setting ``description``, ``priority`` or
    ``due_date`` to None clears them.
    """

    title: str | None = None
    description: str | None = None
    priority: str | None = None
    due_date: str | None = None
    status: str | None = None


class TaskFilter(BaseModel):
    """Equality filters for listing tasks."""

    status: TaskStatus | None = None
    priority: Priority | None = None

    def matches(self, task: Task) -> bool:
        if self.status is None and task.status == TaskStatus.ARCHIVED:
            return False
        if self.status is not None and task.status != self.status:
            return False
        if self.priority is not None and task.priority != self.priority:
            return False
        return True
