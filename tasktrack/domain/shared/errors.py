"""Error taxonomy for tasktrack.

Errors are immutable values carried inside ``Err`` results. Each one has a
``kind`` tag for programmatic inspection and a ``message`` for display. The
CLI maps any of them to exit code 1.

    ValidationError            bad input shape or range
    NotFoundError              referenced task id is absent
    InvalidTransitionError     status change not in the transition table
    StorageReadError           task file could not be read
    StorageWriteError          task file could not be written
    CorruptionError            primary and backup both unparsable
    CollaboratorError          git failed
    ConfirmationRequiredError  start needs an explicit go-ahead
"""

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar


@dataclass(frozen=True)
class TaskError:
    """Base class for all error values returned by the core."""

    kind: ClassVar[str] = "error"

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationError(TaskError):
    kind: ClassVar[str] = "validation"

    field: str = ""


@dataclass(frozen=True)
class NotFoundError(TaskError):
    kind: ClassVar[str] = "not_found"

    task_id: str = ""

    @classmethod
    def for_id(cls, task_id: str) -> "NotFoundError":
        return cls(message=f"Task not found: {task_id}", task_id=task_id)


@dataclass(frozen=True)
class InvalidTransitionError(TaskError):
    """A status change that the state machine does not allow.

    Attributes:
        current: Status the task is in.
        requested: Status the caller asked for.
        task_id: Task the change was attempted on, when known.
    """

    kind: ClassVar[str] = "invalid_transition"

    current: str = ""
    requested: str = ""
    task_id: str = ""

    @classmethod
    def between(cls, current: str, requested: str, task_id: str = "") -> "InvalidTransitionError":
        subject = f"Task {task_id[:8]}" if task_id else "Task"
        return cls(
            message=f"{subject} cannot move from '{current}' to '{requested}'",
            current=current,
            requested=requested,
            task_id=task_id,
        )


@dataclass(frozen=True)
class StorageReadError(TaskError):
    kind: ClassVar[str] = "storage_read"

    path: Path | None = None


@dataclass(frozen=True)
class StorageWriteError(TaskError):
    kind: ClassVar[str] = "storage_write"

    path: Path | None = None


@dataclass(frozen=True)
class CorruptionError(TaskError):
    """Both the task file and its backup failed to parse.

    Not recovered automatically: the files have to be repaired by hand.
    """

    kind: ClassVar[str] = "corruption"

    primary_path: Path | None = None
    backup_path: Path | None = None


@dataclass(frozen=True)
class CollaboratorError(TaskError):
    kind: ClassVar[str] = "collaborator"

    operation: str = ""


@dataclass(frozen=True)
class ConfirmationRequiredError(TaskError):
    """``start`` found uncommitted changes and needs the caller to confirm."""

    kind: ClassVar[str] = "confirmation_required"

    task_id: str = ""
