"""Ports (interfaces) used by the task service.

The service depends on Protocols instead of concrete implementations,
so the JSON repository and the git wrapper can be swapped for in-memory
fakes in tests.
"""

from typing import Protocol

from tasktrack.domain.shared import CollaboratorError, Result, TaskError
from tasktrack.domain.task import TaskCollection


class TaskStorage(Protocol):
    """Durable storage for the task collection."""

    def load(self) -> Result[TaskCollection, TaskError]: ...

    def save(self, collection: TaskCollection) -> Result[None, TaskError]: ...

    def exists(self) -> bool: ...


class VersionControl(Protocol):
    """The version-control operations ``start`` relies on."""

    def is_repository_present(self) -> bool: ...

    def has_uncommitted_changes(self) -> Result[bool, CollaboratorError]: ...

    def create_and_switch_branch(self, name: str) -> Result[None, CollaboratorError]: ...

    def current_branch_name(self) -> Result[str, CollaboratorError]: ...
