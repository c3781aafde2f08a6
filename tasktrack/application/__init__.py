"""Application service layer for tasktrack.

This package contains the task service that orchestrates domain rules
over the storage and version-control ports.

Services:
    task_service - Task lifecycle operations (create, update, start, complete, ...)
    ports - Protocols the service depends on

Example usage:
    >>> from tasktrack.application import TaskService
    >>> from tasktrack.domain.task import TaskDraft
    >>>
    >>> result = service.create(TaskDraft(title="Write release notes"))
    >>> if isinstance(result, Ok):
    ...     print(f"Created: {result.value.short_id}")
"""

from tasktrack.application.ports import TaskStorage, VersionControl
from tasktrack.application.task_service import StartOutcome, TaskService

__all__ = [
    "TaskService",
    "StartOutcome",
    "TaskStorage",
    "VersionControl",
]
