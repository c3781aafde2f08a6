"""Shared domain utilities for tasktrack.

This package provides common building blocks used across domain modules:

- Result monad for explicit error handling
- Error taxonomy carried inside ``Err`` values

Example usage:
    >>> from tasktrack.domain.shared import Ok, Err, Result, NotFoundError
    >>>
    >>> def find_task(task_id: str) -> Result[dict, NotFoundError]:
    ...     if task_id == "missing":
    ...         return Err(NotFoundError.for_id(task_id))
    ...     return Ok({"id": task_id, "title": "Example"})
"""

from tasktrack.domain.shared.errors import (
    CollaboratorError,
    ConfirmationRequiredError,
    CorruptionError,
    InvalidTransitionError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
    TaskError,
    ValidationError,
)
from tasktrack.domain.shared.result import (
    Err,
    Ok,
    Result,
    flat_map,
    map_result,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "map_result",
    "flat_map",
    # Errors
    "TaskError",
    "ValidationError",
    "NotFoundError",
    "InvalidTransitionError",
    "StorageReadError",
    "StorageWriteError",
    "CorruptionError",
    "CollaboratorError",
    "ConfirmationRequiredError",
]
