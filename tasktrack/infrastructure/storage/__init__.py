"""Storage infrastructure for tasktrack.

Provides the persistence layer for the task collection, using Result
monads for explicit error handling.
"""

from tasktrack.infrastructure.storage.json_storage import JsonStorage
from tasktrack.infrastructure.storage.repositories import (
    TaskRepository,
    default_backup_path,
)

__all__ = [
    "JsonStorage",
    "TaskRepository",
    "default_backup_path",
]
