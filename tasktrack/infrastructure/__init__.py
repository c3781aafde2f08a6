"""Infrastructure layer for tasktrack.

This module provides the I/O adapters behind the application ports,
wrapping file storage and git with Result monads for explicit error
handling.

Exports:
    Storage:
        - JsonStorage: Low-level atomic file I/O
        - TaskRepository: Task collection persistence with one backup generation

    Git:
        - GitOperations: Git repository operations
"""

from tasktrack.infrastructure.git import GitOperations
from tasktrack.infrastructure.storage import JsonStorage, TaskRepository

__all__ = [
    # Storage
    "JsonStorage",
    "TaskRepository",
    # Git
    "GitOperations",
]
