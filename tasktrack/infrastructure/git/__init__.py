"""Git infrastructure for tasktrack.

Provides a wrapper around git operations with Result-based error handling.
"""

from tasktrack.infrastructure.git.operations import GitOperations

__all__ = [
    "GitOperations",
]
