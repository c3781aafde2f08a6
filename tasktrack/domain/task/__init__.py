"""Task domain - tasks, the collection and the status state machine.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskStatus - Lifecycle status enumeration
    Priority - Optional priority enumeration
    Task - One unit of work
    TaskCollection - Persisted aggregate with schema version
    TaskDraft / TaskChanges - Raw create and update input
    TaskFilter - Listing filters

State Machine:
    TRANSITIONS - Legal status changes
    check_transition - Validate one status change

Validation:
    validate_title, validate_priority, validate_due_date, validate_status
"""

from .models import (
    SCHEMA_VERSION,
    Priority,
    Task,
    TaskChanges,
    TaskCollection,
    TaskDraft,
    TaskFilter,
    TaskStatus,
)
from .transitions import (
    TRANSITIONS,
    allowed_targets,
    can_transition,
    check_transition,
    is_terminal,
)
from .validation import (
    MAX_TITLE_LENGTH,
    validate_due_date,
    validate_priority,
    validate_status,
    validate_title,
)

__all__ = [
    # Models
    "SCHEMA_VERSION",
    "TaskStatus",
    "Priority",
    "Task",
    "TaskCollection",
    "TaskDraft",
    "TaskChanges",
    "TaskFilter",
    # State machine
    "TRANSITIONS",
    "allowed_targets",
    "can_transition",
    "check_transition",
    "is_terminal",
    # Validation
    "MAX_TITLE_LENGTH",
    "validate_title",
    "validate_priority",
    "validate_due_date",
    "validate_status",
]
