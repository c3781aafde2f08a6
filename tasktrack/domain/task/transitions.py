"""Task status state machine.

The legal status changes live in a single table so the lifecycle stays
auditable in one place:

    open         --start-------> in_progress
    in_progress  --complete----> completed
    in_progress  --interrupt---> open
    completed    --archive-----> archived

``archived`` is terminal. A status to itself is not a transition.
"""

from tasktrack.domain.shared import Err, InvalidTransitionError, Ok, Result
from tasktrack.domain.task.models import TaskStatus

TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.OPEN: frozenset({TaskStatus.IN_PROGRESS}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.COMPLETED, TaskStatus.OPEN}),
    TaskStatus.COMPLETED: frozenset({TaskStatus.ARCHIVED}),
    TaskStatus.ARCHIVED: frozenset(),
}


def allowed_targets(current: TaskStatus) -> frozenset[TaskStatus]:
    """Statuses reachable from ``current`` in one step."""
    return TRANSITIONS[current]


def can_transition(current: TaskStatus, requested: TaskStatus) -> bool:
    return requested in TRANSITIONS[current]


def is_terminal(status: TaskStatus) -> bool:
    return not TRANSITIONS[status]


def check_transition(
    current: TaskStatus,
    requested: TaskStatus,
    task_id: str = "",
) -> Result[TaskStatus, InvalidTransitionError]:
    """Validate a single status change.

    Args:
        current: Status the task is in now.
        requested: Status the caller wants.
        task_id: Optional task id, included in the error message.

    Returns:
        Ok(requested) if the edge exists in the table, otherwise
        Err(InvalidTransitionError) naming both statuses.
    """
    if can_transition(current, requested):
        return Ok(requested)
    return Err(InvalidTransitionError.between(current.value, requested.value, task_id))
