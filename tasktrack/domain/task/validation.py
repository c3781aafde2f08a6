"""Field validation for task input.

Each validator takes the raw value from the caller and returns the
normalized value or a ValidationError naming the field. The same rules
apply on create and on update.
"""

import re
from datetime import date

from tasktrack.domain.shared import Err, Ok, Result, ValidationError
from tasktrack.domain.task.models import Priority, TaskStatus

MAX_TITLE_LENGTH = 200

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_title(raw: str) -> Result[str, ValidationError]:
    """Trim a title and check its length in code points."""
    title = raw.strip()
    if not title:
        return Err(ValidationError("Title must not be empty", field="title"))
    if len(title) > MAX_TITLE_LENGTH:
        return Err(
            ValidationError(
                f"Title must be at most {MAX_TITLE_LENGTH} characters (got {len(title)})",
                field="title",
            )
        )
    return Ok(title)


def validate_priority(raw: str | None) -> Result[Priority | None, ValidationError]:
    if raw is None:
        return Ok(None)
    try:
        return Ok(Priority(raw.strip().lower()))
    except ValueError:
        choices = ", ".join(p.value for p in Priority)
        return Err(ValidationError(f"Invalid priority '{raw}' (expected one of: {choices})", field="priority"))


def validate_due_date(raw: str | None) -> Result[date | None, ValidationError]:
    """Parse a due date given as ``YYYY-MM-DD``.

    The lexical form is checked first so that other ISO-8601 spellings
    accepted by ``date.fromisoformat`` (week dates, compact forms) are
    rejected. The date must also exist on the calendar.
    """
    if raw is None:
        return Ok(None)
    value = raw.strip()
    if not _ISO_DATE.match(value):
        return Err(ValidationError(f"Invalid due date '{raw}' (expected YYYY-MM-DD)", field="due_date"))
    try:
        return Ok(date.fromisoformat(value))
    except ValueError:
        return Err(ValidationError(f"Invalid due date '{raw}' (no such calendar day)", field="due_date"))


def validate_status(raw: str) -> Result[TaskStatus, ValidationError]:
    """Parse a status name. Accepts ``in-progress`` as a spelling of ``in_progress``."""
    try:
        return Ok(TaskStatus(raw.strip().lower().replace("-", "_")))
    except ValueError:
        choices = ", ".join(s.value for s in TaskStatus)
        return Err(ValidationError(f"Invalid status '{raw}' (expected one of: {choices})", field="status"))
