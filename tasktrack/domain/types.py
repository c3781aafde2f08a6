"""Domain value objects for tasktrack.

Immutable value objects representing core domain concepts.
These provide type safety and domain-specific operations.
"""

import re
from dataclasses import dataclass

BRANCH_PREFIX = "feature/task-"
ID_PREFIX_LENGTH = 8
MAX_SLUG_LENGTH = 30

_NON_ASCII = re.compile(r"[^\x00-\x7f]")
_NON_ALNUM_RUN = re.compile(r"[^A-Za-z0-9]+")
_DASH_RUN = re.compile(r"-{2,}")


def slugify(title: str) -> str:
    """Convert a task title to the slug used in branch names.

    Characters outside Basic Latin are dropped, not transliterated, so a
    title written entirely in another script yields an empty slug.

    Example:
        slugify("User Auth Feature!!")  # -> "user-auth-feature"
        slugify("ユーザー認証機能の実装")  # -> ""
    """
    slug = _NON_ASCII.sub("", title)
    slug = _NON_ALNUM_RUN.sub("-", slug)
    slug = _DASH_RUN.sub("-", slug)
    slug = slug.strip("-").lower()
    return slug[:MAX_SLUG_LENGTH]


@dataclass(frozen=True)
class BranchName:
    """Git branch name value object.

    Represents the feature branch a task is worked on. The naming scheme
    is fixed so that branches created by earlier versions keep matching.

    Attributes:
        value: The normalized branch name string
    """

    value: str

    @classmethod
    def from_task(cls, task_id: str, title: str) -> "BranchName":
        """Create a branch name from a task id and title.

        Builds ``feature/task-<id8>-<slug>`` where ``id8`` is the first
        eight characters of the id and ``slug`` comes from ``slugify``.
        When the slug is empty the trailing separator is omitted.

        Args:
            task_id: Textual task id
            title: Task title

        Returns:
            New BranchName with normalized value

        Example:
            BranchName.from_task("7a5c6ff0-1c2d-...", "User Auth Feature!!")
            # -> BranchName(value="feature/task-7a5c6ff0-user-auth-feature")
        """
        id8 = task_id[:ID_PREFIX_LENGTH]
        slug = slugify(title)
        if not slug:
            return cls(value=f"{BRANCH_PREFIX}{id8}")
        return cls(value=f"{BRANCH_PREFIX}{id8}-{slug}")

    def __str__(self) -> str:
        """Return the branch name string."""
        return self.value
