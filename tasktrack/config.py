"""Configuration for tasktrack.

Resolves where the task file lives. The result is passed explicitly into
the repository, which never reads the environment itself.
"""

import os
from pathlib import Path

from pydantic import BaseModel

from tasktrack.infrastructure.storage.repositories import default_backup_path

ENV_TASKS_FILE = "TASKTRACK_FILE"
DEFAULT_DIR_NAME = ".tasktrack"
DEFAULT_FILE_NAME = "tasks.json"


class TrackerConfig(BaseModel):
    """Resolved locations of the task file and its backup."""

    tasks_file: Path
    backup_file: Path

    @classmethod
    def for_file(cls, tasks_file: Path) -> "TrackerConfig":
        return cls(tasks_file=tasks_file, backup_file=default_backup_path(tasks_file))


def default_tasks_file(cwd: Path | None = None) -> Path:
    """Default task file: ``.tasktrack/tasks.json`` under the working directory."""
    return (cwd or Path.cwd()) / DEFAULT_DIR_NAME / DEFAULT_FILE_NAME


def resolve_config(explicit_file: str | Path | None = None, cwd: Path | None = None) -> TrackerConfig:
    """Resolve the task file location.

    Resolution order:
    1. Explicit path (from the -f/--file CLI option)
    2. TASKTRACK_FILE environment variable
    3. .tasktrack/tasks.json under the current working directory

    Args:
        explicit_file: Path given on the command line, if any.
        cwd: Directory to resolve the default against. Defaults to Path.cwd().

    Returns:
        TrackerConfig with absolute paths.
    """
    if explicit_file:
        tasks_file = Path(explicit_file).expanduser()
    elif os.environ.get(ENV_TASKS_FILE):
        tasks_file = Path(os.environ[ENV_TASKS_FILE]).expanduser()
    else:
        tasks_file = default_tasks_file(cwd)

    if not tasks_file.is_absolute():
        tasks_file = (cwd or Path.cwd()) / tasks_file
    return TrackerConfig.for_file(tasks_file)
