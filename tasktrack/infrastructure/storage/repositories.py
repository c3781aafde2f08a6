"""Repository implementation for the task collection.

Persists the collection as a JSON file with exactly one backup
generation. Every save copies the current file to the backup before
replacing it, and a load that finds the file unparsable falls back to
the backup and restores the file from it.
"""

import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from tasktrack.domain.shared import CorruptionError, Err, Ok, Result, StorageReadError, TaskError
from tasktrack.domain.task.models import TaskCollection
from tasktrack.domain.task.validation import validate_title
from tasktrack.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def default_backup_path(path: Path) -> Path:
    """Backup lives beside the task file: ``tasks.json`` -> ``tasks.json.bak``."""
    return path.with_name(path.name + BACKUP_SUFFIX)


class TaskRepository:
    """Repository for task collection persistence.

    Wraps the task file and its backup with Result-based error handling.
    Paths are passed in explicitly; the repository never looks at the
    working directory or environment itself.

    Only one rollback point exists: every successful save overwrites the
    previous backup.
    """

    def __init__(
        self,
        path: Path,
        backup_path: Path | None = None,
        storage: JsonStorage | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            path: Primary task file.
            backup_path: Backup file. Defaults to the primary path plus ``.bak``.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._path = Path(path)
        self._backup_path = Path(backup_path) if backup_path else default_backup_path(self._path)
        self._storage = storage or JsonStorage()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return self._backup_path

    def exists(self) -> bool:
        """Check if the primary task file exists.

        Returns:
            True if the primary file exists. The backup is not consulted.
        """
        return self._path.exists()

    def load(self) -> Result[TaskCollection, TaskError]:
        """Load the task collection.

        A missing file is initialized with an empty collection. A file
        that fails to parse is replaced by the backup's bytes when the
        backup parses.

        Returns:
            Ok(TaskCollection) if successful. Err(StorageReadError) if a file
            cannot be read, Err(CorruptionError) if neither the file nor its
            backup parses, Err(StorageWriteError) if initialization or
            recovery cannot write the file.
        """
        present = _path_exists(self._path)
        if isinstance(present, Err):
            return present
        if not present.value:
            return self._initialize()

        raw = self._storage.read_bytes(self._path)
        if isinstance(raw, Err):
            return raw

        primary = self._decode(raw.value)
        if isinstance(primary, Ok):
            return primary

        logger.warning(f"Task file {self._path} is unreadable ({primary.error}); trying backup {self._backup_path}")
        return self._recover(primary.error)

    def save(self, collection: TaskCollection) -> Result[None, TaskError]:
        """Save the task collection.

        Copies the current file to the backup (replacing the previous
        backup), then atomically replaces the file with the new contents.

        Args:
            collection: TaskCollection instance to persist.

        Returns:
            Ok(None) if successful, Err(TaskError) with the failure otherwise.
            On failure the primary file is unchanged.
        """
        present = _path_exists(self._path)
        if isinstance(present, Err):
            return present
        if present.value:
            backed_up = self._storage.copy_file(self._path, self._backup_path)
            if isinstance(backed_up, Err):
                return backed_up

        content = self._storage.dump_json(collection.model_dump(mode="json", by_alias=True))
        return self._storage.write_atomic(self._path, content)

    def _initialize(self) -> Result[TaskCollection, TaskError]:
        collection = TaskCollection()
        saved = self.save(collection)
        if isinstance(saved, Err):
            return saved
        logger.info(f"Initialized task file {self._path}")
        return Ok(collection)

    def _recover(self, primary_problem: str) -> Result[TaskCollection, TaskError]:
        present = _path_exists(self._backup_path)
        if isinstance(present, Err):
            return present
        if not present.value:
            return self._corrupted(primary_problem, "backup file does not exist")

        raw = self._storage.read_bytes(self._backup_path)
        if isinstance(raw, Err):
            return raw

        backup = self._decode(raw.value)
        if isinstance(backup, Err):
            return self._corrupted(primary_problem, backup.error)

        restored = self._storage.write_atomic(self._path, raw.value)
        if isinstance(restored, Err):
            return restored

        logger.warning(f"Restored {self._path} from backup {self._backup_path}")
        return backup

    def _corrupted(self, primary_problem: str, backup_problem: str) -> Err[CorruptionError]:
        logger.error(f"Task file and backup are both unusable: {self._path}, {self._backup_path}")
        return Err(
            CorruptionError(
                f"Task file {self._path} is corrupt ({primary_problem}) and its backup "
                f"{self._backup_path} cannot be used ({backup_problem}). "
                "Repair or remove these files manually.",
                primary_path=self._path,
                backup_path=self._backup_path,
            )
        )

    def _decode(self, raw: bytes) -> Result[TaskCollection, str]:
        parsed = self._storage.parse_json(raw)
        if isinstance(parsed, Err):
            return parsed

        data = parsed.value
        if not isinstance(data, dict) or "version" not in data or "tasks" not in data:
            return Err("missing 'version' or 'tasks'")

        try:
            collection = TaskCollection.model_validate(data)
        except PydanticValidationError as e:
            return Err(f"invalid task data: {e.error_count()} error(s)")

        if len(collection.ids()) != len(collection.tasks):
            return Err("duplicate task ids")
        for task in collection.tasks:
            title = validate_title(task.title)
            if isinstance(title, Err):
                return Err(f"invalid title on task {task.id}: {title.error}")
        return Ok(collection)


def _path_exists(path: Path) -> Result[bool, StorageReadError]:
    """``Path.exists`` that reports an unsearchable directory instead of raising."""
    try:
        return Ok(path.exists())
    except OSError as e:
        return Err(StorageReadError(f"Cannot access {path}: {e}", path=path))
