"""JSON file storage with Result-based error handling.

Provides a thin wrapper around file I/O for the task file, returning
Result types instead of raising exceptions. Writes go through a sibling
temporary file that is fsynced and renamed over the target, so the target
is never observed half-written.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from tasktrack.domain.shared.errors import StorageReadError, StorageWriteError
from tasktrack.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

# Owner read/write only
PRIVATE_FILE_MODE = 0o600

IS_POSIX = os.name == "posix"


class JsonStorage:
    """Low-level JSON file I/O with Result-based error handling.

    This class wraps basic file operations (read, parse, atomic write,
    copy) and returns Result types for explicit error handling. It does
    not contain any domain logic - just file I/O.

    Example:
        storage = JsonStorage()
        result = storage.read_bytes(Path("tasks.json"))
        if isinstance(result, Ok):
            data = storage.parse_json(result.value)
    """

    def __init__(self, file_mode: int | None = PRIVATE_FILE_MODE) -> None:
        """Initialize the storage.

        Args:
            file_mode: Permission bits applied to written files on POSIX
                platforms. None leaves the process umask in charge.
        """
        self._file_mode = file_mode

    def read_bytes(self, path: Path) -> Result[bytes, StorageReadError]:
        """Read the raw bytes of a file.

        Args:
            path: Path to the file to read.

        Returns:
            Ok(bytes) if successful, Err(StorageReadError) if the file is
            missing, unreadable or the read fails.
        """
        try:
            return Ok(path.read_bytes())
        except FileNotFoundError:
            return Err(StorageReadError(f"File not found: {path}", path=path))
        except PermissionError:
            return Err(StorageReadError(f"Permission denied reading {path}", path=path))
        except OSError as e:
            return Err(StorageReadError(f"Error reading {path}: {e}", path=path))

    def parse_json(self, raw: bytes) -> Result[Any, str]:
        """Decode UTF-8 bytes as JSON.

        Returns:
            Ok(data) if successful, Err(str) describing the parse failure.
        """
        try:
            return Ok(json.loads(raw.decode("utf-8")))
        except UnicodeDecodeError as e:
            return Err(f"Not valid UTF-8: {e}")
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON: {e}")

    def dump_json(self, data: Any, indent: int = 2) -> bytes:
        """Serialize data the way task files are written."""
        return (json.dumps(data, indent=indent, ensure_ascii=False) + "\n").encode("utf-8")

    def write_atomic(self, path: Path, content: bytes) -> Result[None, StorageWriteError]:
        """Replace a file's contents atomically.

        Writes to ``<name>.tmp`` beside the target, fsyncs it, applies the
        permission bits, then renames it over the target. On failure the
        temporary file is removed and the target is left as it was.

        Args:
            path: Path to the file to write.
            content: Bytes to write.

        Returns:
            Ok(None) if successful, Err(StorageWriteError) if failed.
        """
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            # Ensure parent directory exists
            path.parent.mkdir(parents=True, exist_ok=True)

            with open(tmp_path, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            if IS_POSIX and self._file_mode is not None:
                os.chmod(tmp_path, self._file_mode)

            os.replace(tmp_path, path)

        except PermissionError:
            _discard(tmp_path)
            return Err(StorageWriteError(f"Permission denied writing {path}", path=path))
        except OSError as e:
            _discard(tmp_path)
            return Err(StorageWriteError(f"Error writing {path}: {e}", path=path))

        # The target already holds the new content
        try:
            _fsync_directory(path.parent)
        except OSError as e:
            logger.warning(f"Could not sync directory {path.parent}: {e}")
        return Ok(None)

    def copy_file(self, source: Path, target: Path) -> Result[None, StorageReadError | StorageWriteError]:
        """Copy a file byte-for-byte, replacing the target atomically."""
        content = self.read_bytes(source)
        if isinstance(content, Err):
            return content
        return self.write_atomic(target, content.value)


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")


def _fsync_directory(directory: Path) -> None:
    """Persist a rename in ``directory``. No-op where directories can't be opened."""
    if not IS_POSIX:
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
