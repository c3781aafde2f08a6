"""Git operations wrapper with Result-based error handling.

Implements the version-control port used by the task service by running
the ``git`` executable in a working directory.
"""

import logging
import subprocess
from pathlib import Path

from tasktrack.domain.shared.errors import CollaboratorError
from tasktrack.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class GitOperations:
    """Git operations with Result-based error handling.

    Wraps git commands with clean interfaces and explicit error handling.
    Uses subprocess to execute git commands.

    Example:
        git = GitOperations(Path("/path/to/repo"))
        if git.is_repository_present():
            result = git.create_and_switch_branch("feature/task-7a5c6ff0-docs")
    """

    def __init__(self, path: Path, timeout: int = 30) -> None:
        """Initialize git operations.

        Args:
            path: Working directory git commands run in.
            timeout: Default timeout in seconds for git commands.
        """
        self._path = Path(path)
        self._timeout = timeout

    def is_repository_present(self) -> bool:
        """Check if the working directory is inside a git work tree.

        Returns:
            True if git reports a work tree. False if not, or if git
            itself is unavailable.
        """
        result = self._git("rev-parse", "--is-inside-work-tree", operation="rev-parse")
        if isinstance(result, Err):
            logger.debug(f"No git repository at {self._path}: {result.error}")
            return False
        return result.value.strip() == "true"

    def has_uncommitted_changes(self) -> Result[bool, CollaboratorError]:
        """Check for staged, unstaged or untracked changes.

        Returns:
            Ok(bool) if successful, Err(CollaboratorError) if failed.
        """
        result = self._git("status", "--porcelain", operation="status")
        if isinstance(result, Err):
            return result
        return Ok(bool(result.value.strip()))

    def create_and_switch_branch(self, name: str) -> Result[None, CollaboratorError]:
        """Create a branch and check it out.

        A branch that already exists (a task that was started, interrupted
        and started again) is checked out instead of recreated.

        Args:
            name: Name of the branch.

        Returns:
            Ok(None) if successful, Err(CollaboratorError) with error message if failed.
        """
        if self._branch_exists(name):
            result = self._git("checkout", name, operation="checkout")
        else:
            result = self._git("checkout", "-b", name, operation="checkout")

        if isinstance(result, Err):
            return result
        logger.debug(f"Switched to branch {name}")
        return Ok(None)

    def current_branch_name(self) -> Result[str, CollaboratorError]:
        """Get the current branch name.

        Returns:
            Ok(str) with branch name if successful (empty on a detached
            HEAD), Err(CollaboratorError) with error message if failed.
        """
        result = self._git("branch", "--show-current", operation="branch")
        if isinstance(result, Err):
            return result
        return Ok(result.value.strip())

    def _branch_exists(self, name: str) -> bool:
        result = self._git("rev-parse", "--verify", "--quiet", f"refs/heads/{name}", operation="rev-parse")
        return isinstance(result, Ok)

    def _git(self, *args: str, operation: str) -> Result[str, CollaboratorError]:
        """Run a git command and return its stdout."""
        cmd = ["git", *args]
        logger.debug(f"Running {' '.join(cmd)} in {self._path}")
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self._path),
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"git {operation} timed out")
            return Err(CollaboratorError(f"Git {operation} timed out", operation=operation))
        except OSError as e:
            logger.warning(f"git {operation} could not run: {e}")
            return Err(CollaboratorError(f"Git command failed: {e}", operation=operation))

        if result.returncode != 0:
            message = result.stderr.strip() or f"git {operation} exited with {result.returncode}"
            return Err(CollaboratorError(message, operation=operation))
        return Ok(result.stdout)
