"""Tests for the git operations wrapper."""

import shutil
import subprocess
from pathlib import Path

import pytest

from tasktrack.domain.shared import CollaboratorError, Err, Ok
from tasktrack.infrastructure.git import GitOperations

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


class FakeRun:
    """Stand-in for subprocess.run returning scripted results per git subcommand."""

    def __init__(self, **responses: tuple[int, str, str]) -> None:
        self.responses = responses
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        returncode, stdout, stderr = self.responses.get(cmd[1], (0, "", ""))
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def git(tmp_path: Path) -> GitOperations:
    return GitOperations(tmp_path)


class TestWithFakeSubprocess:
    def test_repository_present(self, git, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(**{"rev-parse": (0, "true\n", "")}))
        assert git.is_repository_present()

    def test_not_a_repository(self, git, monkeypatch):
        fake = FakeRun(**{"rev-parse": (128, "", "fatal: not a git repository")})
        monkeypatch.setattr(subprocess, "run", fake)
        assert not git.is_repository_present()

    def test_git_missing_means_no_repository(self, git, monkeypatch):
        def missing(cmd, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(subprocess, "run", missing)
        assert not git.is_repository_present()

    def test_uncommitted_changes(self, git, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(status=(0, " M README.md\n", "")))
        assert git.has_uncommitted_changes() == Ok(True)

    def test_clean_tree(self, git, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(status=(0, "", "")))
        assert git.has_uncommitted_changes() == Ok(False)

    def test_creates_new_branch(self, git, monkeypatch):
        fake = FakeRun(**{"rev-parse": (1, "", "")})
        monkeypatch.setattr(subprocess, "run", fake)

        assert git.create_and_switch_branch("feature/task-1") == Ok(None)
        assert fake.calls[-1] == ["git", "checkout", "-b", "feature/task-1"]

    def test_switches_to_existing_branch(self, git, monkeypatch):
        fake = FakeRun(**{"rev-parse": (0, "abc123\n", "")})
        monkeypatch.setattr(subprocess, "run", fake)

        assert git.create_and_switch_branch("feature/task-1") == Ok(None)
        assert fake.calls[-1] == ["git", "checkout", "feature/task-1"]

    def test_checkout_failure(self, git, monkeypatch):
        fake = FakeRun(**{"rev-parse": (1, "", ""), "checkout": (128, "", "fatal: invalid reference")})
        monkeypatch.setattr(subprocess, "run", fake)

        result = git.create_and_switch_branch("bad..name")

        assert isinstance(result, Err)
        assert isinstance(result.error, CollaboratorError)
        assert result.error.message == "fatal: invalid reference"
        assert result.error.operation == "checkout"

    def test_timeout(self, git, monkeypatch):
        def slow(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

        monkeypatch.setattr(subprocess, "run", slow)
        result = git.current_branch_name()
        assert isinstance(result, Err)
        assert "timed out" in result.error.message

    def test_current_branch(self, git, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(branch=(0, "main\n", "")))
        assert git.current_branch_name() == Ok("main")


@requires_git
class TestWithRealGit:
    @pytest.fixture
    def repo_dir(self, tmp_path: Path) -> Path:
        def run(*args: str) -> None:
            subprocess.run(["git", *args], cwd=tmp_path, check=True, capture_output=True)

        run("init", "-q")
        run("config", "user.email", "test@example.com")
        run("config", "user.name", "Test")
        (tmp_path / "README.md").write_text("hello\n")
        run("add", "README.md")
        run("commit", "-q", "-m", "initial")
        return tmp_path

    def test_plain_directory_is_not_a_repository(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        # Guard against tmp_path living inside some enclosing work tree
        outside = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"], cwd=plain, capture_output=True, text=True
        )
        if outside.returncode == 0:
            pytest.skip("temporary directory is inside a git work tree")
        assert not GitOperations(plain).is_repository_present()

    def test_branch_lifecycle(self, repo_dir):
        git = GitOperations(repo_dir)

        assert git.is_repository_present()
        assert git.has_uncommitted_changes() == Ok(False)

        assert git.create_and_switch_branch("feature/task-7a5c6ff0-docs") == Ok(None)
        assert git.current_branch_name() == Ok("feature/task-7a5c6ff0-docs")

        (repo_dir / "notes.txt").write_text("wip\n")
        assert git.has_uncommitted_changes() == Ok(True)
