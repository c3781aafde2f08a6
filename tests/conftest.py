"""Shared test fixtures for tasktrack tests.

Provides:
- In-memory storage and version-control fakes
- A task service wired to the fakes with a deterministic clock
- Temporary task file paths for repository tests
"""

from pathlib import Path

import pytest

from tasktrack.application import TaskService
from tasktrack.infrastructure.storage import TaskRepository

from tests.fakes import FakeVersionControl, InMemoryTaskStorage, SequentialIds, TickingClock


@pytest.fixture
def storage() -> InMemoryTaskStorage:
    return InMemoryTaskStorage()


@pytest.fixture
def vcs() -> FakeVersionControl:
    return FakeVersionControl()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def service(storage: InMemoryTaskStorage, vcs: FakeVersionControl, clock: TickingClock) -> TaskService:
    return TaskService(storage, vcs, clock=clock, id_factory=SequentialIds())


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def repo(tasks_file: Path) -> TaskRepository:
    return TaskRepository(tasks_file)
