# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskninja.TASKS.service import TaskService
from taskninja.TASKS.storage import TaskStore
from taskninja.TASKS.trash import TrashStore

from .fakes import FakeClock, InMemoryTaskRepo, InMemoryTrashRepo


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def task_repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture()
def trash_repo(clock: FakeClock) -> InMemoryTrashRepo:
    return InMemoryTrashRepo(clock)


@pytest.fixture()
def service(task_repo: InMemoryTaskRepo, trash_repo: InMemoryTrashRepo) -> TaskService:
    """TaskService wired with in-memory stores and a frozen clock."""
    return TaskService(task_repo, trash_repo, undo_ttl_ms=60_000)


@pytest.fixture()
def task_store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "todos.json")


@pytest.fixture()
def trash_store(tmp_path: Path, clock: FakeClock) -> TrashStore:
    return TrashStore(tmp_path / "deleted_todos.json", clock=clock)


@pytest.fixture()
def file_service(task_store: TaskStore, trash_store: TrashStore) -> TaskService:
    """TaskService on real JSON files in tmp_path."""
    return TaskService(task_store, trash_store, undo_ttl_ms=60_000)
