from __future__ import annotations

import json

import pytest

from taskninja.TASKS.errors import CorruptStoreError
from taskninja.TASKS.model import DeletedTask
from taskninja.TASKS.trash import TrashStore

from .fakes import FakeClock, make_task


def test_missing_file_is_empty(trash_store: TrashStore) -> None:
    assert trash_store.load_all() == []


def test_push_records_deletion_time_and_expiry(trash_store: TrashStore, clock: FakeClock) -> None:
    entry = trash_store.push_deleted(make_task(1), expired_after=5_000)

    assert entry.deleted_at == clock.now_ms
    stored = json.loads(trash_store.path.read_text(encoding="utf-8"))
    assert stored[0]["deletedAt"] == clock.now_ms
    assert stored[0]["expiredAfter"] == 5_000
    assert stored[0]["title"] == "Task 1"


def test_pop_last_is_a_stack(trash_store: TrashStore) -> None:
    trash_store.push_deleted(make_task(1))
    trash_store.push_deleted(make_task(2))

    assert trash_store.pop_last().task.id == 2
    assert [e.task.id for e in trash_store.load_all()] == [1]
    assert trash_store.pop_last().task.id == 1
    assert trash_store.pop_last() is None


def test_pop_last_on_empty_does_not_create_file(trash_store: TrashStore) -> None:
    assert trash_store.pop_last() is None
    assert not trash_store.path.exists()


def test_purge_boundary(trash_store: TrashStore) -> None:
    trash_store.save_all(
        [
            DeletedTask(task=make_task(1), deleted_at=1_000, expired_after=500),
            DeletedTask(task=make_task(2), deleted_at=1_200, expired_after=500),
        ]
    )

    assert trash_store.purge_expired(now_ms=1_499) == []
    assert len(trash_store.load_all()) == 2

    purged = trash_store.purge_expired(now_ms=1_500)
    assert [e.task.id for e in purged] == [1]
    survivors = trash_store.load_all()
    assert [e.task.id for e in survivors] == [2]
    assert survivors[0].deleted_at == 1_200


def test_purge_writes_only_when_something_expired(
    trash_store: TrashStore, clock: FakeClock, monkeypatch: pytest.MonkeyPatch
) -> None:
    trash_store.push_deleted(make_task(1), expired_after=60_000)

    writes = []
    original = trash_store.save_all
    monkeypatch.setattr(trash_store, "save_all", lambda entries: writes.append(entries) or original(entries))

    trash_store.purge_expired()
    assert writes == []

    clock.advance(60_000)
    trash_store.purge_expired()
    assert len(writes) == 1
    assert trash_store.load_all() == []


def test_expired_after_defaults_when_missing(trash_store: TrashStore) -> None:
    trash_store.path.write_text(
        '[{"id": 1, "title": "x", "status": "todo", "priority": "low", '
        '"dueDate": "2026-01-01", "description": "", "deletedAt": 10}]',
        encoding="utf-8",
    )
    assert trash_store.load_all()[0].expired_after == 60_000


def test_corrupt_trash(trash_store: TrashStore) -> None:
    trash_store.path.write_text('[{"id": 1, "title": "x"}]', encoding="utf-8")
    with pytest.raises(CorruptStoreError):
        trash_store.load_all()


def test_invalid_utf8_trash_is_corrupt(trash_store: TrashStore) -> None:
    trash_store.path.write_bytes(b'[{"id": 1, "title": "\xff", "deletedAt": 1}]')
    with pytest.raises(CorruptStoreError):
        trash_store.load_all()
