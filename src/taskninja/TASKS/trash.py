# TASKS/trash.py
import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from taskninja.TASKS.errors import CorruptStoreError
from taskninja.TASKS.model import DEFAULT_EXPIRED_AFTER_MS, DeletedTask, Task
from taskninja.TASKS.storage import atomic_write_json, read_json_list

logger = logging.getLogger(__name__)

TRASH_FILE_NAME = "deleted_todos.json"


def now_ms() -> int:
    return int(time.time() * 1000)


class TrashStore:
    """
    JSON file holding soft-deleted tasks as a stack (oldest first).
    Each entry carries deletedAt / expiredAfter in milliseconds.
    """

    def __init__(self, path: Union[str, Path], clock: Callable[[], int] = now_ms) -> None:
        self.path = Path(path)
        self.clock = clock

    def load_all(self) -> List[DeletedTask]:
        records = read_json_list(self.path)
        try:
            entries = [DeletedTask.from_dict(item) for item in records]
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptStoreError(self.path, f"bad trash record: {e}") from e
        logger.debug("Loaded %d trash entr(ies) from %s", len(entries), self.path)
        return entries

    def save_all(self, entries: Sequence[DeletedTask]) -> None:
        atomic_write_json(self.path, [entry.to_dict() for entry in entries])
        logger.debug("Saved %d trash entr(ies) to %s", len(entries), self.path)

    def push_deleted(self, task: Task, expired_after: int = DEFAULT_EXPIRED_AFTER_MS) -> DeletedTask:
        entries = self.load_all()
        entry = DeletedTask(task=task, deleted_at=self.clock(), expired_after=expired_after)
        entries.append(entry)
        self.save_all(entries)
        return entry

    def pop_last(self) -> Optional[DeletedTask]:
        entries = self.load_all()
        if not entries:
            return None
        entry = entries.pop()
        self.save_all(entries)
        return entry

    def purge_expired(self, now_ms: Optional[int] = None) -> List[DeletedTask]:
        """Drop expired entries and return them. Writes only when something was dropped."""
        now = self.clock() if now_ms is None else now_ms
        entries = self.load_all()
        remaining = [entry for entry in entries if not entry.is_expired(now)]
        if len(remaining) == len(entries):
            return []

        self.save_all(remaining)
        purged = [entry for entry in entries if entry.is_expired(now)]
        logger.info("Purged %d expired trash entr(ies)", len(purged))
        return purged
