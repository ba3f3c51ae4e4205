# TASKS/ports.py
"""
Store interfaces used by TaskService.

The service only talks to these Protocols, so the JSON file stores can be
swapped for in-memory ones in tests.
"""
from typing import List, Optional, Protocol, Sequence

from taskninja.TASKS.model import DeletedTask, Task


class TaskRepo(Protocol):
    """Owns the active collection."""

    def load(self) -> List[Task]: ...

    def save(self, tasks: Sequence[Task]) -> None: ...


class TrashRepo(Protocol):
    """Owns the pending-undo stack (oldest first)."""

    def load_all(self) -> List[DeletedTask]: ...

    def save_all(self, entries: Sequence[DeletedTask]) -> None: ...

    def push_deleted(self, task: Task, expired_after: int) -> DeletedTask: ...

    def pop_last(self) -> Optional[DeletedTask]: ...

    def purge_expired(self, now_ms: Optional[int] = None) -> List[DeletedTask]: ...
