# TASKS/service.py
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, List, Optional, Tuple

from taskninja.TASKS.errors import (
    IdConflictError,
    InvalidEnumError,
    NothingToUndoError,
    TaskNotFoundError,
)
from taskninja.TASKS.model import DEFAULT_EXPIRED_AFTER_MS, DeletedTask, Task
from taskninja.TASKS.ports import TaskRepo, TrashRepo
from taskninja.TASKS.storage import next_id
from taskninja.TASKS.validators import (
    normalize_criterion,
    parse_due_date,
    validate_due_date,
    validate_priority,
    validate_search_field,
    validate_status,
    validate_title,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "status", "priority", "due_date", "description")

PRIORITY_ORDER = {"high": 1, "medium": 2, "low": 3}
STATUS_ORDER = {"todo": 1, "in-progress": 2, "done": 3}


@dataclass
class UpdateResult:
    task: Task
    changed_fields: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changed_fields)


def _validate_field(name: str, value: Any) -> str:
    if name == "title":
        return validate_title(value)
    if name == "status":
        return validate_status(value)
    if name == "priority":
        return validate_priority(value)
    if name == "due_date":
        return validate_due_date(value)
    return "" if value is None else str(value)


def _find(tasks: List[Task], task_id: int) -> Task:
    for task in tasks:
        if task.id == task_id:
            return task
    raise TaskNotFoundError(task_id)


def _due_date_key(task: Task) -> Tuple[int, date]:
    parsed = parse_due_date(task.due_date)
    # unparseable dates go last
    return (0, parsed) if parsed else (1, date.max)


class TaskService:
    """Add/list/search/sort/update/complete/delete/undo on top of the two stores."""

    def __init__(
        self,
        tasks: TaskRepo,
        trash: TrashRepo,
        undo_ttl_ms: int = DEFAULT_EXPIRED_AFTER_MS,
    ) -> None:
        self.tasks = tasks
        self.trash = trash
        self.undo_ttl_ms = undo_ttl_ms

    # --- reads ---

    def list_tasks(self, status: Optional[str] = None) -> List[Task]:
        if status is not None:
            status = validate_status(status)
        tasks = self.tasks.load()
        if status is None:
            return tasks
        return [task for task in tasks if task.status == status]

    def search_tasks(self, term: str, scope: str = "both") -> List[Task]:
        """Case-insensitive substring search over title, description or both."""
        scope = validate_search_field(scope)
        needle = (term or "").lower()

        def matches(task: Task) -> bool:
            in_title = needle in task.title.lower()
            in_description = needle in task.description.lower()
            if scope == "title":
                return in_title
            if scope == "description":
                return in_description
            return in_title or in_description

        return [task for task in self.tasks.load() if matches(task)]

    def sort_tasks(self, criterion: str) -> List[Task]:
        """Return a new ordering of the active collection; the store is not touched."""
        criterion = normalize_criterion(criterion)
        tasks = self.tasks.load()
        if criterion == "dueDate":
            return sorted(tasks, key=_due_date_key)
        if criterion == "priority":
            return sorted(tasks, key=lambda t: PRIORITY_ORDER.get(t.priority, len(PRIORITY_ORDER) + 1))
        return sorted(tasks, key=lambda t: STATUS_ORDER.get(t.status, len(STATUS_ORDER) + 1))

    def list_trash(self) -> List[DeletedTask]:
        """Pending undo entries, expired ones purged first."""
        self.trash.purge_expired()
        return self.trash.load_all()

    # --- mutations ---

    def add_task(
        self,
        title: str,
        due_date: str,
        status: str = "todo",
        priority: str = "medium",
        description: str = "",
    ) -> Task:
        title = validate_title(title)
        status = validate_status(status)
        priority = validate_priority(priority)
        due_date = validate_due_date(due_date)

        tasks = self.tasks.load()
        task = Task(
            id=next_id(tasks),
            title=title,
            status=status,
            priority=priority,
            due_date=due_date,
            description=description or "",
        )
        tasks.append(task)
        self.tasks.save(tasks)
        logger.info("Added task %d '%s'", task.id, task.title)
        return task

    def update_task(self, task_id: int, **changes: Any) -> UpdateResult:
        """
        Apply only the given fields. Every value is validated before anything is written.
        Nothing is saved when no field actually changes.
        """
        unknown = [name for name in changes if name not in UPDATABLE_FIELDS]
        if unknown:
            raise InvalidEnumError("field", unknown[0], UPDATABLE_FIELDS)
        validated = {name: _validate_field(name, value) for name, value in changes.items()}

        tasks = self.tasks.load()
        task = _find(tasks, task_id)

        changed_fields = [name for name, value in validated.items() if getattr(task, name) != value]
        if not changed_fields:
            logger.debug("Update of task %d changed nothing", task_id)
            return UpdateResult(task=task)

        for name in changed_fields:
            setattr(task, name, validated[name])
        self.tasks.save(tasks)
        logger.info("Updated task %d: %s", task_id, ", ".join(changed_fields))
        return UpdateResult(task=task, changed_fields=changed_fields)

    def complete_task(self, task_id: int) -> UpdateResult:
        return self.update_task(task_id, status="done")

    def delete_task(self, task_id: int, expired_after: Optional[int] = None) -> DeletedTask:
        """
        Move a task to the trash.
        The trash entry is written before the shrunken collection, so a crash
        in between leaves the task recoverable.
        """
        tasks = self.tasks.load()
        task = _find(tasks, task_id)
        ttl = self.undo_ttl_ms if expired_after is None else expired_after

        entry = self.trash.push_deleted(replace(task), ttl)
        self.tasks.save([t for t in tasks if t.id != task_id])
        logger.info("Deleted task %d, undo available for %d ms", task_id, ttl)
        return entry

    def undo_delete(self) -> Task:
        """
        Restore the most recently deleted, not yet expired task.
        The active collection is written before the trash entry is dropped,
        so a crash in between leaves the task in both stores, never in neither.
        """
        self.trash.purge_expired()
        entries = self.trash.load_all()
        if not entries:
            raise NothingToUndoError()

        restored = replace(entries[-1].task)
        tasks = self.tasks.load()
        existing = next((t for t in tasks if t.id == restored.id), None)
        if existing is not None and existing != restored:
            logger.warning("Undo of task %d blocked: ID reused by '%s'", restored.id, existing.title)
            raise IdConflictError(restored.id)

        if existing is None:
            tasks.append(restored)
        tasks.sort(key=lambda t: t.id)
        self.tasks.save(tasks)
        self.trash.pop_last()
        logger.info("Restored task %d '%s'", restored.id, restored.title)
        return restored

    def clear_trash(self) -> int:
        entries = self.trash.load_all()
        if entries:
            self.trash.save_all([])
        return len(entries)
