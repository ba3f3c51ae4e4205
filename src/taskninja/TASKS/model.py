# TASKS/model.py
from dataclasses import dataclass, field
from typing import Any, Dict

DEFAULT_EXPIRED_AFTER_MS = 60_000


@dataclass
class Task:
    id: int
    title: str
    status: str = "todo"         # "todo", "in-progress", "done"
    priority: str = "medium"     # "low", "medium", "high"
    due_date: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "priority": self.priority,
            "dueDate": self.due_date,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Task":
        """Build a Task from its stored form. Raises KeyError/TypeError/ValueError on bad records."""
        if not isinstance(raw, dict):
            raise TypeError(f"task record must be an object, got {type(raw).__name__}")
        task_id = raw["id"]
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise ValueError(f"task id must be an integer, got {task_id!r}")
        if task_id < 1:
            raise ValueError(f"task id must be positive, got {task_id}")
        return cls(
            id=task_id,
            title=str(raw["title"]),
            status=str(raw.get("status", "todo")),
            priority=str(raw.get("priority", "medium")),
            due_date=str(raw.get("dueDate", "")),
            description=str(raw.get("description") or ""),
        )


@dataclass
class DeletedTask:
    task: Task
    deleted_at: int                                   # epoch milliseconds
    expired_after: int = field(default=DEFAULT_EXPIRED_AFTER_MS)

    def is_expired(self, now_ms: int) -> bool:
        return now_ms - self.deleted_at >= self.expired_after

    def remaining_ms(self, now_ms: int) -> int:
        return max(0, self.deleted_at + self.expired_after - now_ms)

    def to_dict(self) -> Dict[str, Any]:
        data = self.task.to_dict()
        data["deletedAt"] = self.deleted_at
        data["expiredAfter"] = self.expired_after
        return data

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DeletedTask":
        return cls(
            task=Task.from_dict(raw),
            deleted_at=_as_millis("deletedAt", raw["deletedAt"]),
            expired_after=_as_millis("expiredAfter", raw.get("expiredAfter", DEFAULT_EXPIRED_AFTER_MS)),
        )


def _as_millis(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return int(value)
