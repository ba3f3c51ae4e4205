# TASKS/errors.py
from pathlib import Path
from typing import Iterable, Union


class TaskError(Exception):
    """Base class for every failure the task core reports to its caller."""


class InvalidEnumError(TaskError):
    def __init__(self, field: str, value: str, allowed: Iterable[str]):
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid {field} '{value}'. Allowed {field} values are: {', '.join(self.allowed)}"
        )


class InvalidDateError(TaskError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid due date '{text}'. Please use a valid date (e.g. YYYY-MM-DD).")


class EmptyTitleError(TaskError):
    def __init__(self):
        super().__init__("Title cannot be empty.")


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found.")


class NothingToUndoError(TaskError):
    def __init__(self):
        super().__init__("No deleted task to restore.")


class IdConflictError(TaskError):
    """Undo would put a second task with the same ID into the active collection."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(
            f"Cannot restore task {task_id}: another task already uses that ID."
        )


class CorruptStoreError(TaskError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Store file '{self.path}' is corrupted: {reason}")


class StoreIOError(TaskError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not access store file '{self.path}': {reason}")
