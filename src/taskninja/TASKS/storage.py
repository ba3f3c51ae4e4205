# TASKS/storage.py
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Union

from taskninja.TASKS.errors import CorruptStoreError, StoreIOError
from taskninja.TASKS.model import Task

logger = logging.getLogger(__name__)

TASKS_FILE_NAME = "todos.json"


def read_json_list(path: Path) -> List[Any]:
    """
    Read a JSON document that must be a list.
    A missing file is the empty state and returns [].
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except UnicodeDecodeError as e:
        raise CorruptStoreError(path, "not valid UTF-8") from e
    except OSError as e:
        raise StoreIOError(path, str(e)) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptStoreError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e
    if not isinstance(data, list):
        raise CorruptStoreError(path, "top-level value must be a list")
    return data


def atomic_write_json(path: Path, payload: Any) -> None:
    """
    Write payload as JSON next to path and rename it into place,
    so an interrupted write never leaves a half-written store.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise StoreIOError(path, str(e)) from e


def next_id(tasks: Iterable[Task]) -> int:
    """Next task ID: 1 for an empty collection, otherwise max(existing) + 1."""
    return max((task.id for task in tasks), default=0) + 1


class TaskStore:
    """JSON file holding the active task collection."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> List[Task]:
        records = read_json_list(self.path)
        try:
            tasks = [Task.from_dict(item) for item in records]
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptStoreError(self.path, f"bad task record: {e}") from e

        seen = set()
        for task in tasks:
            if task.id in seen:
                raise CorruptStoreError(self.path, f"duplicate task id {task.id}")
            seen.add(task.id)

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        atomic_write_json(self.path, [task.to_dict() for task in tasks])
        logger.debug("Saved %d task(s) to %s", len(tasks), self.path)
