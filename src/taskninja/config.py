# taskninja/config.py
"""Settings loaded from TASKNINJA_* environment variables."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from taskninja.TASKS.model import DEFAULT_EXPIRED_AFTER_MS
from taskninja.TASKS.storage import TASKS_FILE_NAME
from taskninja.TASKS.trash import TRASH_FILE_NAME

ENV_PREFIX = "TASKNINJA"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    tasks_file: str
    trash_file: str
    undo_ttl_ms: int
    log_level: str
    log_file: Optional[Path]

    @property
    def tasks_path(self) -> Path:
        return self.data_dir / self.tasks_file

    @property
    def trash_path(self) -> Path:
        return self.data_dir / self.trash_file

    @staticmethod
    def from_env() -> "Settings":
        undo_ttl_ms = _env_int(_k("UNDO_TTL_MS"), DEFAULT_EXPIRED_AFTER_MS)
        if undo_ttl_ms <= 0:
            undo_ttl_ms = DEFAULT_EXPIRED_AFTER_MS

        return Settings(
            data_dir=_env_path(_k("DATA_DIR"), Path(".")),
            tasks_file=_env(_k("TASKS_FILE"), TASKS_FILE_NAME) or TASKS_FILE_NAME,
            trash_file=_env(_k("TRASH_FILE"), TRASH_FILE_NAME) or TRASH_FILE_NAME,
            undo_ttl_ms=undo_ttl_ms,
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            log_file=_env_path(_k("LOG_FILE"), None),
        )

    def with_overrides(self, data_dir: Optional[Path] = None, log_level: Optional[str] = None) -> "Settings":
        """Apply command-line overrides on top of the environment."""
        settings = self
        if data_dir is not None:
            settings = replace(settings, data_dir=data_dir.expanduser())
        if log_level is not None:
            settings = replace(settings, log_level=log_level.upper())
        return settings
