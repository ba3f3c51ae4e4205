from __future__ import annotations

from pathlib import Path

import pytest

from taskninja.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATA_DIR", "TASKS_FILE", "TRASH_FILE", "UNDO_TTL_MS", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"TASKNINJA_{name}", raising=False)

    settings = Settings.from_env()

    assert settings.tasks_path == Path("todos.json")
    assert settings.trash_path == Path("deleted_todos.json")
    assert settings.undo_ttl_ms == 60_000
    assert settings.log_level == "WARNING"
    assert settings.log_file is None


def test_env_and_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKNINJA_DATA_DIR", str(tmp_path / "env"))
    monkeypatch.setenv("TASKNINJA_UNDO_TTL_MS", "5000")
    monkeypatch.setenv("TASKNINJA_LOG_LEVEL", "info")

    settings = Settings.from_env()
    assert settings.tasks_path == tmp_path / "env" / "todos.json"
    assert settings.undo_ttl_ms == 5000
    assert settings.log_level == "INFO"

    overridden = settings.with_overrides(data_dir=tmp_path / "cli", log_level="debug")
    assert overridden.trash_path == tmp_path / "cli" / "deleted_todos.json"
    assert overridden.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "-1", "0"])
def test_bad_ttl_falls_back(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("TASKNINJA_UNDO_TTL_MS", raw)
    assert Settings.from_env().undo_ttl_ms == 60_000
