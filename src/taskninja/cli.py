import logging
from pathlib import Path
from typing import Optional

import typer

from taskninja.config import Settings
from taskninja.logging_setup import setup_logging
from taskninja.TASKS.service import TaskService
from taskninja.TASKS.storage import TaskStore
from taskninja.TASKS.task_app import task_app, trash_app
from taskninja.TASKS.trash import TrashStore

logger = logging.getLogger(__name__)

app = typer.Typer(help="TaskNinja: manage your tasks from the command line.")
app.add_typer(task_app, name="task", help="Manage your tasks.")
app.add_typer(trash_app, name="trash", help="Deleted tasks waiting for undo.")


def build_service(settings: Settings) -> TaskService:
    """Wire the file-backed stores for one invocation."""
    return TaskService(
        tasks=TaskStore(settings.tasks_path),
        trash=TrashStore(settings.trash_path),
        undo_ttl_ms=settings.undo_ttl_ms,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Directory holding todos.json and deleted_todos.json."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs on stderr."),
):
    settings = Settings.from_env().with_overrides(
        data_dir=data_dir,
        log_level="DEBUG" if verbose else None,
    )
    setup_logging(settings.log_level, settings.log_file)
    logger.debug("Using tasks file %s and trash file %s", settings.tasks_path, settings.trash_path)
    ctx.obj = {"settings": settings, "service": build_service(settings)}


if __name__ == "__main__":
    app()
