# TASKS/task_app.py
import typer
from rich.console import Console
from typing import Optional

from taskninja.TASKS.display import display_tasks, display_trash
from taskninja.TASKS.errors import NothingToUndoError, TaskError
from taskninja.TASKS.service import TaskService
from taskninja.TASKS.trash import now_ms

console = Console()

task_app = typer.Typer(help="Add, list, search, sort, update, complete and delete tasks.")
trash_app = typer.Typer(help="Inspect or clear deleted tasks waiting for undo.")


def _service(ctx: typer.Context) -> TaskService:
    return ctx.obj["service"]


def _abort(error: TaskError) -> None:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(code=1)


@task_app.command("add")
def add_task(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the task."),
    due_date: str = typer.Option(..., "--due", "-d", prompt="Due Date (YYYY-MM-DD)", help="Due date, e.g. 2026-01-15 or 'next friday'."),
    status: str = typer.Option("todo", "--status", "-s", help="Status (todo, in-progress, done)."),
    priority: str = typer.Option("medium", "--priority", "-p", help="Priority (low, medium, high)."),
    description: str = typer.Option("", "--description", "--desc", help="Optional description."),
):
    """Add a new task."""
    try:
        task = _service(ctx).add_task(
            title=title,
            due_date=due_date,
            status=status,
            priority=priority,
            description=description,
        )
    except TaskError as e:
        _abort(e)
    console.print(f"[green]Task added successfully! (ID: {task.id})[/green]")


@task_app.command("list")
def list_tasks(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status (todo, in-progress, done)."),
):
    """List all tasks, optionally filtered by status."""
    try:
        tasks = _service(ctx).list_tasks(status)
    except TaskError as e:
        _abort(e)
    display_tasks(console, tasks)


@task_app.command("search")
def search_tasks(
    ctx: typer.Context,
    keyword: Optional[str] = typer.Argument(None, help="Keyword to search for."),
    find: Optional[str] = typer.Option(None, "--find", "-f", help="Keyword to search for (same as the argument)."),
    scope: str = typer.Option("both", "--in", "-i", help="Where to search: title, description or both."),
):
    """Search tasks by keyword in title and/or description."""
    term = keyword or find
    if not term:
        term = typer.prompt("Enter the keyword you want to search for")
    try:
        found = _service(ctx).search_tasks(term, scope)
    except TaskError as e:
        _abort(e)

    if not found:
        console.print("[red]No task matched your search![/red]")
        return
    display_tasks(console, found, title=f"Search Results for '{term}'")


@task_app.command("sort")
def sort_tasks(
    ctx: typer.Context,
    by: Optional[str] = typer.Option(None, "--by", help="Sort criterion: dueDate, priority or status."),
):
    """Show tasks sorted by due date, priority or status."""
    if not by:
        by = typer.prompt("Sort tasks by (dueDate, priority, status)")
    try:
        ordered = _service(ctx).sort_tasks(by)
    except TaskError as e:
        _abort(e)
    display_tasks(console, ordered, title=f"Tasks sorted by {by}")


@task_app.command("update")
def update_task(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="ID of the task to update."),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title."),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="New status (todo, in-progress, done)."),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="New priority (low, medium, high)."),
    due_date: Optional[str] = typer.Option(None, "--due", "-d", help="New due date."),
    description: Optional[str] = typer.Option(None, "--description", "--desc", help="New description."),
):
    """Update only the given fields of a task."""
    changes = {}
    if title is not None:
        changes["title"] = title
    if status is not None:
        changes["status"] = status
    if priority is not None:
        changes["priority"] = priority
    if due_date is not None:
        changes["due_date"] = due_date
    if description is not None:
        changes["description"] = description

    try:
        result = _service(ctx).update_task(task_id, **changes)
    except TaskError as e:
        _abort(e)

    if not result.changed:
        console.print("[yellow]No changes were made.[/yellow]")
        return
    console.print(f"[green]Task {task_id} updated successfully! ({', '.join(result.changed_fields)})[/green]")


@task_app.command("done")
def complete_task(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="ID of the task to mark as done."),
):
    """Mark a task as done."""
    try:
        result = _service(ctx).complete_task(task_id)
    except TaskError as e:
        _abort(e)

    if not result.changed:
        console.print(f"[yellow]Task '{result.task.title}' is already marked as done.[/yellow]")
        return
    console.print(f"[green]Task '{result.task.title}' marked as done![/green]")


@task_app.command("delete")
def delete_task(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="ID of the task to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete without asking for confirmation."),
    ttl: Optional[int] = typer.Option(None, "--ttl", min=1, help="Seconds during which the deletion can be undone."),
):
    """Delete a task. It can be restored with `undo` until its undo window expires."""
    if not yes and not typer.confirm(f"Are you sure you want to delete task {task_id}?", default=False):
        console.print("[yellow]Task deletion cancelled.[/yellow]")
        raise typer.Exit(code=0)

    try:
        entry = _service(ctx).delete_task(task_id, expired_after=ttl * 1000 if ttl else None)
    except TaskError as e:
        _abort(e)
    console.print(f"[green]Task '{entry.task.title}' (ID: {task_id}) deleted successfully![/green]")
    console.print(f"[cyan]You can undo this within {entry.expired_after // 1000}s using the `undo` command.[/cyan]")


@task_app.command("undo")
def undo_delete(ctx: typer.Context):
    """Restore the most recently deleted task."""
    try:
        task = _service(ctx).undo_delete()
    except NothingToUndoError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=0)
    except TaskError as e:
        _abort(e)
    console.print(f"[green]Last deleted task restored successfully! (Task name: {task.title})[/green]")


@trash_app.command("list")
def list_trash(ctx: typer.Context):
    """Show deleted tasks that can still be restored."""
    try:
        entries = _service(ctx).list_trash()
    except TaskError as e:
        _abort(e)
    display_trash(console, entries, now_ms())


@trash_app.command("clear")
def clear_trash(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Clear without asking for confirmation."),
):
    """Drop every deleted task; they can no longer be restored."""
    if not yes and not typer.confirm("Permanently drop all deleted tasks?", default=False):
        console.print("[yellow]Nothing cleared.[/yellow]")
        raise typer.Exit(code=0)
    try:
        count = _service(ctx).clear_trash()
    except TaskError as e:
        _abort(e)
    console.print(f"[green]Cleared {count} deleted task(s).[/green]")
