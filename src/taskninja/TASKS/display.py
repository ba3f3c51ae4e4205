# TASKS/display.py
from datetime import datetime
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from taskninja.TASKS.model import DeletedTask, Task
from taskninja.TASKS.validators import parse_due_date

STATUS_STYLES = {"done": "green", "in-progress": "yellow", "todo": "blue"}
PRIORITY_STYLES = {"high": "bold red", "medium": "yellow", "low": "green"}


def short_date(date_str: Optional[str]) -> str:
    """Convert a stored due date to DD-MM-YYYY, falling back to the raw text."""
    if not date_str:
        return "-"
    parsed = parse_due_date(date_str)
    if parsed is None:
        return date_str
    return parsed.strftime("%d-%m-%Y")


def _task_table(title: str) -> Table:
    table = Table(
        title=f"[bold cyan]{title}[/bold cyan]",
        show_header=True,
        header_style="bold magenta",
        box=box.ROUNDED,
        show_lines=True,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", justify="center")
    table.add_column("Title", justify="left")
    table.add_column("Status", justify="center")
    table.add_column("Priority", justify="center")
    table.add_column("Due Date", justify="center")
    table.add_column("Description", justify="left")
    return table


def _task_cells(task: Task) -> List[Text]:
    row_style = "strike dim" if task.status == "done" else ""
    return [
        Text(str(task.id), style=row_style),
        Text(task.title, style=row_style),
        Text(task.status, style=STATUS_STYLES.get(task.status, "white")),
        Text(task.priority, style=PRIORITY_STYLES.get(task.priority, "white")),
        Text(short_date(task.due_date), style=row_style),
        Text(task.description or "", style=row_style),
    ]


def display_tasks(console: Console, tasks: Sequence[Task], title: str = "Your Tasks") -> None:
    if not tasks:
        console.print("[yellow]No tasks to display.[/yellow]")
        return

    table = _task_table(title)
    for index, task in enumerate(tasks, start=1):
        table.add_row(Text(str(index)), *_task_cells(task))
    console.print(table)


def display_trash(console: Console, entries: Sequence[DeletedTask], now_ms: int) -> None:
    if not entries:
        console.print("[yellow]Trash is empty. Nothing to undo.[/yellow]")
        return

    table = Table(
        title="[bold cyan]Deleted Tasks (most recent last)[/bold cyan]",
        show_header=True,
        header_style="bold magenta",
        box=box.ROUNDED,
    )
    table.add_column("ID", justify="center")
    table.add_column("Title", justify="left")
    table.add_column("Deleted At", justify="center")
    table.add_column("Undo Window Left", justify="right")

    for entry in entries:
        deleted_at = datetime.fromtimestamp(entry.deleted_at / 1000).strftime("%d-%m-%Y %H:%M:%S")
        seconds_left = entry.remaining_ms(now_ms) // 1000
        mins, secs = divmod(seconds_left, 60)
        table.add_row(
            str(entry.task.id),
            entry.task.title,
            deleted_at,
            Text(f"{mins:02}:{secs:02}", style="red" if seconds_left < 10 else "green"),
        )
    console.print(table)
