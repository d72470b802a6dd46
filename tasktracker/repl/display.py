"""
FILE: tasktracker/repl/display.py
PURPOSE: Display functions for tasks and sections
EXPORTS:
  - display_task() - Display a single task line
  - display_sections() - Display the Today / Upcoming / Overdue tables
DEPENDENCIES:
  - rich (formatted output)
  - tasktracker.formatting (tables, dates)
NOTES:
  - Accepts the console as a parameter to avoid circular imports with main
"""

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from ..core.categorizer import Section
from ..core.models import Task
from ..formatting import TaskFormatter, format_due_date, format_relative_date

console = Console()


def display_task(task: Task, message: str = "", console_instance: Optional[Console] = None) -> None:
    """
    Display a single task with optional message.

    Args:
        task: Task object to display
        message: Optional message shown before the task (e.g. "Created:")
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    if message:
        console_instance.print(f"[green]{message}[/green]")

    due = f" [dim]({format_due_date(task.due_date)})[/dim]" if task.due_date else ""
    console_instance.print(f"  [cyan]{task.id[:8]}[/cyan]: {escape(task.title)}{due}")


def display_sections(
    sections: Sequence[Section],
    console_instance: Optional[Console] = None,
    now: Optional[datetime] = None,
) -> None:
    if console_instance is None:
        console_instance = console

    if not sections:
        console_instance.print("[dim]Nothing due. Add a task with --due to see it here.[/dim]")
        return

    tables = TaskFormatter.create_section_tables(sections, now=now)
    for index, table in enumerate(tables):
        if index:
            console_instance.print()
        console_instance.print(table)


def describe_due(task: Task, now: Optional[datetime] = None) -> str:
    """Due date with a relative hint, or "-"."""
    if task.due_date is None:
        return "-"
    return f"{format_due_date(task.due_date)} ({format_relative_date(task.due_date, now)})"
