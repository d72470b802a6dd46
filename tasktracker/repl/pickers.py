"""
FILE: tasktracker/repl/pickers.py
PURPOSE: Overlay pickers for REPL selections using prompt_toolkit dialogs
EXPORTS:
  - task_label(task) -> str
  - pick_tasks_overlay(title, tasks, multi) -> Optional[List[str]]
  - pick_task(title, multi) -> Optional[List[str]]
DEPENDENCIES:
  - prompt_toolkit.shortcuts (checkboxlist_dialog, radiolist_dialog)
NOTES:
  - Pickers return task ids, not positions
  - Without a terminal, falls back to a numbered inline prompt
"""

import sys
from typing import List, Optional, Sequence

from prompt_toolkit.shortcuts import checkboxlist_dialog, radiolist_dialog
from rich.markup import escape

from ..core.models import Task
from ..formatting import format_due_date


def task_label(task: Task) -> str:
    title = (task.title or "").strip()
    title_short = title if len(title) <= 50 else title[:47] + "..."
    box = "☑" if task.is_completed else "☐"
    due = format_due_date(task.due_date) if task.due_date else "no due date"
    return f"{box} {title_short}  [{due}]"


def pick_tasks_overlay(title: str, tasks: Sequence[Task], multi: bool = True) -> Optional[List[str]]:
    """
    Show an overlay dialog listing tasks. Returns the selected task ids.

    Args:
        title: Dialog title
        tasks: Tasks to choose from
        multi: If True, allow multi-select
    """
    if not tasks:
        return None

    choices = [(t.id, task_label(t)) for t in tasks]
    if multi:
        result = checkboxlist_dialog(
            title=title,
            text="Select one or more tasks",
            values=choices,
            ok_text="OK",
            cancel_text="Cancel",
        ).run()
        return list(result) if result else None

    result = radiolist_dialog(
        title=title,
        text="Select a task",
        values=choices,
        ok_text="OK",
        cancel_text="Cancel",
    ).run()
    return [result] if result is not None else None


def _pick_inline(title: str, tasks: Sequence[Task], console) -> Optional[List[str]]:
    console.print(f"\n[bold cyan]{title}[/bold cyan]")
    for idx, task in enumerate(tasks, 1):
        console.print(f"  \\[{idx}] {escape(task_label(task))}", highlight=False)
    console.print()

    try:
        selection = input("Select number(s) - use commas for multiple (or press Enter to cancel): ").strip()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return None

    if not selection:
        return None

    task_ids = []
    for sel in (s.strip() for s in selection.split(",")):
        if not sel.isdigit() or not 1 <= int(sel) <= len(tasks):
            console.print(f"[red]Error:[/red] Invalid selection: {sel}")
            return None
        task_ids.append(tasks[int(sel) - 1].id)
    return task_ids or None


def pick_task(title: str = "Select a task", multi: bool = True) -> Optional[List[str]]:
    """
    Pick tasks from the REPL's current view.

    Returns:
        List of selected task ids or None if cancelled
    """
    # Import here to avoid circular imports
    from .main import console, repl_context

    tasks = repl_context.view
    if not tasks:
        console.print("[yellow]No tasks in view[/yellow]")
        console.print("[dim]Tip: pass an id prefix to reach tasks without a due date[/dim]")
        return None

    if sys.stdin.isatty() and sys.stdout.isatty():
        return pick_tasks_overlay(title, tasks, multi=multi)
    return _pick_inline(title, tasks, console)
