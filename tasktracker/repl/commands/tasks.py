"""
FILE: tasktracker/repl/commands/tasks.py
PURPOSE: Task command handlers for REPL
"""

from typing import List, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..main import console, repl_context
from ..parser import ParseResult
from ..display import describe_due, display_sections, display_task
from ..pickers import pick_task
from ...bootstrap import get_app
from ...core.categorizer import sort_by_due_date
from ...core.exceptions import TaskTrackerError, TaskNotFoundError, InvalidInputError
from ...core.models import Task
from ...formatting import TaskFormatter, parse_due_date, parse_task_refs, resolve_reference


# Helper functions
def ask_confirmation(message: str) -> bool:
    """Ask user for confirmation (y/n)."""
    response = input(f"{message} (y/n): ").strip().lower()
    return response in ('y', 'yes')


def _resolve_refs(args: List[str]) -> List[Task]:
    """Resolve "1,3", "1 3" or id prefixes against the current view."""
    repository = get_app().repository
    tasks: List[Task] = []
    for ref in parse_task_refs(",".join(args)):
        task = resolve_reference(ref, repl_context.view, repository)
        if task not in tasks:
            tasks.append(task)
    return tasks


def _picked_tasks(task_ids: Optional[List[str]]) -> List[Task]:
    if not task_ids:
        return []
    repository = get_app().repository
    return [t for t in (repository.get(task_id) for task_id in task_ids) if t is not None]


def _due_from_flags(result: ParseResult):
    """
    Read --due from parsed flags.

    Raises:
        InvalidInputError: If --due has no value or can't be parsed
    """
    if "due" not in result.flags:
        return None
    value = result.flag_value("due")
    if value is None:
        raise InvalidInputError("--due needs a value, e.g. --due \"today 18:00\"")
    return parse_due_date(value)


def handle_add_command(result: ParseResult) -> None:
    """
    Handle 'add' command - create new task.

    Usage:
        add Buy milk
        add "Buy milk" --due "today 18:00"
        add Pay rent --due 2026-11-01 --group home
    """
    try:
        due_date = _due_from_flags(result)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    group_id = result.flag_value("group") or repl_context.current_group
    title = result.text()

    try:
        task = get_app().repository.add(title, due_date=due_date, group_id=group_id)
    except TaskTrackerError as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        return

    if task is None:
        console.print("[red]Error:[/red] Task title required")
        console.print("[dim]Usage: add <title> [--due WHEN] [--group ID][/dim]")
        return

    display_task(task, "✓ Created:", console)
    if task.due_date is None:
        console.print("  [dim]No due date - it won't show up in the sections[/dim]")


def handle_ls_command(result: ParseResult) -> None:
    """
    Handle 'ls' command - list Today / Upcoming / Overdue.

    Usage:
        ls
        ls --all        (every task, including ones without a due date)
    """
    repository = get_app().repository
    repl_context.refresh(repository)

    if result.flags.get("all"):
        tasks = sort_by_due_date(repository.tasks)
        if not tasks:
            console.print("[dim]No tasks found[/dim]")
            return
        view = repl_context.view
        labels = [str(view.index(t) + 1) if t in view else "-" for t in tasks]
        console.print(TaskFormatter.create_table(tasks, title="All tasks", labels=labels))
        return

    display_sections(repl_context.sections, console)


def handle_done_command(result: ParseResult) -> None:
    """
    Handle 'done' command - toggle completion.

    Usage:
        done 2
        done 1,3
        done           (shows picker)
    """
    try:
        if result.args:
            tasks = _resolve_refs(result.args)
        else:
            tasks = _picked_tasks(pick_task(title="Toggle completion"))
    except TaskNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    repository = get_app().repository
    for task in tasks:
        updated = repository.toggle_completion(task.id)
        if updated is None:
            continue
        if updated.is_completed:
            console.print(f"[green]✓[/green] Completed: {escape(updated.title)}")
        else:
            console.print(f"[yellow]○[/yellow] Reopened: {escape(updated.title)}")


def handle_rm_command(result: ParseResult) -> None:
    """
    Handle 'rm' command - delete tasks.

    Usage:
        rm 2
        rm 1,3          (asks for confirmation)
        rm 1,3 --yes
        rm              (shows picker)
    """
    try:
        if result.args:
            tasks = _resolve_refs(result.args)
        else:
            tasks = _picked_tasks(pick_task(title="Delete tasks"))
    except TaskNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    if not tasks:
        return

    if len(tasks) > 1 and not result.flags.get("yes"):
        if not ask_confirmation(f"Delete {len(tasks)} tasks?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    repository = get_app().repository
    view = list(repl_context.view)

    # Shown tasks go through their positions, the rest by id
    positions = [view.index(t) for t in tasks if t in view]
    deleted = repository.delete_many(positions, view)
    for task in tasks:
        if task not in view and repository.delete(task.id):
            deleted.append(task)

    for task in deleted:
        console.print(f"[green]✓[/green] Deleted: {escape(task.title)}")


def handle_edit_command(result: ParseResult) -> None:
    """
    Handle 'edit' command - change title and due date.

    Usage:
        edit 2 Buy oat milk
        edit 2 "Buy oat milk" --due "tomorrow 08:00"
        edit 2 Someday --no-due

    Without --due the current due date is kept. The reminder is not re-armed.
    """
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Task reference and new title required")
        console.print("[dim]Usage: edit <ref> <title> [--due WHEN | --no-due][/dim]")
        return

    if "due" in result.flags and result.flags.get("no-due"):
        console.print("[red]Error:[/red] Use either --due or --no-due, not both")
        return

    repository = get_app().repository
    try:
        task = resolve_reference(result.args[0], repl_context.view, repository)
        if result.flags.get("no-due"):
            new_due_date = None
        elif "due" in result.flags:
            new_due_date = _due_from_flags(result)
        else:
            new_due_date = task.due_date
    except (TaskNotFoundError, InvalidInputError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    updated = repository.update(task.id, " ".join(result.args[1:]), new_due_date)
    if updated is None:
        console.print(f"[red]Error:[/red] {TaskNotFoundError(result.args[0])}")
        return
    display_task(updated, "✓ Updated:", console)


def handle_show_command(result: ParseResult) -> None:
    """
    Handle 'show' command - view full task details.

    Usage:
        show 2
        show 3f2a
        show           (shows picker)
    """
    try:
        if result.args:
            task = resolve_reference(result.args[0], repl_context.view, get_app().repository)
        else:
            picked = _picked_tasks(pick_task(title="Show task", multi=False))
            if not picked:
                return
            task = picked[0]
    except TaskNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    details = Text()
    details.append(f"Task {task.id}\n", style="bold cyan")
    details.append(f"{task.title}\n\n", style="bold white")
    details.append("Due: ", style="dim")
    details.append(f"{describe_due(task)}\n", style="yellow" if task.due_date else "white")
    details.append("Status: ", style="dim")
    details.append("done" if task.is_completed else "open", style="green" if task.is_completed else "yellow")
    if task.group_id:
        details.append("\nGroup: ", style="dim")
        details.append(task.group_id, style="cyan")

    console.print(Panel(details, expand=False))
