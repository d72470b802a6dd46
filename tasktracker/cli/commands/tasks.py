"""
FILE: tasktracker/cli/commands/tasks.py
PURPOSE: Task management commands (add, ls, done, rm, edit, show)
"""

import json
from typing import List, Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..main import app, console, error_console, get_app, current_view
from ...core.categorizer import categorize, sort_by_due_date
from ...core.exceptions import (
    TaskTrackerError,
    TaskNotFoundError,
    InvalidInputError,
)
from ...core.models import Task
from ...formatting import (
    TaskFormatter,
    format_due_date,
    format_relative_date,
    parse_due_date,
    parse_task_refs,
    resolve_reference,
)


def _resolve_all(refs: List[str], view: List[Task], repository) -> List[Task]:
    """Resolve every reference up front, failing on the first bad one."""
    tasks = []
    for ref in refs:
        task = resolve_reference(ref, view, repository)
        if task not in tasks:
            tasks.append(task)
    return tasks


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (e.g. 'today 18:00', 'tomorrow', '2026-10-20 09:30')"),
    group: Optional[str] = typer.Option(None, "--group", "-g", help="Group identifier to tag the task with"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task.

    Example:
        tasktracker add "Buy milk" --due "today 18:00"
        tasktracker add "Call the bank" --due tomorrow
        tasktracker add "Read a book"
    """
    try:
        due_date = parse_due_date(due) if due else None

        repository = get_app().repository
        task = repository.add(title, due_date=due_date, group_id=group)
        if task is None:
            error_console.print("[red]Error:[/red] Task title cannot be empty")
            raise typer.Exit(1)

        if json_output:
            typer.echo(task.to_json())
        elif raw:
            typer.echo(f"{task.id}: {task.title}")
        else:
            console.print(f"[green]✓ Created task[/green] [dim]{task.id[:8]}[/dim]: {escape(task.title)}")
            if task.due_date:
                console.print(f"  [dim]Due {format_due_date(task.due_date)} - reminder set[/dim]")
            else:
                console.print("  [dim]No due date - it won't show up in Today/Upcoming/Overdue[/dim]")

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except TaskTrackerError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def ls(
    show_all: bool = typer.Option(False, "--all", "-a", help="List every task, including ones without a due date"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List tasks in Today, Upcoming and Overdue sections.

    Numbers in the '#' column can be used as references in done/rm/edit/show.

    Example:
        tasktracker ls
        tasktracker ls --all
        tasktracker ls --json
    """
    repository = get_app().repository

    if show_all:
        tasks = sort_by_due_date(repository.tasks)
        view = current_view(repository)

        if json_output:
            typer.echo(TaskFormatter.to_json_array(tasks))
        elif raw:
            for task in tasks:
                marker = "x" if task.is_completed else " "
                typer.echo(f"{task.id}: [{marker}] {task.title}")
        else:
            if not tasks:
                console.print("[dim]No tasks found[/dim]")
                return
            labels = [str(view.index(t) + 1) if t in view else "-" for t in tasks]
            console.print(TaskFormatter.create_table(tasks, title="All tasks", labels=labels))
            console.print(f"\n[dim]Total: {len(tasks)} task(s)[/dim]")
        return

    sections = categorize(repository.tasks)

    if json_output:
        typer.echo(TaskFormatter.sections_to_json(sections))
    elif raw:
        for line in TaskFormatter.sections_to_raw_lines(sections):
            typer.echo(line)
    else:
        if not sections:
            console.print("[dim]Nothing due. Add a task with a due date to see it here.[/dim]")
            return
        for table in TaskFormatter.create_section_tables(sections):
            console.print(table)
            console.print()


@app.command()
def done(
    refs: str = typer.Argument(..., help="Task reference(s): position from 'ls' or id prefix (comma-separated)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Toggle completion of one or more tasks.

    Running it again on a completed task marks it as not done.

    Example:
        tasktracker done 1
        tasktracker done 1,3
        tasktracker done 3f2a
    """
    try:
        repository = get_app().repository
        tasks = _resolve_all(parse_task_refs(refs), current_view(repository), repository)

        toggled = []
        for task in tasks:
            updated = repository.toggle_completion(task.id)
            if updated is not None:
                toggled.append(updated)

        if json_output:
            typer.echo(TaskFormatter.to_json_array(toggled))
        elif raw:
            for task in toggled:
                state = "Completed" if task.is_completed else "Reopened"
                typer.echo(f"{state}: {task.title}")
        else:
            for task in toggled:
                if task.is_completed:
                    console.print(f"[green]✓[/green] Completed: {escape(task.title)}")
                else:
                    console.print(f"[yellow]○[/yellow] Reopened: {escape(task.title)}")

    except (TaskNotFoundError, InvalidInputError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except TaskTrackerError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def rm(
    refs: str = typer.Argument(..., help="Task reference(s): position from 'ls' or id prefix (comma-separated)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """
    Delete one or more tasks permanently.

    Confirms before deleting multiple tasks (use -y to skip).

    Example:
        tasktracker rm 2
        tasktracker rm 1,3 --yes
        tasktracker rm 3f2a
    """
    try:
        repository = get_app().repository
        view = current_view(repository)
        tasks = _resolve_all(parse_task_refs(refs), view, repository)

        if len(tasks) > 1 and not yes:
            console.print(f"[yellow]About to delete {len(tasks)} task(s)[/yellow]")
            if not typer.confirm("Continue?", default=False):
                console.print("[yellow]Cancelled[/yellow]")
                raise typer.Exit(0)

        # Shown tasks go through their positions, the rest by id
        positions = [view.index(t) for t in tasks if t in view]
        deleted = repository.delete_many(positions, view)
        for task in tasks:
            if task not in view and repository.delete(task.id):
                deleted.append(task)

        if json_output:
            typer.echo(json.dumps([{"id": t.id, "title": t.title} for t in deleted], indent=2))
        elif raw:
            for task in deleted:
                typer.echo(f"Deleted task {task.id}: {task.title}")
        else:
            for task in deleted:
                console.print(f"[green]✓[/green] Deleted: {escape(task.title)}")

    except (TaskNotFoundError, InvalidInputError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except TaskTrackerError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def edit(
    ref: str = typer.Argument(..., help="Task reference: position from 'ls' or id prefix"),
    new_title: str = typer.Argument(..., help="New task title"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="New due date (keeps the current one if omitted)"),
    no_due: bool = typer.Option(False, "--no-due", help="Remove the due date"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Change a task's title and due date.

    The existing reminder is left as it is.

    Example:
        tasktracker edit 1 "Buy oat milk"
        tasktracker edit 1 "Buy oat milk" --due "tomorrow 08:00"
        tasktracker edit 3f2a "Someday" --no-due
    """
    try:
        if due and no_due:
            raise InvalidInputError("Use either --due or --no-due, not both")

        repository = get_app().repository
        task = resolve_reference(ref, current_view(repository), repository)

        if no_due:
            new_due_date = None
        elif due:
            new_due_date = parse_due_date(due)
        else:
            new_due_date = task.due_date

        updated = repository.update(task.id, new_title, new_due_date)
        if updated is None:
            raise TaskNotFoundError(ref)

        if json_output:
            typer.echo(updated.to_json())
        elif raw:
            typer.echo(f"{updated.id}: {updated.title}")
        else:
            console.print(f"[green]✓ Updated:[/green] {escape(updated.title)}")

    except (TaskNotFoundError, InvalidInputError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except TaskTrackerError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def show(
    ref: str = typer.Argument(..., help="Task reference: position from 'ls' or id prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show full details for a task.

    Example:
        tasktracker show 1
    """
    try:
        repository = get_app().repository
        task = resolve_reference(ref, current_view(repository), repository)
    except TaskNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        typer.echo(task.to_json())
        return

    due_text = format_due_date(task.due_date) if task.due_date else "-"
    status = "done" if task.is_completed else "open"

    if raw:
        typer.echo(f"Task {task.id}")
        typer.echo(f"Title: {task.title}")
        typer.echo(f"Due: {due_text}")
        typer.echo(f"Status: {status}")
        if task.group_id:
            typer.echo(f"Group: {task.group_id}")
        return

    details = Text()
    details.append(f"Task {task.id}\n", style="bold cyan")
    details.append(f"{task.title}\n\n", style="bold white")

    details.append("Due: ", style="dim")
    if task.due_date:
        details.append(f"{due_text} ({format_relative_date(task.due_date)})\n", style="yellow")
    else:
        details.append("-\n", style="white")

    details.append("Status: ", style="dim")
    details.append(f"{status}\n", style="green" if task.is_completed else "yellow")

    if task.group_id:
        details.append("Group: ", style="dim")
        details.append(f"{task.group_id}\n", style="cyan")

    console.print(Panel(details, expand=False))
