"""
FILE: tasktracker/cli/commands/reminders.py
PURPOSE: Reminder delivery command (remind)
"""

import json

import typer
from rich.markup import escape

from ..main import app, console, get_app
from ...formatting import format_due_date


@app.command()
def remind(
    pending: bool = typer.Option(False, "--pending", help="List reminders that haven't fired yet"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show reminders whose time has come (each one is shown once).

    Run it from cron or a shell prompt hook to get nudged.

    Example:
        tasktracker remind
        tasktracker remind --pending
    """
    center = get_app().notifications
    requests = center.pending() if pending else center.deliver_due()

    if json_output:
        typer.echo(json.dumps([r.to_dict() for r in requests], indent=2))
        return

    if raw:
        for request in requests:
            typer.echo(f"{format_due_date(request.trigger.fire_date())}: {request.body}")
        return

    if not requests:
        console.print("[dim]No pending reminders[/dim]" if pending else "[dim]Nothing to remind you of[/dim]")
        return

    for request in requests:
        when = format_due_date(request.trigger.fire_date())
        if pending:
            console.print(f"[cyan]{when}[/cyan]  {escape(request.body)}")
        else:
            console.print(f"[bold yellow]🔔 {escape(request.title)}[/bold yellow] [dim]({when})[/dim]")
            console.print(f"   {escape(request.body)}")
