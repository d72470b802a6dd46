"""
FILE: tasktracker/repl/commands/system.py
PURPOSE: System command handlers for REPL
"""

from rich.markup import escape

from ..main import console, repl_context
from ..parser import ParseResult
from ...bootstrap import get_app
from ...formatting import format_due_date


def handle_use_command(result: ParseResult) -> None:
    """
    Handle 'use' command - set the group new tasks are tagged with.

    Usage:
        use             # Show current group
        use home        # Tag new tasks with "home"
        use none        # Stop tagging
    """
    if not result.args:
        if repl_context.current_group:
            console.print(f"Current group: [cyan]{escape(repl_context.current_group)}[/cyan]")
        else:
            console.print("[dim]No group set[/dim]")
        return

    group = " ".join(result.args)
    if group.lower() in ("none", "clear"):
        repl_context.current_group = None
        console.print("✓ Cleared group")
        return

    repl_context.current_group = group
    console.print(f"✓ New tasks go to [cyan]{escape(group)}[/cyan]")


def handle_remind_command(result: ParseResult) -> None:
    """
    Handle 'remind' command - list reminders that haven't fired yet.

    Usage:
        remind --pending

    Due reminders are shown automatically before each prompt; plain
    'remind' delivers any that came due since then.
    """
    center = get_app().notifications

    if result.flags.get("pending"):
        requests = center.pending()
        if not requests:
            console.print("[dim]No pending reminders[/dim]")
            return
        for request in requests:
            when = format_due_date(request.trigger.fire_date())
            console.print(f"[cyan]{when}[/cyan]  {escape(request.body)}")
        return

    requests = center.deliver_due()
    if not requests:
        console.print("[dim]Nothing to remind you of[/dim]")
        return
    for request in requests:
        when = format_due_date(request.trigger.fire_date())
        console.print(f"[bold yellow]🔔 {escape(request.title)}[/bold yellow] [dim]({when})[/dim]")
        console.print(f"   {escape(request.body)}")


def handle_help_command(result: ParseResult) -> None:
    """
    Handle 'help' command - show available commands.

    Args:
        result: Parsed command (unused)
    """
    help_text = """
[bold cyan]Available Commands:[/bold cyan]

  [cyan]add <title> \\[--due WHEN] \\[--group ID][/cyan]   Create a new task
  [cyan]ls \\[--all][/cyan]                 List Today / Upcoming / Overdue (--all: every task)
  [cyan]done \\[<ref>\\[,<ref>...]][/cyan]   Toggle completion (picker if no ref)
  [cyan]rm \\[<ref>\\[,<ref>...]][/cyan]     Delete task(s) (picker if no ref)
  [cyan]edit <ref> <title> \\[--due WHEN | --no-due][/cyan]   Change title and due date
  [cyan]show \\[<ref>][/cyan]              View full task details (picker if no ref)
  [cyan]use <group>[/cyan]               Tag new tasks with a group ('use none' to stop)
  [cyan]remind \\[--pending][/cyan]        Show due reminders, or the ones still waiting
  [cyan]help[/cyan]                      Show this help
  [cyan]clear[/cyan]                     Clear the screen
  [cyan]exit[/cyan] or [cyan]quit[/cyan]             Exit REPL

[bold cyan]References:[/bold cyan]

  A number is the position shown by 'ls'; anything else is matched
  against the start of a task id.

[bold cyan]Due dates:[/bold cyan]

  today, tomorrow, yesterday \\[HH:MM] | YYYY-MM-DD \\[HH:MM] | HH:MM
  Without a time, 09:00 is used.

[bold cyan]Examples:[/bold cyan]

  [dim]add Buy milk --due "today 18:00"
  add "Call the bank" --due tomorrow
  done 1,2
  edit 2 "Call the bank about fees" --no-due[/dim]
"""
    console.print(help_text)


def handle_clear_command(result: ParseResult) -> None:
    """
    Handle 'clear' command - clear the screen.

    Args:
        result: Parsed command (unused)
    """
    console.clear()
