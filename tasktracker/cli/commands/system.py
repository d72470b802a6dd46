"""
FILE: tasktracker/cli/commands/system.py
PURPOSE: System commands (version, help, repl)
"""

import typer

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console, __version__


@app.command()
def version():
    """Show Task Tracker version."""
    console.print(f"Task Tracker v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]Task Tracker[/bold cyan] - Tasks with due dates and reminders\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  tasktracker \\[command] \\[options]")
    console.print("  tasktracker                    [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("add", "Create a new task", 'tasktracker add "Title" \\[--due WHEN] \\[--group ID]'),
        ("ls", "List Today / Upcoming / Overdue", "tasktracker ls \\[--all]"),
        ("done", "Toggle task completion", "tasktracker done <ref(s)>"),
        ("rm", "Delete task(s)", "tasktracker rm <ref(s)> \\[--yes]"),
        ("edit", "Change title and due date", 'tasktracker edit <ref> "New title" \\[--due WHEN | --no-due]'),
        ("show", "View full task details", "tasktracker show <ref>"),
        ("remind", "Show reminders that are due", "tasktracker remind \\[--pending]"),
        ("repl", "Launch interactive REPL", "tasktracker repl"),
        ("version", "Show version", "tasktracker version"),
        ("help", "Show this help message", "tasktracker help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:8}[/green] {desc}")
        console.print(f"           [dim]{example}[/dim]\n")

    console.print("[bold]References:[/bold]")
    console.print("  A number is the position shown by 'ls'; anything else is matched")
    console.print("  against the start of a task id. Comma-separate several: 1,3\n")

    console.print("[bold]Due dates:[/bold]")
    console.print("  today, tomorrow, yesterday \\[HH:MM] | YYYY-MM-DD \\[HH:MM] | HH:MM")
    console.print("  Without a time, 09:00 is used.\n")

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--json[/yellow]    Output as JSON (for scripting)")
    console.print("  [yellow]--raw[/yellow]     Plain text output (no colors)")
    console.print("  [yellow]--help[/yellow]    Show detailed help for a command\n")


@app.command()
def repl():
    """Launch the interactive REPL."""
    from ...repl import main as repl_main
    try:
        repl_main()
    except Exception as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
