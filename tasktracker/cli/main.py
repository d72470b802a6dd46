"""
FILE: tasktracker/cli/main.py
PURPOSE: Typer-based CLI for one-shot task management commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - get_app() -> AppContext (re-exported from bootstrap)
  - current_view(repository) -> List[Task]
  - version(), help(), repl() - System commands
  - add(), ls(), done(), rm(), edit(), show() - Task commands
  - remind() - Reminder delivery
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - tasktracker.bootstrap (repository wiring)
  - tasktracker.logging_setup (logging)
  - tasktracker.repl (interactive mode)
NOTES:
  - Listing commands support --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Position references always resolve against the sectioned view that
    'ls' prints
"""

import sys
from datetime import datetime
from typing import List, Optional

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console

from ..bootstrap import get_app
from ..config import get_settings
from ..core.categorizer import categorize, flatten
from ..core.models import Task
from ..logging_setup import setup_logging

# Typer app setup
app = typer.Typer(
    name="tasktracker",
    help="Personal task tracker with due dates and reminders",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "1.0.0"


def current_view(repository, now: Optional[datetime] = None) -> List[Task]:
    """Tasks in the order 'ls' displays them."""
    return flatten(categorize(repository.tasks, now))


@app.callback(invoke_without_command=True)
def default_command(ctx: typer.Context):
    """
    Default callback - sets up logging, then launches the REPL when no
    command is specified.
    """
    settings = get_settings()
    setup_logging(settings.log_file, console_level=settings.log_level)

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (
    # System commands
    version,
    help,
    repl,
    # Task commands
    add,
    ls,
    done,
    rm,
    edit,
    show,
    # Reminder commands
    remind,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
