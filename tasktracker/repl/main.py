"""
FILE: tasktracker/repl/main.py
PURPOSE: Interactive REPL for task management with prompt-toolkit
EXPORTS:
  - REPLContext (session state)
  - repl_context (module-level instance)
  - main() - Entry point for REPL mode
  - run_repl() - Main REPL loop
  - execute_command(result) -> bool
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - tasktracker.bootstrap (shared repository and notification center)
  - tasktracker.core.categorizer (sections)
  - tasktracker.repl.parser (command parsing)
  - tasktracker.repl.completer (autocomplete)
NOTES:
  - The context subscribes to the repository and recomputes its sections
    after every change; position references use the last computed view
  - Due reminders are printed before each prompt
  - Bottom toolbar shows per-section counts
  - Ctrl+D or "exit"/"quit" to exit
"""

import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

# Fix Windows console encoding for Unicode characters
# Only wrap if not already wrapped to prevent issues
if sys.platform == "win32":
    import io
    if not isinstance(sys.stdout, io.TextIOWrapper) or sys.stdout.encoding != 'utf-8':
        try:
            sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
        except (AttributeError, ValueError):
            pass  # Already wrapped or unavailable

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.markup import escape

from ..bootstrap import get_app
from ..config import get_settings
from ..core.categorizer import Section, categorize, flatten
from ..core.constants import SECTION_ORDER
from ..core.models import Task
from ..formatting import format_due_date
from .completer import create_completer
from .parser import ParseResult, parse_command

logger = logging.getLogger(__name__)

# Rich console for formatted output
console = Console()


# --- REPL Context (Persistent State) ---


@dataclass
class REPLContext:
    """
    Persistent context for the REPL session.

    Attributes:
        current_group: Group id given to tasks added in this session (or None)
        sections: Sections computed after the last repository change
        view: The sections flattened; "#" positions index into this list
        auto_list: Re-render the sections after every change
    """
    current_group: Optional[str] = None
    sections: List[Section] = field(default_factory=list)
    view: List[Task] = field(default_factory=list)
    auto_list: bool = False
    _unsubscribe: Optional[Callable[[], None]] = None

    def get_prompt(self) -> str:
        """
        Generate prompt string based on current context.

        Returns:
            Prompt like "tasks> " or "tasks:[work]> "
        """
        if self.current_group:
            return f"tasks:[{self.current_group}]> "
        return "tasks> "

    def refresh(self, repository, now: Optional[datetime] = None) -> None:
        self.sections = categorize(repository.tasks, now)
        self.view = flatten(self.sections)

    def attach(self, repository) -> None:
        """Follow repository changes until detach() is called."""
        self.detach()
        self.refresh(repository)
        self._unsubscribe = repository.subscribe(self._on_change)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_change(self, repository) -> None:
        self.refresh(repository)
        if self.auto_list:
            from .display import display_sections
            console.print()
            display_sections(self.sections, console)

    def count(self, title: str) -> int:
        for section in self.sections:
            if section.title == title:
                return len(section.tasks)
        return 0


# Global REPL context (persists during session, resets on restart)
repl_context = REPLContext()


def format_prompt() -> HTML:
    """
    Create formatted prompt text with context and colors.

    Returns:
        HTML formatted prompt: "tasks> " or "tasks:[group]> " with a cyan group
    """
    if repl_context.current_group:
        return HTML(f"<b>tasks:[<cyan>{repl_context.current_group}</cyan>]&gt; </b>")
    return HTML("<b>tasks&gt; </b>")


def get_bottom_toolbar() -> HTML:
    """
    Create bottom toolbar showing per-section task counts.

    Returns:
        HTML formatted toolbar
    """
    counts = " | ".join(f"{title} {repl_context.count(title)}" for title in SECTION_ORDER)
    return HTML(f"<style bg='#444444' fg='#ffffff'> {counts} | 'help' for commands </style>")


def deliver_reminders(now: Optional[datetime] = None) -> None:
    """Print reminders whose time has come; each one is shown once."""
    try:
        requests = get_app().notifications.deliver_due(now)
    except Exception:
        logger.exception("Could not read pending reminders")
        return

    for request in requests:
        when = format_due_date(request.trigger.fire_date())
        console.print(f"[bold yellow]🔔 {escape(request.title)}[/bold yellow] [dim]({when})[/dim]")
        console.print(f"   {escape(request.body)}")


# Import command handlers from command modules
from .commands import (
    # Task handlers
    handle_add_command,
    handle_ls_command,
    handle_done_command,
    handle_rm_command,
    handle_edit_command,
    handle_show_command,
    # System handlers
    handle_use_command,
    handle_remind_command,
    handle_help_command,
    handle_clear_command,
)


def execute_command(result: ParseResult) -> bool:
    """
    Execute a parsed command.

    Args:
        result: Parsed command from parser

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command.lower()

    # Exit commands
    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    # Empty command (just Enter pressed)
    if not command:
        return True

    handlers = {
        "add": handle_add_command,
        "ls": handle_ls_command,
        "done": handle_done_command,
        "rm": handle_rm_command,
        "edit": handle_edit_command,
        "show": handle_show_command,
        "use": handle_use_command,
        "remind": handle_remind_command,
        "help": handle_help_command,
        "clear": handle_clear_command,
    }

    handler = handlers.get(command)
    if handler:
        handler(result)
        # Add whitespace after command output for readability
        console.print()
    else:
        console.print(f"[red]Unknown command:[/red] {escape(command)}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()

    return True


def run_repl() -> None:
    """
    Main REPL loop.

    Sets up prompt_toolkit session with:
    - Command history (in-memory, not persisted)
    - Autocomplete (commands, flags, task ids)
    - Bottom toolbar with section counts

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    """
    repository = get_app().repository
    repl_context.auto_list = get_settings().auto_list
    repl_context.attach(repository)

    # In piped/test environments, skip prompt_toolkit entirely
    has_tty = sys.stdin.isatty() and sys.stdout.isatty()

    session = None
    use_simple_input = not has_tty

    if has_tty:
        try:
            session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(),
                complete_while_typing=True,
                bottom_toolbar=get_bottom_toolbar,
            )
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")
            use_simple_input = True

    # Welcome message
    console.print("[bold cyan]Task Tracker REPL[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if use_simple_input:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    try:
        while True:
            try:
                deliver_reminders()

                if use_simple_input or session is None:
                    user_input = input(repl_context.get_prompt())
                else:
                    user_input = session.prompt(format_prompt())

                if not execute_command(parse_command(user_input)):
                    break

            except KeyboardInterrupt:
                console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
                continue
            except EOFError:
                console.print()
                console.print("[dim]Goodbye![/dim]")
                break
            except Exception as e:
                # Unexpected error - show but don't crash
                logger.exception("Command failed")
                console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
    finally:
        repl_context.detach()


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: tasktracker repl
    """
    try:
        run_repl()
    except Exception as e:
        console.print(f"[red]Fatal error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
