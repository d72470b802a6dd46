"""
FILE: tasktracker/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - TaskCompleter (Completer for command/arg completion)
  - create_completer() -> TaskCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - typing (type hints)
NOTES:
  - Suggests command names when at start of line
  - Suggests flags after commands (--due, --group, --no-due, --all, --pending)
  - Suggests due-date shortcuts after --due
  - Suggests task positions for commands expecting a reference, with the
    title as display meta
  - Case-insensitive matching
"""

from typing import Callable, Iterable, List, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.models import Task


class TaskCompleter(Completer):
    """
    Custom completer for the task REPL.

    Provides context-aware autocomplete:
    - Command names at start of input
    - Flags after command names
    - Due-date words after --due
    - Task positions for done/rm/edit/show
    """

    COMMANDS = [
        "add", "ls", "done", "rm", "edit", "show", "use", "remind",
        "help", "clear", "exit", "quit",
    ]

    COMMAND_FLAGS = {
        "add": ["--due", "--group"],
        "ls": ["--all"],
        "rm": ["--yes"],
        "edit": ["--due", "--no-due"],
        "remind": ["--pending"],
    }

    DUE_SHORTCUTS = ["today", "tomorrow", "yesterday"]

    REF_COMMANDS = {"done", "rm", "edit", "show"}

    def __init__(self, view_provider: Optional[Callable[[], List[Task]]] = None):
        # Called lazily so completions follow the live view
        self.view_provider = view_provider

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Logic:
            1. At start of input -> commands
            2. Word after --due -> due-date shortcuts
            3. Word starting with "--" -> flags for the command
            4. First argument of a reference command -> task positions
        """
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        trailing_space = text_before_cursor.endswith(" ")

        if not words or (not trailing_space and len(words) == 1):
            word = words[0] if words else ""
            yield from self._complete_commands(word)
            return

        command = words[0].lower()
        current = "" if trailing_space else words[-1]
        previous = words[-1] if trailing_space else (words[-2] if len(words) > 1 else "")

        if previous == "--due":
            yield from self._complete_values(current, self.DUE_SHORTCUTS)
            return

        if current.startswith("--"):
            yield from self._complete_values(current, self.COMMAND_FLAGS.get(command, []))
            return

        if command in self.REF_COMMANDS:
            at_first_arg = (len(words) == 1 and trailing_space) or (len(words) == 2 and not trailing_space)
            if at_first_arg:
                yield from self._complete_positions(current)

    def _complete_commands(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for cmd in self.COMMANDS:
            if cmd.startswith(word_lower):
                yield Completion(cmd, start_position=-len(word))

    def _complete_values(self, word: str, values: List[str]) -> Iterable[Completion]:
        word_lower = word.lower()
        for value in values:
            if value.startswith(word_lower):
                yield Completion(value, start_position=-len(word))

    def _complete_positions(self, word: str) -> Iterable[Completion]:
        if self.view_provider is None:
            return
        try:
            view = self.view_provider()
        except Exception:
            return
        for position, task in enumerate(view, start=1):
            label = str(position)
            if label.startswith(word):
                title = task.title if len(task.title) <= 40 else task.title[:37] + "..."
                yield Completion(label, start_position=-len(word), display_meta=title)


def create_completer() -> TaskCompleter:
    """Completer wired to the REPL's current view."""
    def current_view() -> List[Task]:
        from .main import repl_context
        return repl_context.view

    return TaskCompleter(view_provider=current_view)
