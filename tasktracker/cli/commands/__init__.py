"""
FILE: tasktracker/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .tasks import (
    add,
    ls,
    done,
    rm,
    edit,
    show,
)
from .reminders import (
    remind,
)
from .system import (
    version,
    help,
    repl,
)

__all__ = [
    "add",
    "ls",
    "done",
    "rm",
    "edit",
    "show",
    "remind",
    "version",
    "help",
    "repl",
]
