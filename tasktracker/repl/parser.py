"""
FILE: tasktracker/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
  - typing (type hints)
NOTES:
  - Handles quoted strings: add "Buy milk" --due "today 18:00"
  - Flags take the next token as value unless it is another flag or the
    flag is in BOOLEAN_FLAGS
  - --flag=value works too
  - Case-insensitive command names
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

FlagValue = Union[str, bool]

# Flags that never take a value
BOOLEAN_FLAGS = {"all", "no-due", "pending", "yes"}


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "ls", "done")
        args: Positional arguments (e.g., ["Buy", "milk"])
        flags: Flag arguments as dict (e.g., {"due": "tomorrow", "no-due": True})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, FlagValue] = field(default_factory=dict)
    raw_input: str = ""

    def flag_value(self, name: str) -> Optional[str]:
        """Value of a flag that expects one, or None if absent or bare."""
        value = self.flags.get(name)
        return value if isinstance(value, str) else None

    def text(self) -> str:
        """Positional args joined back into one string (for unquoted titles)."""
        return " ".join(self.args)


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command("add Buy milk")
        ParseResult(command="add", args=["Buy", "milk"], flags={})

        >>> parse_command('add "Buy milk" --due "today 18:00"')
        ParseResult(command="add", args=["Buy milk"], flags={"due": "today 18:00"})

        >>> parse_command("edit 2 Call mum --no-due")
        ParseResult(command="edit", args=["2", "Call", "mum"], flags={"no-due": True})

    Notes:
        - Empty input returns command="" with no args/flags
        - An unclosed quote falls back to whitespace splitting
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()
    args: List[str] = []
    flags: Dict[str, FlagValue] = {}

    rest = tokens[1:]
    i = 0
    while i < len(rest):
        token = rest[i]

        if token.startswith("--") and len(token) > 2:
            name, sep, inline_value = token[2:].partition("=")
            if sep:
                flags[name] = inline_value
                i += 1
            elif name not in BOOLEAN_FLAGS and i + 1 < len(rest) and not rest[i + 1].startswith("--"):
                flags[name] = rest[i + 1]
                i += 2
            else:
                flags[name] = True
                i += 1
        else:
            args.append(token)
            i += 1

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)
