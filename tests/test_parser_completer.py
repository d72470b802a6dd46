"""
Tests for REPL input parsing and autocomplete.
"""

from datetime import datetime, timedelta

from prompt_toolkit.document import Document

from tasktracker.core.models import Task
from tasktracker.repl.completer import TaskCompleter
from tasktracker.repl.parser import parse_command


def completions(completer, text):
    doc = Document(text, cursor_position=len(text))
    return [c.text for c in completer.get_completions(doc, None)]


# --- Parser ---

def test_empty_input():
    result = parse_command("   ")

    assert result.command == ""
    assert result.args == []


def test_command_is_lowercased_and_args_kept():
    result = parse_command("ADD Buy milk")

    assert result.command == "add"
    assert result.text() == "Buy milk"


def test_quoted_title_and_flag_value():
    result = parse_command('add "Buy milk" --due "today 18:00" --group home')

    assert result.args == ["Buy milk"]
    assert result.flag_value("due") == "today 18:00"
    assert result.flag_value("group") == "home"


def test_boolean_flag_does_not_swallow_title():
    result = parse_command("edit 2 --no-due Call mum")

    assert result.flags == {"no-due": True}
    assert result.args == ["2", "Call", "mum"]


def test_flag_with_equals():
    result = parse_command("add Pay rent --due=2026-11-01")

    assert result.flag_value("due") == "2026-11-01"
    assert result.text() == "Pay rent"


def test_bare_value_flag_has_no_value():
    result = parse_command("add Buy milk --due")

    assert "due" in result.flags
    assert result.flag_value("due") is None


def test_unclosed_quote_falls_back_to_split():
    result = parse_command('add "Buy milk')

    assert result.command == "add"
    assert result.args == ['"Buy', "milk"]


# --- Completer ---

def test_command_completion():
    completer = TaskCompleter()

    assert completions(completer, "re") == ["remind"]
    assert "done" in completions(completer, "")


def test_flag_completion_is_per_command():
    completer = TaskCompleter()

    assert completions(completer, "add Buy milk --") == ["--due", "--group"]
    assert completions(completer, "edit 1 New --n") == ["--no-due"]
    assert completions(completer, "ls --") == ["--all"]


def test_due_shortcuts_after_due_flag():
    completer = TaskCompleter()

    assert completions(completer, "add Buy milk --due to") == ["today", "tomorrow"]


def test_positions_suggested_for_reference_commands():
    now = datetime.now()
    view = [
        Task(title="Buy milk", due_date=now),
        Task(title="Call bank", due_date=now + timedelta(days=1)),
    ]
    completer = TaskCompleter(view_provider=lambda: view)
    doc = Document("done ", cursor_position=5)

    results = list(completer.get_completions(doc, None))

    assert [c.text for c in results] == ["1", "2"]
    assert results[0].display_meta_text == "Buy milk"


def test_no_positions_after_first_argument():
    completer = TaskCompleter(view_provider=lambda: [Task(title="x")])

    assert completions(completer, "edit 1 ") == []
