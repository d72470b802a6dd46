"""
FILE: tasktracker/formatting.py
PURPOSE: Shared formatting and input parsing for CLI and REPL
EXPORTS:
  - TaskFormatter: Class for formatting tasks and sections
  - format_due_date(dt) -> str
  - format_relative_date(dt, now) -> str
  - parse_due_date(text, now) -> datetime
  - parse_task_refs(ref_string) -> List[str]
  - resolve_reference(ref, view, repository) -> Task
DEPENDENCIES:
  - rich (for table formatting)
  - json, re, datetime (stdlib)
  - tasktracker.core (models, categorizer, exceptions)
NOTES:
  - Positions shown to users are 1-based and run across all sections
  - A reference is a position when it's all digits and in range,
    otherwise an id prefix
  - Due dates typed without a time default to 09:00
"""

import json
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from rich.markup import escape
from rich.table import Table

from .core.categorizer import Section
from .core.constants import DEFAULT_DUE_HOUR, DEFAULT_DUE_MINUTE
from .core.exceptions import InvalidInputError, TaskNotFoundError
from .core.models import Task


SECTION_STYLES = {
    "Today": "bright_magenta",
    "Upcoming": "blue",
    "Overdue": "red",
}


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def create_table(
        tasks: Sequence[Task],
        title: str = "Tasks",
        start: int = 1,
        now: Optional[datetime] = None,
        style: str = "bold cyan",
        labels: Optional[Sequence[str]] = None,
    ) -> Table:
        """
        Create Rich table for tasks.

        Args:
            tasks: Tasks in display order
            title: Table title
            start: Position number of the first row
            now: Reference time for relative due dates
            style: Title style
            labels: Explicit "#" column values (overrides start)

        Returns:
            Rich Table object ready for display
        """
        if labels is None:
            labels = [str(n) for n in range(start, start + len(tasks))]

        table = Table(title=title, title_style=style, title_justify="left", header_style="bold cyan")
        table.add_column("#", style="cyan", width=4, no_wrap=True)
        table.add_column("", width=3, no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Due", style="yellow")
        table.add_column("ID", style="dim", width=8, no_wrap=True)

        for label, task in zip(labels, tasks):
            if task.is_completed:
                box = "[green]☑[/green]"
                title_cell = f"[dim strike]{escape(task.title)}[/dim strike]"
            else:
                box = "☐"
                title_cell = escape(task.title)

            if task.due_date:
                due_cell = (
                    f"{format_due_date(task.due_date)} "
                    f"[dim]({format_relative_date(task.due_date, now)})[/dim]"
                )
            else:
                due_cell = "-"

            table.add_row(label, box, title_cell, due_cell, task.id[:8])

        return table

    @staticmethod
    def create_section_tables(sections: Sequence[Section], now: Optional[datetime] = None) -> List[Table]:
        """One table per section, positions continuing from one to the next."""
        tables = []
        start = 1
        for section in sections:
            style = f"bold {SECTION_STYLES.get(section.title, 'cyan')}"
            tables.append(
                TaskFormatter.create_table(section.tasks, title=section.title, start=start, now=now, style=style)
            )
            start += len(section.tasks)
        return tables

    @staticmethod
    def to_json_dict(task: Task) -> Dict[str, Any]:
        """
        Convert single task to JSON-serializable dict.

        Args:
            task: Task to serialize

        Returns:
            Dictionary with task data
        """
        return task.to_dict()

    @staticmethod
    def to_json_array(tasks: Sequence[Task]) -> str:
        """Convert task list to JSON array string."""
        return json.dumps([TaskFormatter.to_json_dict(t) for t in tasks], indent=2)

    @staticmethod
    def sections_to_json(sections: Sequence[Section]) -> str:
        """Sections as a JSON array of {"section", "tasks"} objects."""
        data = [
            {
                "section": section.title,
                "tasks": [TaskFormatter.to_json_dict(t) for t in section.tasks],
            }
            for section in sections
        ]
        return json.dumps(data, indent=2)

    @staticmethod
    def to_raw_lines(tasks: Sequence[Task], start: int = 1) -> List[str]:
        """
        Convert task list to plain text lines.

        Args:
            tasks: Tasks in display order
            start: Position number of the first line

        Returns:
            List of formatted strings, one per task
        """
        lines = []
        for position, task in enumerate(tasks, start=start):
            marker = "x" if task.is_completed else " "
            due = f" ({format_due_date(task.due_date)})" if task.due_date else ""
            lines.append(f"{position}: [{marker}] {task.title}{due}")
        return lines

    @staticmethod
    def sections_to_raw_lines(sections: Sequence[Section]) -> List[str]:
        lines = []
        start = 1
        for section in sections:
            lines.append(f"# {section.title}")
            lines.extend(TaskFormatter.to_raw_lines(section.tasks, start=start))
            start += len(section.tasks)
        return lines


def format_due_date(dt: datetime) -> str:
    """Medium date plus short time, e.g. "Oct 16, 2026 at 6:00 PM"."""
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.strftime('%b')} {dt.day}, {dt.year} at {hour}:{dt.minute:02d} {meridiem}"


def format_relative_date(dt: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Convert a datetime to human-readable relative time.

    Returns:
        - "-" for None
        - "in a moment" / "just now" (under a minute either way)
        - "in 5 minutes" / "5 minutes ago"
        - "in 3 hours" / "3 hours ago"
        - "tomorrow" / "yesterday" (adjacent calendar day)
        - "in 4 days" / "4 days ago" (under a week)
        - "Jan 15" (same year) or "Jan 15, 2027"
    """
    if dt is None:
        return "-"

    now = now or datetime.now()
    seconds = (dt - now).total_seconds()
    day_delta = (dt.date() - now.date()).days

    if abs(seconds) < 60:
        return "in a moment" if seconds >= 0 else "just now"

    if abs(seconds) < 3600:
        minutes = int(abs(seconds) / 60)
        unit = f"{minutes} minute{'s' if minutes != 1 else ''}"
        return f"in {unit}" if seconds > 0 else f"{unit} ago"

    if day_delta == 0:
        hours = int(abs(seconds) / 3600)
        unit = f"{hours} hour{'s' if hours != 1 else ''}"
        return f"in {unit}" if seconds > 0 else f"{unit} ago"

    if day_delta == 1:
        return "tomorrow"
    if day_delta == -1:
        return "yesterday"

    if abs(day_delta) < 7:
        return f"in {day_delta} days" if day_delta > 0 else f"{-day_delta} days ago"

    if dt.year == now.year:
        return f"{dt.strftime('%b')} {dt.day}"
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_RELATIVE_DAYS = {"today": 0, "tomorrow": 1, "yesterday": -1}


def _parse_time(text: str) -> Optional[tuple]:
    match = _TIME_RE.match(text)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def parse_due_date(text: str, now: Optional[datetime] = None) -> datetime:
    """
    Parse a due date typed by the user.

    Accepts:
        "today", "tomorrow", "yesterday", optionally followed by "HH:MM"
        "YYYY-MM-DD" or "YYYY-MM-DD HH:MM" (also with a "T" separator)
        "HH:MM" (today at that time)

    Raises:
        InvalidInputError: If the text matches none of the formats
    """
    now = now or datetime.now()
    cleaned = " ".join(text.strip().lower().split())
    if not cleaned:
        raise InvalidInputError("Due date cannot be empty")

    parts = cleaned.split(" ")
    hour, minute = DEFAULT_DUE_HOUR, DEFAULT_DUE_MINUTE

    if parts[0] in _RELATIVE_DAYS and len(parts) <= 2:
        if len(parts) == 2:
            parsed = _parse_time(parts[1])
            if parsed is None:
                raise InvalidInputError(f"Invalid time '{parts[1]}'. Use HH:MM")
            hour, minute = parsed
        day = now.date() + timedelta(days=_RELATIVE_DAYS[parts[0]])
        return datetime(day.year, day.month, day.day, hour, minute)

    if len(parts) == 1:
        parsed = _parse_time(parts[0])
        if parsed is not None:
            hour, minute = parsed
            return datetime(now.year, now.month, now.day, hour, minute)

    try:
        parsed_dt = datetime.fromisoformat(cleaned.replace(" ", "T", 1).upper())
    except ValueError:
        raise InvalidInputError(
            f"Invalid due date '{text}'. Use YYYY-MM-DD [HH:MM], HH:MM, today, tomorrow or yesterday"
        )

    if "t" not in cleaned and " " not in cleaned:
        return parsed_dt.replace(hour=hour, minute=minute, second=0, microsecond=0)
    return parsed_dt.replace(second=0, microsecond=0, tzinfo=None)


def parse_task_refs(ref_string: str) -> List[str]:
    """
    Split comma-separated task references.

    Args:
        ref_string: e.g. "1,3" or "1a2b,3"

    Returns:
        Non-empty, stripped references in the given order
    """
    return [ref.strip() for ref in ref_string.split(",") if ref.strip()]


def resolve_reference(ref: str, view: Sequence[Task], repository) -> Task:
    """
    Resolve one user reference to a task.

    Args:
        ref: 1-based position in view, or an id prefix
        view: Tasks in the order they were displayed
        repository: TaskRepository used for id lookups

    Raises:
        TaskNotFoundError: If the reference matches nothing (or is ambiguous)
    """
    if ref.isdigit() and 1 <= int(ref) <= len(view):
        return view[int(ref) - 1]
    task = repository.find(ref)
    if task is None:
        raise TaskNotFoundError(ref)
    return task
