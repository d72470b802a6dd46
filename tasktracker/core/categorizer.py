"""
FILE: tasktracker/core/categorizer.py
PURPOSE: Derive the Today / Upcoming / Overdue sections from the task list
EXPORTS:
  - Section (dataclass)
  - is_today(due_date, now) -> bool
  - is_upcoming(due_date, now) -> bool
  - is_overdue(due_date, now) -> bool
  - due_date_sort_key(task) -> tuple
  - sort_by_due_date(tasks) -> List[Task]
  - categorize(tasks, now) -> List[Section]
  - flatten(sections) -> List[Task]
DEPENDENCIES:
  - dataclasses, datetime (stdlib)
  - tasktracker.core.models (Task)
NOTES:
  - Pure functions, recomputed on every change (no caching)
  - Comparisons are by calendar day in local time
  - Undated tasks belong to no section; generic sorts put them last
  - Empty sections are omitted
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from .constants import SECTION_OVERDUE, SECTION_TODAY, SECTION_UPCOMING
from .models import Task


@dataclass
class Section:
    """A titled, sorted group of tasks."""

    title: str
    tasks: List[Task] = field(default_factory=list)


def _today(now: Optional[datetime]):
    return (now or datetime.now()).date()


def is_today(due_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if due_date is None:
        return False
    return due_date.date() == _today(now)


def is_upcoming(due_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if due_date is None:
        return False
    return due_date.date() > _today(now)


def is_overdue(due_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if due_date is None:
        return False
    return due_date.date() < _today(now)


def due_date_sort_key(task: Task) -> Tuple[bool, datetime]:
    """Sort key with a missing due date acting as the latest possible date."""
    if task.due_date is None:
        return (True, datetime.max)
    return (False, task.due_date)


def sort_by_due_date(tasks: Iterable[Task]) -> List[Task]:
    """Ascending by due date, undated last, ties keep their order."""
    return sorted(tasks, key=due_date_sort_key)


_SECTION_RULES: List[Tuple[str, Callable[[Optional[datetime], Optional[datetime]], bool]]] = [
    (SECTION_TODAY, is_today),
    (SECTION_UPCOMING, is_upcoming),
    (SECTION_OVERDUE, is_overdue),
]


def categorize(tasks: Iterable[Task], now: Optional[datetime] = None) -> List[Section]:
    """
    Split tasks into display sections.

    Args:
        tasks: Live task collection, in any order
        now: Reference time (defaults to datetime.now())

    Returns:
        Non-empty sections in Today, Upcoming, Overdue order, each sorted by
        due date ascending
    """
    now = now or datetime.now()
    tasks = list(tasks)
    sections = []
    for title, predicate in _SECTION_RULES:
        members = [t for t in tasks if predicate(t.due_date, now)]
        if members:
            sections.append(Section(title=title, tasks=sort_by_due_date(members)))
    return sections


def flatten(sections: Iterable[Section]) -> List[Task]:
    """Tasks in the order they are displayed across sections."""
    return [task for section in sections for task in section.tasks]
