"""
Tests for the Today / Upcoming / Overdue sections.
"""

from datetime import datetime, timedelta

from tasktracker.core.categorizer import (
    categorize,
    flatten,
    is_overdue,
    is_today,
    is_upcoming,
    sort_by_due_date,
)
from tasktracker.core.models import Task


NOW = datetime(2026, 10, 16, 12, 0)


def titles(section):
    return [t.title for t in section.tasks]


def test_day_predicates_compare_calendar_days():
    just_after_midnight = datetime(2026, 10, 17, 0, 1)
    earlier_today = datetime(2026, 10, 16, 0, 5)

    assert is_upcoming(just_after_midnight, NOW)
    assert is_today(earlier_today, NOW)
    assert not is_overdue(earlier_today, NOW)
    assert is_overdue(datetime(2026, 10, 15, 23, 59), NOW)


def test_predicates_reject_missing_due_date():
    assert not is_today(None, NOW)
    assert not is_upcoming(None, NOW)
    assert not is_overdue(None, NOW)


def test_sections_partition_dated_tasks():
    milk = Task(title="Buy milk", due_date=datetime(2026, 10, 16, 18, 0))
    bank = Task(title="Call bank", due_date=datetime(2026, 10, 17, 9, 0))
    rent = Task(title="Pay rent", due_date=datetime(2026, 10, 14, 9, 0))
    book = Task(title="Read a book")

    sections = categorize([book, rent, bank, milk], NOW)

    assert [s.title for s in sections] == ["Today", "Upcoming", "Overdue"]
    assert titles(sections[0]) == ["Buy milk"]
    assert titles(sections[1]) == ["Call bank"]
    assert titles(sections[2]) == ["Pay rent"]
    assert book not in flatten(sections)


def test_completed_tasks_stay_in_their_section():
    done = Task(title="Done already", due_date=NOW - timedelta(days=1), is_completed=True)

    sections = categorize([done], NOW)

    assert [s.title for s in sections] == ["Overdue"]
    assert sections[0].tasks == [done]


def test_empty_sections_are_omitted():
    sections = categorize([Task(title="Someday")], NOW)

    assert sections == []


def test_only_upcoming_section():
    task = Task(title="Next week", due_date=NOW + timedelta(days=7))

    sections = categorize([task], NOW)

    assert [s.title for s in sections] == ["Upcoming"]


def test_sections_sorted_ascending():
    late = Task(title="Late", due_date=datetime(2026, 10, 16, 20, 0))
    early = Task(title="Early", due_date=datetime(2026, 10, 16, 7, 0))
    older = Task(title="Older", due_date=datetime(2026, 10, 1, 9, 0))
    newer = Task(title="Newer", due_date=datetime(2026, 10, 10, 9, 0))

    sections = categorize([late, newer, early, older], NOW)

    assert titles(sections[0]) == ["Early", "Late"]
    # Overdue is ascending as well: oldest first
    assert titles(sections[1]) == ["Older", "Newer"]


def test_generic_sort_puts_undated_last():
    undated = Task(title="Someday")
    dated = Task(title="Friday", due_date=datetime(2026, 10, 23, 9, 0))
    older = Task(title="Past", due_date=datetime(2026, 10, 1, 9, 0))

    assert [t.title for t in sort_by_due_date([undated, dated, older])] == ["Past", "Friday", "Someday"]


def test_flatten_follows_section_order():
    today = Task(title="Today", due_date=NOW)
    upcoming = Task(title="Upcoming", due_date=NOW + timedelta(days=1))
    overdue = Task(title="Overdue", due_date=NOW - timedelta(days=1))

    view = flatten(categorize([overdue, upcoming, today], NOW))

    assert [t.title for t in view] == ["Today", "Upcoming", "Overdue"]


def test_completed_task_then_deleted_section_disappears(repo):
    task = repo.add("Buy milk", due_date=datetime(2026, 10, 16, 18, 0))

    repo.toggle_completion(task.id)
    sections = categorize(repo.tasks, NOW)
    assert [s.title for s in sections] == ["Today"]
    assert sections[0].tasks[0].is_completed is True

    repo.delete(task.id)
    assert categorize(repo.tasks, NOW) == []


def test_same_day_tasks_ordered_by_time(repo):
    repo.add("Nine", due_date=datetime(2026, 10, 17, 9, 0))
    repo.add("Eight", due_date=datetime(2026, 10, 17, 8, 0))

    sections = categorize(repo.tasks, NOW)

    assert titles(sections[0]) == ["Eight", "Nine"]
