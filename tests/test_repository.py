"""
Tests for TaskRepository.

Covers:
- add/toggle/delete/update persistence (every change saved before return)
- silent no-ops for unknown ids and empty titles
- delete_many position resolution against a sorted view
- change notifications
"""

from datetime import datetime, timedelta

from tasktracker.core.categorizer import categorize, flatten
from tasktracker.core.repository import TaskRepository
from tasktracker.core.scheduler import NotificationScheduler
from tasktracker.core.store import KeyValueStore, TaskStore


NOW = datetime(2026, 10, 16, 12, 0)


def reload(temp_db, center):
    """A second repository over the same database, as after a restart."""
    return TaskRepository(
        store=TaskStore(KeyValueStore(temp_db)),
        scheduler=NotificationScheduler(center),
    )


# --- add ---

def test_add_appends_and_persists(repo, temp_db, center):
    task = repo.add("Buy milk", due_date=NOW + timedelta(hours=6))

    assert repo.tasks == [task]
    assert task.is_completed is False
    assert reload(temp_db, center).tasks == [task]


def test_add_schedules_reminder_for_dated_task(repo, center):
    task = repo.add("Buy milk", due_date=datetime(2026, 10, 16, 18, 0))

    pending = center.pending()
    assert len(pending) == 1
    assert pending[0].identifier == task.id
    assert pending[0].body == "Don't forget to Buy milk!"


def test_add_undated_task_schedules_nothing(repo, center):
    repo.add("Read a book")

    assert center.pending() == []


def test_add_empty_title_is_a_no_op(repo, temp_db, center):
    assert repo.add("") is None

    assert repo.tasks == []
    assert reload(temp_db, center).tasks == []


def test_add_whitespace_title_is_accepted(repo):
    task = repo.add("   ")

    assert task is not None
    assert task.title == "   "


def test_add_keeps_group_and_clears_draft(repo):
    repo.draft.title = "Pay rent"
    repo.draft.group_id = "home"

    task = repo.submit_draft()

    assert task.group_id == "home"
    assert repo.draft.title == ""


def test_add_same_title_twice_gives_distinct_ids(repo):
    a = repo.add("Water plants")
    b = repo.add("Water plants")

    assert a.id != b.id
    assert len(repo.tasks) == 2


# --- toggle_completion ---

def test_toggle_flips_and_persists(repo, temp_db, center):
    task = repo.add("Buy milk")

    repo.toggle_completion(task.id)
    assert reload(temp_db, center).get(task.id).is_completed is True

    repo.toggle_completion(task.id)
    assert reload(temp_db, center).get(task.id).is_completed is False


def test_toggle_unknown_id_changes_nothing(repo):
    task = repo.add("Buy milk")

    assert repo.toggle_completion("no-such-id") is None
    assert repo.get(task.id).is_completed is False


def test_toggle_keeps_pending_reminder(repo, center):
    task = repo.add("Buy milk", due_date=NOW + timedelta(hours=1))

    repo.toggle_completion(task.id)

    assert [r.identifier for r in center.pending()] == [task.id]


# --- delete / delete_many ---

def test_delete_removes_and_persists(repo, temp_db, center):
    keep = repo.add("Keep")
    gone = repo.add("Gone")

    assert repo.delete(gone.id) is True

    assert reload(temp_db, center).tasks == [keep]


def test_delete_unknown_id_returns_false(repo):
    repo.add("Keep")

    assert repo.delete("missing") is False
    assert len(repo.tasks) == 1


def test_delete_many_uses_view_positions(repo):
    late = repo.add("Late", due_date=NOW + timedelta(days=3))
    soon = repo.add("Soon", due_date=NOW + timedelta(days=1))
    past = repo.add("Past", due_date=NOW - timedelta(days=2))

    view = flatten(categorize(repo.tasks, NOW))
    assert view == [soon, late, past]

    removed = repo.delete_many([0, 2], view)

    assert {t.id for t in removed} == {soon.id, past.id}
    assert repo.tasks == [late]


def test_delete_many_positions_do_not_shift(repo):
    tasks = [repo.add(f"Task {i}", due_date=NOW + timedelta(days=i + 1)) for i in range(4)]
    view = flatten(categorize(repo.tasks, NOW))

    repo.delete_many([1, 2], view)

    assert repo.tasks == [tasks[0], tasks[3]]


def test_delete_many_ignores_out_of_range(repo):
    task = repo.add("Only", due_date=NOW + timedelta(days=1))
    view = flatten(categorize(repo.tasks, NOW))

    assert repo.delete_many([5, -1], view) == []
    assert repo.tasks == [task]


def test_delete_many_commits_once(repo):
    for i in range(3):
        repo.add(f"Task {i}", due_date=NOW + timedelta(days=1))
    view = flatten(categorize(repo.tasks, NOW))
    events = []
    repo.subscribe(lambda r: events.append(len(r.tasks)))

    repo.delete_many([0, 1, 2], view)

    assert events == [0]


# --- update ---

def test_update_replaces_title_and_due_date(repo, temp_db, center):
    task = repo.add("Old", due_date=NOW)
    new_due = NOW + timedelta(days=2)

    repo.update(task.id, "New", new_due)

    stored = reload(temp_db, center).get(task.id)
    assert stored.title == "New"
    assert stored.due_date == new_due


def test_update_can_clear_due_date(repo):
    task = repo.add("Dated", due_date=NOW)

    repo.update(task.id, "Dated", None)

    assert repo.get(task.id).due_date is None


def test_update_does_not_rearm_reminder(repo, center):
    task = repo.add("Old", due_date=datetime(2026, 10, 16, 18, 0))

    repo.update(task.id, "New", datetime(2026, 10, 18, 8, 30))

    pending = center.pending()
    assert len(pending) == 1
    assert pending[0].trigger.day == 16
    assert pending[0].body == "Don't forget to Old!"


def test_update_accepts_empty_title(repo):
    task = repo.add("Something")

    repo.update(task.id, "", None)

    assert repo.get(task.id).title == ""


def test_update_unknown_id_returns_none(repo):
    assert repo.update("missing", "Title", None) is None


# --- lookups and events ---

def test_find_by_unique_prefix(repo):
    task = repo.add("Buy milk")

    assert repo.find(task.id[:6]) is task
    assert repo.find(task.id.upper()) is task
    assert repo.find("") is None


def test_subscribers_see_saved_state(repo, temp_db, center):
    seen = []

    def on_change(r):
        seen.append([t.title for t in reload(temp_db, center).tasks])

    repo.subscribe(on_change)
    repo.add("First")

    assert seen == [["First"]]


def test_unsubscribe_stops_events(repo):
    events = []
    unsubscribe = repo.subscribe(lambda r: events.append(1))

    repo.add("One")
    unsubscribe()
    repo.add("Two")

    assert events == [1]
