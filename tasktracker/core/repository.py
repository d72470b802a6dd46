"""
FILE: tasktracker/core/repository.py
PURPOSE: In-memory task collection with mutation operations and change events
EXPORTS:
  - TaskRepository
DEPENDENCIES:
  - logging (stdlib)
  - tasktracker.core.models (Task, TaskDraft)
  - tasktracker.core.store (TaskStore)
  - tasktracker.core.scheduler (NotificationScheduler)
NOTES:
  - The repository owns the authoritative list; the store is a mirror
  - Every state change is saved before the call returns, then published
  - Lookup misses are silent no-ops, never errors
  - Insertion order is the storage order; display order comes from the
    categorizer
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from .models import Task, TaskDraft
from .scheduler import NotificationScheduler
from .store import TaskStore

logger = logging.getLogger(__name__)

Subscriber = Callable[["TaskRepository"], None]


class TaskRepository:
    """Holds the live tasks and applies user actions to them."""

    def __init__(self, store: TaskStore, scheduler: NotificationScheduler):
        self.store = store
        self.scheduler = scheduler
        self.tasks: List[Task] = []
        self.draft = TaskDraft()
        self._subscribers: List[Subscriber] = []
        self.fetch_tasks()

    # --- Observers ---

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback run after every state change.

        Returns:
            A function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    def _commit(self) -> None:
        self.store.save(self.tasks)
        self._publish()

    # --- Queries ---

    def fetch_tasks(self) -> None:
        """Replace the in-memory list with what the store holds."""
        self.tasks = self.store.load()
        self._publish()

    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return None

    def get(self, task_id: str) -> Optional[Task]:
        index = self._index_of(task_id)
        return self.tasks[index] if index is not None else None

    def find(self, reference: str) -> Optional[Task]:
        """
        Look up a task by full id or by an unambiguous id prefix.

        Returns:
            The matching task, or None if nothing or more than one task matches
        """
        reference = reference.strip().lower()
        if not reference:
            return None
        exact = self.get(reference)
        if exact:
            return exact
        matches = [t for t in self.tasks if t.id.lower().startswith(reference)]
        return matches[0] if len(matches) == 1 else None

    # --- Mutations ---

    def add(
        self,
        title: str,
        due_date: Optional[datetime] = None,
        group_id: Optional[str] = None,
    ) -> Optional[Task]:
        """
        Create a task and append it.

        Args:
            title: Task title; an empty string makes this a no-op
            due_date: Optional due date, a reminder is scheduled for it
            group_id: Optional group tag, stored as given

        Returns:
            The new Task, or None when nothing was added
        """
        if not title:
            return None

        task = Task(title=title, due_date=due_date, group_id=group_id)
        self.tasks.append(task)
        self.scheduler.schedule(task)
        self.store.save(self.tasks)
        self.draft.title = ""
        logger.debug("Added task %s", task.id)
        self._publish()
        return task

    def submit_draft(self) -> Optional[Task]:
        """Add a task from the pending input values."""
        return self.add(self.draft.title, self.draft.due_date, self.draft.group_id)

    def toggle_completion(self, task_id: str) -> Optional[Task]:
        task = self.get(task_id)
        if task is None:
            return None
        task.is_completed = not task.is_completed
        logger.debug("Task %s completed=%s", task_id, task.is_completed)
        self._commit()
        return task

    def delete(self, task_id: str) -> bool:
        """Remove a task. Returns False if it was not there."""
        index = self._index_of(task_id)
        if index is None:
            return False
        del self.tasks[index]
        logger.debug("Deleted task %s", task_id)
        self._commit()
        return True

    def delete_many(self, positions: Iterable[int], view: Sequence[Task]) -> List[Task]:
        """
        Delete the tasks shown at the given positions of a displayed list.

        Args:
            positions: 0-based indexes into view; out-of-range ones are ignored
            view: The sorted/filtered list the positions refer to

        Returns:
            The tasks that were removed, in collection order

        Notes:
            Positions are turned into ids before anything is removed, so
            removal can't shift later positions onto the wrong task.
        """
        doomed = {view[p].id for p in set(positions) if 0 <= p < len(view)}
        if not doomed:
            return []

        removed = [t for t in self.tasks if t.id in doomed]
        if not removed:
            return []

        self.tasks = [t for t in self.tasks if t.id not in doomed]
        logger.debug("Deleted %d task(s)", len(removed))
        self._commit()
        return removed

    def update(
        self,
        task_id: str,
        new_title: str,
        new_due_date: Optional[datetime],
    ) -> Optional[Task]:
        """
        Replace a task's title and due date.

        Notes:
            The title is not validated and the reminder is not re-armed.
        """
        task = self.get(task_id)
        if task is None:
            return None
        task.title = new_title
        task.due_date = new_due_date
        logger.debug("Updated task %s", task_id)
        self._commit()
        return task
