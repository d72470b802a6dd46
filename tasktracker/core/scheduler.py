"""
FILE: tasktracker/core/scheduler.py
PURPOSE: One-shot local reminders for tasks with a due date
EXPORTS:
  - CalendarTrigger (dataclass)
  - ReminderRequest (dataclass)
  - NotificationCenter (protocol)
  - InMemoryNotificationCenter
  - StoredNotificationCenter
  - NotificationScheduler
DEPENDENCIES:
  - dataclasses, datetime, json, logging, sqlite3 (stdlib)
  - tasktracker.core.store (KeyValueStore)
  - tasktracker.core.models (Task)
NOTES:
  - Reminder identifier == task id, so a second request for the same task
    replaces the pending one
  - Triggers have minute granularity and never repeat
  - Registration failures are logged, never raised or retried
  - Nothing is cancelled on delete/complete and edits do not re-arm
"""

import json
import logging
import sqlite3
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from .constants import REMINDER_BODY_TEMPLATE, REMINDER_TITLE, REMINDERS_KEY
from .exceptions import NotificationError
from .models import Task
from .store import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarTrigger:
    """Calendar components a reminder fires on (no seconds)."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    repeats: bool = False

    @classmethod
    def from_datetime(cls, when: datetime) -> "CalendarTrigger":
        return cls(
            year=when.year,
            month=when.month,
            day=when.day,
            hour=when.hour,
            minute=when.minute,
        )

    def fire_date(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute)


@dataclass(frozen=True)
class ReminderRequest:
    identifier: str
    title: str
    body: str
    trigger: CalendarTrigger
    sound: bool = True

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "ReminderRequest":
        return cls(
            identifier=data["identifier"],
            title=data["title"],
            body=data["body"],
            trigger=CalendarTrigger(**data["trigger"]),
            sound=data.get("sound", True),
        )


class NotificationCenter(Protocol):
    def add(self, request: ReminderRequest) -> None:
        """Register a request, replacing any pending one with the same identifier."""
        ...


class InMemoryNotificationCenter:
    """Session-only notification center."""

    def __init__(self):
        self._pending: Dict[str, ReminderRequest] = {}

    def add(self, request: ReminderRequest) -> None:
        self._pending[request.identifier] = request

    def pending(self) -> List[ReminderRequest]:
        return sorted(self._pending.values(), key=lambda r: r.trigger.fire_date())

    def deliver_due(self, now: Optional[datetime] = None) -> List[ReminderRequest]:
        now = now or datetime.now()
        due = [r for r in self.pending() if r.trigger.fire_date() <= now]
        for request in due:
            del self._pending[request.identifier]
        return due


class StoredNotificationCenter:
    """
    Notification center that keeps pending reminders in the key-value store.

    Pending requests live under one key as a JSON object keyed by identifier.
    Delivery is pull-based: the UI calls deliver_due() and shows what it gets.
    """

    def __init__(self, kv: Optional[KeyValueStore] = None, key: str = REMINDERS_KEY):
        self.kv = kv if kv is not None else KeyValueStore()
        self.key = key

    def _read(self) -> Dict[str, ReminderRequest]:
        data = self.kv.get(self.key)
        if data is None:
            return {}
        try:
            raw = json.loads(data.decode("utf-8"))
            return {ident: ReminderRequest.from_dict(item) for ident, item in raw.items()}
        except (ValueError, KeyError, TypeError, AttributeError):
            logger.warning("Discarding undecodable reminder data", exc_info=True)
            return {}

    def _write(self, pending: Dict[str, ReminderRequest]) -> None:
        payload = {ident: request.to_dict() for ident, request in pending.items()}
        self.kv.set(self.key, json.dumps(payload).encode("utf-8"))

    def add(self, request: ReminderRequest) -> None:
        try:
            pending = self._read()
            pending[request.identifier] = request
            self._write(pending)
        except (sqlite3.Error, OSError) as e:
            raise NotificationError(request.identifier, str(e)) from e

    def pending(self) -> List[ReminderRequest]:
        return sorted(self._read().values(), key=lambda r: r.trigger.fire_date())

    def deliver_due(self, now: Optional[datetime] = None) -> List[ReminderRequest]:
        """Remove and return every reminder whose trigger time has passed."""
        now = now or datetime.now()
        pending = self._read()
        due = sorted(
            (r for r in pending.values() if r.trigger.fire_date() <= now),
            key=lambda r: r.trigger.fire_date(),
        )
        if due:
            for request in due:
                del pending[request.identifier]
            self._write(pending)
            logger.debug("Delivered %d reminder(s)", len(due))
        return due


class NotificationScheduler:
    """Turns dated tasks into reminder requests."""

    def __init__(self, center: NotificationCenter):
        self.center = center

    def schedule(self, task: Task) -> Optional[ReminderRequest]:
        """
        Register a one-shot reminder at the task's due date.

        Returns:
            The request handed to the notification center, or None when the
            task has no due date or registration failed.
        """
        if task.due_date is None:
            return None

        request = ReminderRequest(
            identifier=task.id,
            title=REMINDER_TITLE,
            body=REMINDER_BODY_TEMPLATE.format(title=task.title),
            trigger=CalendarTrigger.from_datetime(task.due_date),
        )

        try:
            self.center.add(request)
        except Exception:
            logger.exception("Error scheduling notification for task %s", task.id)
            return None

        logger.info("Notification scheduled for task %s at %s", task.id, request.trigger.fire_date())
        return request
