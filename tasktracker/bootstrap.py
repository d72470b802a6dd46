"""
FILE: tasktracker/bootstrap.py
PURPOSE: Wire the store, notification center and repository together
EXPORTS:
  - AppContext (dataclass)
  - create_app(settings) -> AppContext
  - get_app() -> AppContext (process-wide instance)
  - reset_app() -> None
DEPENDENCIES:
  - tasktracker.config (Settings)
  - tasktracker.core (store, scheduler, repository)
NOTES:
  - Without settings, the store's module-level DB_PATH is used, which is
    what tests monkeypatch
  - Tasks and reminders share one key-value database
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .core.repository import TaskRepository
from .core.scheduler import NotificationScheduler, StoredNotificationCenter
from .core.store import KeyValueStore, TaskStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    repository: TaskRepository
    notifications: StoredNotificationCenter


def create_app(settings: Optional[Settings] = None) -> AppContext:
    kv = KeyValueStore(settings.db_path if settings else None)
    notifications = StoredNotificationCenter(kv)
    repository = TaskRepository(
        store=TaskStore(kv),
        scheduler=NotificationScheduler(notifications),
    )
    logger.debug("Task tracker ready with %d task(s)", len(repository.tasks))
    return AppContext(repository=repository, notifications=notifications)


_app_context: Optional[AppContext] = None


def get_app() -> AppContext:
    """Create the app on first use and reuse it for the rest of the process."""
    global _app_context
    if _app_context is None:
        _app_context = create_app()
    return _app_context


def reset_app() -> None:
    """Forget the shared app so the next get_app() reloads from disk."""
    global _app_context
    _app_context = None
