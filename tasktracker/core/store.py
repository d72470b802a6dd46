"""
FILE: tasktracker/core/store.py
PURPOSE: Local key-value storage and whole-collection task persistence
EXPORTS:
  - get_connection(db_path) -> Connection
  - init_database(conn) -> None
  - KeyValueStore (get/set/remove/keys over one SQLite table)
  - TaskStore (load/save of the full task list under one key)
DEPENDENCIES:
  - sqlite3 (stdlib)
  - json (stdlib)
  - logging (stdlib)
  - pathlib (stdlib)
  - tasktracker.config (default database location)
  - tasktracker.core.models (Task)
NOTES:
  - Database stored at ~/.tasktracker/tasktracker.db unless configured
  - Auto-creates directory and table on first connection
  - TaskStore never raises: a bad blob loads as [], a failed save is a no-op
  - No versioning and no migrations; a record missing any field fails the
    whole blob
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import get_settings
from .constants import TASKS_KEY
from .models import Task

logger = logging.getLogger(__name__)


# Database file location (overridable via TASKTRACKER_DATA_DIR / TASKTRACKER_DB_PATH)
DB_PATH = get_settings().db_path

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL
)
"""


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """
    Get SQLite connection to the key-value database.

    Creates the parent directory if it doesn't exist.
    Initializes the schema on first connection.
    """
    if db_path is None:
        db_path = DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    init_database(conn)
    return conn


def init_database(conn: sqlite3.Connection) -> None:
    """Create the kv table if missing. Safe to call multiple times."""
    conn.execute(SCHEMA_SQL)
    conn.commit()


class KeyValueStore:
    """
    Minimal persistent key-value store.

    Each call opens its own short-lived connection, so writes are committed
    before the call returns.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self._db_path = Path(db_path) if db_path is not None else None

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self._db_path)

    def get(self, key: str) -> Optional[bytes]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        value = row[0]
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def set(self, key: str, value: bytes) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, sqlite3.Binary(value)),
            )
            conn.commit()
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> List[str]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        finally:
            conn.close()
        return [row[0] for row in rows]


class TaskStore:
    """Persists the whole task collection as one JSON blob."""

    def __init__(self, kv: Optional[KeyValueStore] = None, key: str = TASKS_KEY):
        self.kv = kv if kv is not None else KeyValueStore()
        self.key = key

    def load(self) -> List[Task]:
        """
        Load all tasks.

        Returns:
            Tasks in saved order, or [] when nothing was saved yet or the
            saved blob cannot be read or decoded.
        """
        try:
            data = self.kv.get(self.key)
        except (sqlite3.Error, OSError):
            logger.warning("Could not read %r from the store", self.key, exc_info=True)
            return []

        if data is None:
            return []

        try:
            records = json.loads(data.decode("utf-8"))
            if not isinstance(records, list):
                raise TypeError(f"expected a list, got {type(records).__name__}")
            tasks = [Task.from_dict(record) for record in records]
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding undecodable task data under %r", self.key, exc_info=True)
            return []

        logger.debug("Loaded %d task(s)", len(tasks))
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        """Overwrite the stored collection. Failures are logged and dropped."""
        try:
            payload = json.dumps([task.to_dict() for task in tasks]).encode("utf-8")
        except (TypeError, ValueError):
            logger.error("Could not encode tasks, nothing saved", exc_info=True)
            return

        try:
            self.kv.set(self.key, payload)
        except (sqlite3.Error, OSError):
            logger.error("Could not write tasks to the store", exc_info=True)
            return

        logger.debug("Saved %d task(s)", len(tasks))
