"""Shared pytest configuration and fixtures for tests."""

import io
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tasktracker import bootstrap
from tasktracker.core import store
from tasktracker.core.repository import TaskRepository
from tasktracker.core.scheduler import InMemoryNotificationCenter, NotificationScheduler
from tasktracker.core.store import KeyValueStore, TaskStore


@pytest.fixture(autouse=True)
def temp_db(monkeypatch, tmp_path):
    """Use temporary database for all tests."""
    db_path = tmp_path / "test_tasktracker.db"
    monkeypatch.setattr(store, "DB_PATH", db_path)
    bootstrap.reset_app()
    yield db_path
    bootstrap.reset_app()


@pytest.fixture
def center():
    return InMemoryNotificationCenter()


@pytest.fixture
def repo(temp_db, center):
    """Repository over the temp database with an in-memory notification center."""
    return TaskRepository(
        store=TaskStore(KeyValueStore(temp_db)),
        scheduler=NotificationScheduler(center),
    )


def _run_cli(*args, data_dir, input=None):
    env = dict(os.environ)
    env["TASKTRACKER_DATA_DIR"] = str(data_dir)
    env["TASKTRACKER_AUTO_LIST"] = "false"
    env.pop("TASKTRACKER_DB_PATH", None)
    return subprocess.run(
        [sys.executable, "-m", "tasktracker", *args],
        input=input,
        capture_output=True,
        text=True,
        encoding='utf-8',
        errors='replace',
        cwd=str(project_root),
        env=env,
    )


@pytest.fixture
def run_cli(tmp_path):
    """Run the CLI in a subprocess against a data directory under tmp_path."""
    data_dir = tmp_path / "data"

    def run(*args, input=None):
        return _run_cli(*args, data_dir=data_dir, input=input)

    return run
