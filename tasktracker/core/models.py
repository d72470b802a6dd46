"""
FILE: tasktracker/core/models.py
PURPOSE: Domain models for tasks and the pending add-task input
EXPORTS:
  - Task (dataclass)
  - TaskDraft (dataclass)
  - new_task_id() -> str
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - json (stdlib)
  - uuid (stdlib)
  - typing (stdlib)
NOTES:
  - Task has from_dict()/to_dict() for the persisted record format
  - Persisted keys are camelCase (id, title, dueDate, isCompleted, groupId)
  - Every key is required by from_dict(); a missing key raises KeyError
  - Due dates are naive local datetimes stored as ISO-8601 strings
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


def new_task_id() -> str:
    """Return a fresh random task identifier (UUID4, string form)."""
    return str(uuid.uuid4())


@dataclass
class Task:
    """A task with a title, optional due date and optional group tag."""

    title: str
    id: str = field(default_factory=new_task_id)
    due_date: Optional[datetime] = None
    is_completed: bool = False
    group_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Build a Task from its persisted record."""
        raw_due = data["dueDate"]
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            due_date=datetime.fromisoformat(raw_due) if raw_due is not None else None,
            is_completed=bool(data["isCompleted"]),
            group_id=data["groupId"],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted record."""
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "isCompleted": self.is_completed,
            "groupId": self.group_id,
        }

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class TaskDraft:
    """Pending values of the add-task input row."""

    title: str = ""
    due_date: Optional[datetime] = None
    group_id: Optional[str] = None
