"""
FILE: tasktracker/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TaskTrackerError (base exception)
  - TaskNotFoundError
  - InvalidInputError
  - NotificationError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TaskTrackerError for easy catching
  - The repository never raises these for lookup misses, it no-ops instead
  - UI layers raise/catch TaskNotFoundError and InvalidInputError while
    resolving what the user typed
  - NotificationError is raised by notification centers and swallowed
    (logged) by the scheduler
"""


class TaskTrackerError(Exception):
    """Base exception for all task tracker errors."""
    pass


class TaskNotFoundError(TaskTrackerError):
    """No task matches the given reference."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Task {reference} not found")


class InvalidInputError(TaskTrackerError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class NotificationError(TaskTrackerError):
    """A reminder could not be registered."""

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        super().__init__(f"Could not register reminder {identifier}: {reason}")
