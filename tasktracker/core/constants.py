"""
FILE: tasktracker/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - TASKS_KEY, REMINDERS_KEY: Key-value store keys
  - SECTION_TODAY, SECTION_UPCOMING, SECTION_OVERDUE, SECTION_ORDER
  - REMINDER_TITLE, REMINDER_BODY_TEMPLATE
  - DEFAULT_DUE_HOUR, DEFAULT_DUE_MINUTE
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
  - Store keys are part of the on-disk format, never rename them
"""

# Key-value store keys
TASKS_KEY = "tasks"
REMINDERS_KEY = "reminders"

# Section titles, in display order
SECTION_TODAY = "Today"
SECTION_UPCOMING = "Upcoming"
SECTION_OVERDUE = "Overdue"
SECTION_ORDER = (SECTION_TODAY, SECTION_UPCOMING, SECTION_OVERDUE)

# Reminder content
REMINDER_TITLE = "Task Reminder"
REMINDER_BODY_TEMPLATE = "Don't forget to {title}!"

# Time used when a due date is entered without one
DEFAULT_DUE_HOUR = 9
DEFAULT_DUE_MINUTE = 0
