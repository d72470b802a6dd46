"""
FILE: tasktracker/core/__init__.py
PURPOSE: Task model, persistence, reminders and section logic (no UI)
"""
