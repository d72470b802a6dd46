"""Personal task tracker: tasks with due dates, sections and local reminders."""
