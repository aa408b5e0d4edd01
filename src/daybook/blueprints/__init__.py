"""Blueprint exports."""

from . import activity, auth, calendar, dashboard, habits, notes, reminders, todos

__all__ = [
    "activity",
    "auth",
    "calendar",
    "dashboard",
    "habits",
    "notes",
    "reminders",
    "todos",
]
