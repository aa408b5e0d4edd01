"""Service module exports.

``dates``, ``schedule``, ``completions``, ``habits`` and ``calendar`` are pure
functions over snapshots; ``auth`` talks to the database.
"""

from . import activity, calendar, completions, dashboard, dates, habits, notes, schedule, todos
from .dates import InvalidRangeError

__all__ = [
    "InvalidRangeError",
    "activity",
    "calendar",
    "completions",
    "dashboard",
    "dates",
    "habits",
    "notes",
    "schedule",
    "todos",
]
