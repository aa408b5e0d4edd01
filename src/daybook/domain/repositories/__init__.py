"""Repository protocols the services and blueprints depend on."""

from .habit import HabitRepository
from .note import NoteRepository
from .reminder import ReminderRepository, ReminderSpaceRepository
from .todo import TodoRepository

__all__ = [
    "HabitRepository",
    "NoteRepository",
    "ReminderRepository",
    "ReminderSpaceRepository",
    "TodoRepository",
]
