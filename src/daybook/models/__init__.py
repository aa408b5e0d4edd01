"""SQLModel table exports."""

from .habit import Habit, HabitCompletion
from .note import Note
from .reminder import Reminder, ReminderSpace
from .todo import Todo, TodoNote, TodoTimer
from .user import User

__all__ = [
    "Habit",
    "HabitCompletion",
    "Note",
    "Reminder",
    "ReminderSpace",
    "Todo",
    "TodoNote",
    "TodoTimer",
    "User",
]
