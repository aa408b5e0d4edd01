"""SQLModel repository implementations."""

from .habit import SQLModelHabitRepository
from .note import SQLModelNoteRepository
from .reminder import SQLModelReminderRepository
from .reminder_space import SQLModelReminderSpaceRepository
from .todo import SQLModelTodoRepository

__all__ = [
    "SQLModelHabitRepository",
    "SQLModelNoteRepository",
    "SQLModelReminderRepository",
    "SQLModelReminderSpaceRepository",
    "SQLModelTodoRepository",
]
