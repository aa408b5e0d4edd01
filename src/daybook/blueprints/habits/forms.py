"""Habit form definitions."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...services.dates import WEEKDAY_NAMES
from ...services.schedule import normalize_recurrence


class HabitFrequency(str, Enum):
    """Supported cadence labels for habits."""

    DAILY = "daily"
    WEEKLY = "weekly"


class HabitType(str, Enum):
    BUILDER = "builder"
    QUITTER = "quitter"


class HabitForm(BaseModel):
    """Form model for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(description="Short label for the habit", max_length=100)
    description: Optional[str] = Field(default=None, max_length=400)
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY)
    frequency_days: list[str] = Field(
        default_factory=list, description="Weekday tokens such as Mon or Thu; empty means every day"
    )
    habit_type: HabitType = Field(default=HabitType.BUILDER)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        """Ensure the habit title is present."""

        if not value or not value.strip():
            raise ValueError("Please provide a habit title.")
        return value

    @field_validator("frequency_days", mode="before")
    @classmethod
    def clean_days(cls, value: Any) -> list[str]:
        """Accept a list or comma-separated string and keep the valid weekday tokens."""

        days = normalize_recurrence(value)
        return [name for name in WEEKDAY_NAMES if name in days]


class HabitUpdateForm(HabitForm):
    """Partial update; only the fields present in the payload are applied."""

    title: Optional[str] = Field(default=None, max_length=100)  # type: ignore[assignment]
    frequency: Optional[HabitFrequency] = None  # type: ignore[assignment]
    habit_type: Optional[HabitType] = None  # type: ignore[assignment]
    is_active: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Please provide a habit title.")
        return value

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True, mode="json")
        # Only the description may be cleared; null elsewhere means "leave as is".
        return {key: value for key, value in data.items() if value is not None or key == "description"}


class ToggleForm(BaseModel):
    day: Optional[dt.date] = Field(default=None, alias="date")


__all__ = ["HabitForm", "HabitFrequency", "HabitType", "HabitUpdateForm", "ToggleForm"]
