"""Per-day view over a habit's completion records."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, tzinfo
from typing import Any, Iterable, Optional

from .dates import Instant, day_key


def _completion_instant(record: Any) -> Instant:
    if isinstance(record, date):  # also covers datetime
        return record
    return record.completed_at


class CompletionIndex:
    """Set of calendar days on which a habit was completed.

    Several completions on the same day (double taps, sync races) collapse
    into one; the index answers "done or not" per day.
    """

    __slots__ = ("_days", "_count", "_tz")

    def __init__(self, day_keys: Iterable[str] = (), *, count: int | None = None, tz: tzinfo | None = None):
        self._days = frozenset(day_keys)
        self._count = len(self._days) if count is None else count
        self._tz = tz

    @classmethod
    def build(cls, completions: Iterable[Any], tz: tzinfo | None = None) -> "CompletionIndex":
        """Index completion records (objects with ``completed_at``) or bare instants."""

        keys: set[str] = set()
        count = 0
        for record in completions:
            keys.add(day_key(_completion_instant(record), tz))
            count += 1
        return cls(keys, count=count, tz=tz)

    def is_completed_on(self, day: Instant) -> bool:
        return day_key(day, self._tz) in self._days

    def all_completed_day_keys(self) -> frozenset[str]:
        return self._days

    @property
    def completion_count(self) -> int:
        """Number of raw records indexed, duplicates included."""
        return self._count

    @property
    def last_completed_on(self) -> Optional[date]:
        if not self._days:
            return None
        return date.fromisoformat(max(self._days))

    def __contains__(self, day: object) -> bool:
        if isinstance(day, str):
            return day in self._days
        if isinstance(day, date):
            return self.is_completed_on(day)
        return False

    def __len__(self) -> int:
        return len(self._days)

    def __repr__(self) -> str:
        return f"CompletionIndex(days={len(self._days)}, records={self._count})"


def build_indexes(completions: Iterable[Any], tz: tzinfo | None = None) -> dict[str, CompletionIndex]:
    """Group a flat list of completion records by ``habit_id`` and index each group."""

    grouped: dict[str, list[Any]] = defaultdict(list)
    for record in completions:
        grouped[record.habit_id].append(record)
    return {habit_id: CompletionIndex.build(records, tz) for habit_id, records in grouped.items()}


def completed_dates(index: CompletionIndex) -> list[date]:
    """Completed days in ascending order."""

    return [date.fromisoformat(key) for key in sorted(index.all_completed_day_keys())]


__all__ = ["CompletionIndex", "build_indexes", "completed_dates"]
