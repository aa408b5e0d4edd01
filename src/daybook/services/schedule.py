"""Decide which calendar days a habit is due on."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol

from .dates import WEEKDAY_NAMES, enumerate_days, weekday_name

_VALID_TOKENS = frozenset(WEEKDAY_NAMES)


class Scheduled(Protocol):
    frequency_days: Iterable[str] | None


def normalize_recurrence(tokens: Iterable[str] | str | None) -> frozenset[str]:
    """Collapse raw recurrence data into a set of weekday tokens.

    Stored rows are only loosely validated, so anything that does not map to a
    weekday is dropped instead of raising. ``"monday"`` and ``" MON "`` both
    become ``"Mon"``. An empty result means "every day".
    """

    if not tokens:
        return frozenset()
    if isinstance(tokens, str):
        tokens = tokens.split(",")

    days: set[str] = set()
    for token in tokens:
        if not isinstance(token, str):
            continue
        candidate = token.strip()[:3].title()
        if candidate in _VALID_TOKENS:
            days.add(candidate)
    return frozenset(days)


def recurrence_of(habit: Scheduled) -> frozenset[str]:
    return normalize_recurrence(getattr(habit, "frequency_days", None))


def is_due_on(habit: Scheduled, day: date) -> bool:
    """Return True when the habit's recurrence selects ``day``."""

    recurrence = recurrence_of(habit)
    if not recurrence:
        return True
    return weekday_name(day) in recurrence


def due_days(habit: Scheduled, start: date, end: date) -> list[date]:
    """Dates in the inclusive range on which ``habit`` is due."""

    recurrence = recurrence_of(habit)
    days = enumerate_days(start, end)
    if not recurrence:
        return days
    return [day for day in days if weekday_name(day) in recurrence]


def ordered_recurrence(habit: Scheduled) -> list[str]:
    """Recurrence tokens in Mon..Sun order, for display and serialisation."""

    recurrence = recurrence_of(habit)
    return [name for name in WEEKDAY_NAMES if name in recurrence]


__all__ = ["due_days", "is_due_on", "normalize_recurrence", "ordered_recurrence", "recurrence_of"]
