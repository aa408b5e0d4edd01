"""To-do hierarchy and focus-timer helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional

from .dates import as_utc


@dataclass(slots=True)
class TodoNode:
    todo: Any
    children: list["TodoNode"] = field(default_factory=list)

    def to_dict(self, serialize) -> dict:
        payload = serialize(self.todo)
        payload["children"] = [child.to_dict(serialize) for child in self.children]
        return payload


def _in_cycle(todo_id: str, parents: dict[str, Optional[str]]) -> bool:
    seen = {todo_id}
    cursor = parents.get(todo_id)
    while cursor is not None and cursor in parents:
        if cursor == todo_id:
            return True
        if cursor in seen:
            # Loops further up the chain; this to-do only hangs off it.
            return False
        seen.add(cursor)
        cursor = parents.get(cursor)
    return False


def build_todo_tree(todos: Iterable[Any]) -> list[TodoNode]:
    """Nest to-dos under their parents, keeping input order at every level.

    A to-do whose parent is not in ``todos`` becomes a root. To-dos caught in a
    parent cycle are also promoted to roots so nothing disappears.
    """

    nodes: dict[str, TodoNode] = {}
    ordered: list[TodoNode] = []
    for todo in todos:
        node = TodoNode(todo)
        nodes[todo.id] = node
        ordered.append(node)

    parents = {node.todo.id: node.todo.parent_id for node in ordered}
    roots: list[TodoNode] = []
    for node in ordered:
        parent_id = node.todo.parent_id
        if parent_id is None or parent_id not in nodes or _in_cycle(node.todo.id, parents):
            roots.append(node)
            continue
        nodes[parent_id].children.append(node)
    return roots


def timer_remaining_seconds(timer: Any, now: datetime) -> int:
    """Seconds left on a to-do's focus timer at ``now``; never negative."""

    if timer.completed:
        return 0
    budget = (
        timer.paused_time_remaining
        if timer.paused_time_remaining is not None
        else timer.duration_minutes * 60
    )
    if timer.is_running and timer.start_time is not None:
        elapsed = (as_utc(now) - as_utc(timer.start_time)).total_seconds()
        return max(0, int(budget - elapsed))
    return max(0, int(budget))


TIMER_ACTIONS = ("start", "pause", "reset", "complete")


def timer_transition(
    timer: Any | None, action: str, now: datetime, *, duration_minutes: int | None = None
) -> dict:
    """Return the field changes that apply ``action`` to ``timer`` at ``now``.

    ``timer`` may be None for a to-do that has no timer yet. Starting a running
    timer changes nothing; starting a completed one begins a fresh run. A new
    ``duration_minutes`` replaces the budget of a timer that is not running.
    """

    if action not in TIMER_ACTIONS:
        raise ValueError(f"Unknown timer action: {action!r}")

    changes: dict = {}
    running = timer is not None and timer.is_running
    if duration_minutes is not None:
        changes["duration_minutes"] = duration_minutes
        if not running:
            # A stopped timer restarts from the new duration.
            changes["paused_time_remaining"] = None

    if action == "start":
        if running:
            return changes
        changes.update(start_time=now, is_running=True, completed=False)
        if timer is not None and (timer.completed or timer.paused_time_remaining == 0):
            changes["paused_time_remaining"] = None
    elif action == "pause":
        if timer is None or not timer.is_running:
            return changes
        changes.update(
            paused_time_remaining=timer_remaining_seconds(timer, now),
            start_time=None,
            is_running=False,
        )
    elif action == "reset":
        changes.update(start_time=None, paused_time_remaining=None, is_running=False, completed=False)
    else:
        changes.update(start_time=None, paused_time_remaining=0, is_running=False, completed=True)
    return changes


__all__ = ["TIMER_ACTIONS", "TodoNode", "build_todo_tree", "timer_remaining_seconds", "timer_transition"]
