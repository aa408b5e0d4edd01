"""Note text statistics."""

from __future__ import annotations

from typing import Optional


def text_stats(content: Optional[str]) -> tuple[int, int]:
    """Return ``(word_count, character_count)`` for a note body."""

    if not content:
        return 0, 0
    return len(content.split()), len(content)


__all__ = ["text_stats"]
