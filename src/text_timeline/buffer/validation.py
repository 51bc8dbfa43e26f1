"""Guards that keep no-op edits out of the history."""

from __future__ import annotations


def is_recordable_insert(text: str) -> bool:
    return bool(text)


def is_recordable_delete(start: int, end: int, length: int) -> bool:
    """True when ``[start, end)`` would remove at least one character.

    Equivalent to ``start < end and start < length`` for non-negative
    offsets; a negative ``start`` counts from ``0`` as the operation does.
    """

    return max(start, 0) < min(end, length)
