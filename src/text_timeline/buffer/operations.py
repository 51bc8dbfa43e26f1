"""Reversible text operations recorded by the undo timeline.

``Operation`` is a closed union of two frozen records. ``apply_operation``
dispatches on the ``kind`` tag and is pure: it never mutates the operation and
never raises, clamping out-of-range offsets instead. Offsets are ``str``
indices, so every code point counts as one position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Literal, Union


@dataclass(frozen=True, slots=True)
class Insert:
    position: int
    text: str
    kind: Literal["insert"] = field(default="insert", init=False)


@dataclass(frozen=True, slots=True)
class Delete:
    start: int
    end: int  # exclusive
    kind: Literal["delete"] = field(default="delete", init=False)


Operation = Union[Insert, Delete]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _apply_insert(op: Insert, current: str) -> str:
    if not op.text:
        return current
    position = _clamp(op.position, 0, len(current))
    return current[:position] + op.text + current[position:]


def _apply_delete(op: Delete, current: str) -> str:
    end = min(op.end, len(current))
    start = max(op.start, 0)
    if start >= end:
        return current
    return current[:start] + current[end:]


_APPLIERS: Dict[str, Callable[[Any, str], str]] = {
    "insert": _apply_insert,
    "delete": _apply_delete,
}


def apply_operation(op: Operation, current: str) -> str:
    """Return the text produced by applying ``op`` to ``current``."""

    applier = _APPLIERS.get(getattr(op, "kind", None))
    if applier is None:
        raise TypeError(f"Unsupported operation {op!r}")
    return applier(op, current)


def describe_operation(op: Operation | None) -> str:
    """Short label for status lines and log events."""

    if op is None:
        return "initial"
    if op.kind == "insert":
        return f"insert@{op.position} {op.text!r}"
    return f"delete[{op.start}:{op.end}]"


__all__ = [
    "Insert",
    "Delete",
    "Operation",
    "apply_operation",
    "describe_operation",
]
