"""Bounded linear undo/redo timeline over text snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Tuple

from text_timeline.runtime import telemetry

from .operations import Operation, apply_operation, describe_operation


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Full text after one operation, plus the operation that produced it."""

    text: str
    operation: Optional[Operation] = None


class HistoryInfo(NamedTuple):
    position: int
    total: int
    can_undo: bool
    can_redo: bool


class UndoTimeline:
    """Snapshot list with a movable cursor.

    ``position`` indexes the visible snapshot; ``-1`` is the empty state that
    precedes the first edit. Snapshots after ``position`` form the redo
    future and are dropped as soon as a new operation is applied. At most
    ``capacity + 1`` snapshots are retained; the oldest goes first.
    """

    def __init__(self, capacity: int, *, logger_name: str | None = None) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}.")
        self._capacity = capacity
        self._snapshots: List[Snapshot] = []
        self._position: int = -1
        self._logger_name = logger_name

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def position(self) -> int:
        return self._position

    def current_text(self) -> str:
        if self._position < 0:
            return ""
        return self._snapshots[self._position].text

    def current_snapshot(self) -> Optional[Snapshot]:
        if self._position < 0:
            return None
        return self._snapshots[self._position]

    def snapshots(self) -> Tuple[Snapshot, ...]:
        return tuple(self._snapshots)

    def apply(self, operation: Operation) -> str:
        new_text = apply_operation(operation, self.current_text())
        events: List[Tuple[str, Dict[str, object]]] = []

        if self._position < len(self._snapshots) - 1:
            dropped = len(self._snapshots) - self._position - 1
            self._snapshots = self._snapshots[: self._position + 1]
            events.append(("history.truncate", {"dropped": dropped}))

        self._snapshots.append(Snapshot(text=new_text, operation=operation))
        self._position = len(self._snapshots) - 1

        if self._position > self._capacity:
            evicted = self._snapshots.pop(0)
            self._position -= 1
            events.append(
                ("history.evict", {"operation": describe_operation(evicted.operation)})
            )

        for event, data in events:
            self._record(event, data)
        return new_text

    def can_undo(self) -> bool:
        return self._position >= 0

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self._position -= 1
        return True

    def can_redo(self) -> bool:
        return self._position < len(self._snapshots) - 1

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._position += 1
        return True

    def info(self) -> HistoryInfo:
        return HistoryInfo(
            position=self._position,
            total=len(self._snapshots),
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
        )

    def _record(self, event: str, data: Dict[str, object]) -> None:
        # state is final by now; sink failures stay here
        payload = {"position": self._position, "total": len(self._snapshots), **data}
        try:
            telemetry.record_event(event, data=payload, logger_name=self._logger_name)
        except Exception:
            pass


__all__ = ["HistoryInfo", "Snapshot", "UndoTimeline"]
