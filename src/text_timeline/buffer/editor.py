"""Editor façade combining text edits with undo timeline bookkeeping."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from text_timeline.config import DEFAULT_EDITOR_NAME, EditorConfig, resolve_max_history
from text_timeline.runtime import telemetry

from .operations import Delete, Insert, Operation, describe_operation
from .sync import EditorMirror
from .undo import HistoryInfo, UndoTimeline
from .validation import is_recordable_delete, is_recordable_insert


class Editor:
    """In-memory text with bounded linear undo/redo.

    Edits never raise: out-of-range offsets are clamped and vacuous edits
    are dropped before they reach the timeline. Instances are not
    thread-safe; guard every call with one external lock when sharing.
    """

    def __init__(
        self,
        max_history: int = 0,
        *,
        name: str = DEFAULT_EDITOR_NAME,
        logger_name: Optional[str] = None,
    ) -> None:
        self.name = name
        self.history = UndoTimeline(
            resolve_max_history(max_history), logger_name=logger_name
        )
        self.logger_name = logger_name

    @classmethod
    def from_config(cls, config: EditorConfig) -> "Editor":
        return cls(config.max_history, name=config.name)

    def text(self) -> str:
        return self.history.current_text()

    def length(self) -> int:
        return len(self.text())

    def insert(self, position: int, text: str) -> None:
        if not is_recordable_insert(text):
            return
        with EditTransaction(self, "insert") as tx:
            tx.commit(Insert(position=position, text=text))

    def delete(self, start: int, end: int) -> None:
        if not is_recordable_delete(start, end, self.length()):
            return
        with EditTransaction(self, "delete") as tx:
            tx.commit(Delete(start=start, end=end))

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def undo(self) -> bool:
        return self.history.undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def redo(self) -> bool:
        return self.history.redo()

    def info(self) -> HistoryInfo:
        return self.history.info()

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> EditorMirror:
        snapshot = self.history.current_snapshot()
        return EditorMirror(
            text=self.text(),
            history=self.info(),
            last_operation=describe_operation(snapshot.operation if snapshot else None),
            attributes=dict(attributes or {}),
        )


class EditTransaction(AbstractContextManager["EditTransaction"]):
    """Profiles one edit and commits its operation to the timeline."""

    def __init__(self, editor: Editor, label: str) -> None:
        self.editor = editor
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._span: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "EditTransaction":
        self._span_cm = telemetry.span(
            name=f"editor::{self.label}",
            logger_name=self.editor.logger_name,
            component=True,
            metadata={"editor": self.editor.name},
        )
        self._span = self._span_cm.__enter__()
        return self

    def commit(self, operation: Operation) -> str:
        text = self.editor.history.apply(operation)
        if self._span is not None:
            self._span.add_metadata("operation", describe_operation(operation))
            self._span.add_metadata("length", len(text))
        return text

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Editor", "EditTransaction"]
