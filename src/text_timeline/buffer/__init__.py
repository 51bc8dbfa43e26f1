"""Editor façade, text operations, and undo/redo data structures."""

from .editor import EditTransaction, Editor
from .operations import Delete, Insert, Operation, apply_operation, describe_operation
from .sync import EditorMirror, EditorSync
from .undo import HistoryInfo, Snapshot, UndoTimeline
from .validation import is_recordable_delete, is_recordable_insert

__all__ = [
    "Editor",
    "EditTransaction",
    "EditorMirror",
    "EditorSync",
    "Insert",
    "Delete",
    "Operation",
    "apply_operation",
    "describe_operation",
    "HistoryInfo",
    "Snapshot",
    "UndoTimeline",
    "is_recordable_delete",
    "is_recordable_insert",
]
