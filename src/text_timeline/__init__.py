"""In-memory text editor with bounded linear undo/redo."""

from .buffer import Editor, HistoryInfo

__all__ = [
    "Editor",
    "HistoryInfo",
    "adapters",
    "buffer",
    "config",
    "runtime",
]

__version__ = "0.1.0"
