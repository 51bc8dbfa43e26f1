"""Adapter boundary types for syncing editors with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .undo import HistoryInfo


@dataclass(slots=True)
class EditorMirror:
    """Host-friendly snapshot describing the visible editor state."""

    text: str
    history: HistoryInfo
    last_operation: str
    attributes: dict[str, str] = field(default_factory=dict)


class EditorSync(Protocol):
    """How hosts pull editor state for rendering."""

    def pull_editor(self) -> EditorMirror:
        """Return the latest editor snapshot that the host should render."""
        ...
