"""Textual adapter that turns key presses into editor calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from text_timeline.buffer import Editor, EditorMirror, EditorSync


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[EditorMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter(EditorSync):
    """Owns a caret over an ``Editor`` and maps key names onto edits.

    The caret is a code-point offset. It follows inserts and deletes, and is
    clamped to the text length after undo/redo.
    """

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self.caret = editor.length()
        self._refresh_buffer()

    def pull_editor(self) -> EditorMirror:
        return self.editor.mirror(attributes={"caret": str(self.caret)})

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> str:
        """Dispatch one key event and return the resulting status."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        status = self._dispatch(key.upper(), text, normalized_modifiers)
        self.caret = max(0, min(self.caret, self.editor.length()))
        self.hooks.update_status(status)
        self._refresh_buffer()
        self._log_state("result <-", status=status)
        return status

    def _dispatch(
        self, key: str, text: Optional[str], modifiers: tuple[str, ...]
    ) -> str:
        if "CTRL" in modifiers:
            if key == "Z":
                return "undo" if self.editor.undo() else "undo:none"
            if key == "Y":
                return "redo" if self.editor.redo() else "redo:none"
            return "ignored"

        if key == "BACKSPACE":
            if self.caret == 0:
                return "noop"
            self.editor.delete(self.caret - 1, self.caret)
            self.caret -= 1
            return "delete"
        if key == "DELETE":
            before = self.editor.info().total
            self.editor.delete(self.caret, self.caret + 1)
            return "delete" if self.editor.info().total != before else "noop"
        if key == "ENTER":
            text = "\n"

        movement = self._caret_target(key)
        if movement is not None:
            self.caret = movement
            return "move"

        if text:
            self.editor.insert(self.caret, text)
            self.caret += len(text)
            return "insert"
        return "ignored"

    def _caret_target(self, key: str) -> Optional[int]:
        if key == "LEFT":
            return max(0, self.caret - 1)
        if key == "RIGHT":
            return min(self.editor.length(), self.caret + 1)
        if key == "HOME":
            return 0
        if key == "END":
            return self.editor.length()
        return None

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_editor())

    def _log_state(self, prefix: str, **fields: object) -> None:
        try:
            snapshot = self._state_metadata()
            snapshot.update({k: v for k, v in fields.items() if v is not None})
            parts = [prefix]
            for key, value in snapshot.items():
                parts.append(f"{key}={value!r}")
            self.hooks.log(" ".join(parts))
        except Exception:
            pass

    def _state_metadata(self) -> Dict[str, object]:
        info = self.editor.info()
        return {
            "editor": self.editor.name,
            "caret": self.caret,
            "position": info.position,
            "total": info.total,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
