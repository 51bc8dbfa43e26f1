"""Executable Textual app that hosts a text_timeline editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use text_timeline.adapters.textual.app"
    ) from exc

from text_timeline.buffer import Editor, EditorMirror
from text_timeline.config import EditorConfig, load_config
from text_timeline.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks


class TextTimelineApp(App[None]):
    """Single-buffer editor with undo (ctrl+z) and redo (ctrl+y)."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.config = config or load_config()
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("text_timeline.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self._logger.debug,
        )
        self.adapter = TextualEditorAdapter(Editor.from_config(self.config), hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: EditorMirror) -> None:
        if not self._buffer_widget:
            return
        caret = int(mirror.attributes.get("caret", len(mirror.text)))
        self._buffer_widget.update(mirror.text[:caret] + "|" + mirror.text[caret:])
        position, total, can_undo, can_redo = mirror.history
        self.sub_title = (
            f"{mirror.last_operation} | {position + 1}/{total}"
            f" undo={'y' if can_undo else 'n'} redo={'y' if can_redo else 'n'}"
        )

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key.startswith("ctrl+"):
            return (key.split("+", 1)[1], None, ("CTRL",))
        if event.is_printable and event.character:
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = load_config()
    parser = argparse.ArgumentParser(description="Run the text_timeline editor.")
    parser.add_argument(
        "--max-history",
        type=int,
        default=defaults.max_history,
        help="Number of undoable edits to retain (0 for the default of 100)",
    )
    parser.add_argument(
        "--name",
        default=defaults.name,
        help="Editor name attached to telemetry spans",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset to activate before starting the UI",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = EditorConfig(max_history=args.max_history, name=args.name)
    TextTimelineApp(config).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
