from __future__ import annotations

from typing import List

import pytest

from text_timeline import Editor
from text_timeline.buffer import Delete, Insert
from text_timeline.config import DEFAULT_MAX_HISTORY, EditorConfig
from text_timeline.runtime import telemetry


def make_editor(*edits: str, max_history: int = 15) -> Editor:
    editor = Editor(max_history)
    for text in edits:
        editor.insert(editor.length(), text)
    return editor


def test_hello_world_session() -> None:
    editor = Editor(15)

    editor.insert(0, "Hello")
    assert editor.text() == "Hello"
    editor.insert(5, " World")
    assert editor.text() == "Hello World"
    editor.insert(11, "!")
    assert editor.text() == "Hello World!"
    editor.delete(5, 11)
    assert editor.text() == "Hello!"
    editor.insert(5, " Go")
    assert editor.text() == "Hello Go!"

    seen: List[str] = []
    while editor.can_undo():
        assert editor.undo() is True
        seen.append(editor.text())

    assert seen == ["Hello!", "Hello World!", "Hello World", "Hello", ""]
    assert editor.undo() is False
    assert editor.text() == ""


def test_redo_then_new_edit_truncates() -> None:
    editor = Editor(15)
    editor.insert(0, "Hello")
    editor.insert(5, " World")
    editor.insert(11, "!")
    editor.delete(5, 11)
    editor.insert(5, " Go")
    while editor.undo():
        pass

    for _ in range(3):
        editor.redo()
    assert editor.text() == "Hello World!"

    editor.insert(11, ", Programming")
    assert editor.text() == "Hello World, Programming!"
    assert editor.can_redo() is False

    editor.insert(editor.length() - 1, " Meow Meow")
    assert editor.text() == "Hello World, Programming Meow Meow!"
    assert editor.info().total == 5


def test_empty_insert_is_not_recorded() -> None:
    editor = make_editor("abc")
    before = editor.info()

    editor.insert(1, "")

    assert editor.text() == "abc"
    assert editor.info() == before


@pytest.mark.parametrize("start,end", [(1, 1), (2, 1), (3, 5), (10, 12)])
def test_vacuous_delete_is_not_recorded(start: int, end: int) -> None:
    editor = make_editor("abc")
    before = editor.info()

    editor.delete(start, end)

    assert editor.text() == "abc"
    assert editor.info() == before


def test_delete_on_empty_editor_is_noop() -> None:
    editor = Editor()

    editor.delete(0, 3)

    assert editor.text() == ""
    assert editor.info().total == 0


def test_delete_end_clamped_to_length() -> None:
    clamped = make_editor("Hello World")
    exact = make_editor("Hello World")

    clamped.delete(5, 1_000)
    exact.delete(5, exact.length())

    assert clamped.text() == exact.text() == "Hello"
    assert clamped.info() == exact.info()


def test_insert_position_clamped_to_length() -> None:
    editor = make_editor("abc")

    editor.insert(50, "d")

    assert editor.text() == "abcd"


def test_length_counts_characters() -> None:
    editor = Editor()
    editor.insert(0, "naïve 🙂")

    assert editor.length() == 7
    editor.delete(6, 7)
    assert editor.text() == "naïve "


def test_undo_then_redo_restores_text() -> None:
    editor = make_editor("one", " two", " three")
    editor.delete(0, 4)
    editor.insert(0, ">")

    while editor.can_undo():
        before = editor.text()
        editor.undo()
        editor.redo()
        assert editor.text() == before
        editor.undo()


def test_truncation_discards_redo_states() -> None:
    editor = make_editor("E1", "E2", "E3")
    editor.undo()
    editor.undo()
    assert editor.text() == "E1"

    editor.insert(2, "E4")

    assert editor.redo() is False
    assert editor.text() == "E1E4"
    assert editor.info().total == 2


def test_capacity_bounds_history() -> None:
    editor = Editor(4)

    for index in range(20):
        editor.insert(editor.length(), str(index % 10))
        assert editor.info().total <= 5

    undos = 0
    while editor.undo():
        undos += 1
    assert undos == 5
    assert editor.text() == ""


def test_boundary_undo_on_fresh_editor() -> None:
    editor = Editor()

    assert editor.can_undo() is False
    assert editor.undo() is False
    assert editor.text() == ""
    assert editor.can_redo() is False
    assert editor.redo() is False


def test_zero_max_history_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TEXT_TIMELINE_MAX_HISTORY", raising=False)
    editor = Editor(0)

    assert editor.history.capacity == DEFAULT_MAX_HISTORY
    for _ in range(DEFAULT_MAX_HISTORY + 10):
        editor.insert(0, "x")
    assert editor.info().total == DEFAULT_MAX_HISTORY + 1


def test_negative_max_history_rejected() -> None:
    with pytest.raises(ValueError):
        Editor(-1)


def test_from_config_sets_name_and_capacity() -> None:
    editor = Editor.from_config(EditorConfig(max_history=7, name="notes"))

    assert editor.name == "notes"
    assert editor.history.capacity == 7


def test_history_records_producing_operations() -> None:
    editor = make_editor("Hello World")
    editor.delete(5, 11)

    operations = [snap.operation for snap in editor.history.snapshots()]

    assert operations == [Insert(0, "Hello World"), Delete(5, 11)]


def test_mirror_reports_visible_state() -> None:
    editor = make_editor("Hello")
    editor.insert(5, " Go")
    editor.undo()

    mirror = editor.mirror(attributes={"caret": "5"})

    assert mirror.text == "Hello"
    assert mirror.history == editor.info()
    assert mirror.last_operation == "insert@0 'Hello'"
    assert mirror.attributes == {"caret": "5"}


def test_mirror_on_empty_editor() -> None:
    mirror = Editor().mirror()

    assert mirror.text == ""
    assert mirror.last_operation == "initial"


def test_negative_start_delete_clamps_to_zero() -> None:
    editor = make_editor("abc")

    editor.delete(-5, 0)
    assert editor.info().total == 1

    editor.delete(-5, 2)
    assert editor.text() == "c"
    assert editor.info().total == 2


def test_insert_survives_failing_event_sink(monkeypatch: pytest.MonkeyPatch) -> None:
    editor = make_editor("a", "b", "c")
    editor.undo()
    editor.undo()

    def broken_sink(*_args: object, **_kwargs: object) -> None:
        raise OSError("log sink unavailable")

    monkeypatch.setattr(telemetry, "record_event", broken_sink)

    editor.insert(1, "X")

    assert editor.text() == "aX"
    assert editor.info() == (1, 2, True, False)
