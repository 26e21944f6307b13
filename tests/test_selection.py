from __future__ import annotations

import pytest

from tedit.buffer import Buffer, Clipboard, Document, SelectionTracker


def test_normalized_swaps_whole_points() -> None:
    tracker = SelectionTracker(anchor=(3, 23), active=(0, 42))

    assert tracker.normalized() == ((0, 42), (3, 23))


def test_contains_is_half_open() -> None:
    tracker = SelectionTracker(anchor=(1, 2), active=(2, 3))

    assert tracker.contains(1, 2)
    assert not tracker.contains(1, 1)
    assert tracker.contains(1, 30)
    assert tracker.contains(2, 2)
    assert not tracker.contains(2, 3)
    assert not SelectionTracker(anchor=(1, 1), active=(1, 1)).contains(1, 1)


def test_extract_text_uses_normalized_points() -> None:
    document = Document.from_lines(["alpha", "beta"])
    tracker = SelectionTracker(anchor=(1, 2), active=(0, 3))

    assert tracker.extract_text(document) == ["ha", "be"]


def test_selection_follows_cursor_only_while_selecting() -> None:
    buffer = Buffer.from_lines(["alpha", "beta"])

    assert buffer.toggle_selection() is True
    buffer.move_down()
    buffer.move_right()
    assert buffer.toggle_selection() is False
    buffer.move_line_start()

    assert buffer.selection.active == (1, 1)
    assert buffer.mirror().selection == ((0, 0), (1, 1))


def test_cut_then_paste_round_trips_through_history() -> None:
    buffer = Buffer.from_lines(["alpha", "beta"])
    buffer.document.set_cursor(0, 2)
    buffer.toggle_selection()
    buffer.move_down()

    payload = buffer.cut_selection()

    assert payload == ["pha", "be"]
    assert buffer.lines == ("alta",)
    assert buffer.cursor == (0, 2)
    assert buffer.selection.is_empty

    buffer.undo()
    assert buffer.lines == ("alpha", "beta")
    buffer.redo()
    assert buffer.lines == ("alta",)

    buffer.paste(payload)
    assert buffer.lines == ("alpha", "beta")
    assert buffer.cursor == (1, 2)


def test_copy_of_empty_selection_is_none() -> None:
    buffer = Buffer.from_lines(["text"])

    assert buffer.copy_selection() is None


def test_clipboard_stores_copies_and_rejects_empty_payload() -> None:
    clipboard = Clipboard()

    with pytest.raises(ValueError):
        clipboard.store([])

    assert clipboard.load() is None
    clipboard.store(["a", "b"])
    loaded = clipboard.load()
    loaded.append("c")
    assert clipboard.load() == ["a", "b"]
