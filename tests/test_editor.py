from __future__ import annotations

from typing import List

import pytest

from tedit.base import CommandResult, EventBus, KeyInput, ScriptedKeySource
from tedit.buffer import Buffer
from tedit.config import EditorConfig
from tedit.session import Editor


def make_editor(*lines: str, config: EditorConfig | None = None):
    keys = ScriptedKeySource()
    buffers = [Buffer.from_lines(lines)] if lines else []
    editor = Editor(keys, config=config, bus=EventBus(), buffers=buffers)
    return editor, keys


def press(editor: Editor, *tokens: str) -> List[CommandResult]:
    return [editor.handle_key(KeyInput.parse(token)) for token in tokens]


def test_scripted_session_types_undoes_and_quits() -> None:
    keys = ScriptedKeySource(
        ["a", "b", "enter", "c", "d", "e", "ctrl+z", "ctrl+r"]
        + ["backspace", "backspace", "ctrl+q", "n"]
    )
    editor = Editor(keys)

    editor.run()

    assert editor.quit_requested is True
    assert editor.buffer.lines == ("ab", "c")
    assert len(keys) == 0


def test_undo_restores_empty_document() -> None:
    editor, _ = make_editor()

    press(editor, "a", "b", "enter", "c", "d", "e", "ctrl+z")

    assert editor.buffer.lines == ("",)
    press(editor, "ctrl+r")
    assert editor.buffer.lines == ("ab", "cde")


def test_history_boundary_sets_status() -> None:
    editor, _ = make_editor()

    (result,) = press(editor, "ctrl+z")

    assert result.status == "history_boundary"
    assert editor.status == "Already at oldest change"
    (result,) = press(editor, "ctrl+r")
    assert editor.status == "Already at newest change"


def test_unbound_keys_are_not_consumed() -> None:
    editor, _ = make_editor("text")

    (result,) = press(editor, "f5")

    assert result.consumed is False
    assert result.status == "unbound"
    assert editor.buffer.lines == ("text",)


def test_tab_inserts_tab_character() -> None:
    editor, _ = make_editor()

    press(editor, "tab", "x")

    assert editor.buffer.lines == ("\tx",)


def test_page_keys_use_configured_page_size() -> None:
    editor, _ = make_editor("0", "1", "2", "3", "4", config=EditorConfig(page_size=2))

    press(editor, "pagedown")
    assert editor.buffer.cursor == (2, 0)
    press(editor, "pagedown", "pagedown")
    assert editor.buffer.cursor == (4, 0)
    press(editor, "pageup")
    assert editor.buffer.cursor == (2, 0)


def test_cut_and_paste_through_keys() -> None:
    editor, _ = make_editor("alpha", "beta")

    press(editor, "right", "ctrl+space", "down", "ctrl+x")
    assert editor.buffer.lines == ("aeta",)

    press(editor, "ctrl+e", "ctrl+v")
    assert editor.buffer.lines == ("aetalpha", "b")
    assert editor.buffer.cursor == (1, 1)


def test_paste_with_empty_clipboard_is_noop() -> None:
    editor, _ = make_editor("x")

    (result,) = press(editor, "ctrl+v")

    assert result.status == "noop"
    assert editor.status == "Clipboard is empty"


def test_copy_keeps_text_and_fills_clipboard() -> None:
    editor, _ = make_editor("copy me")

    press(editor, "ctrl+space", "ctrl+e", "ctrl+c")

    assert editor.buffer.lines == ("copy me",)
    assert editor.clipboard.load() == ["copy me"]
    assert editor.buffer.modified is False


def test_find_prompt_wraps_and_reports_missing() -> None:
    editor, keys = make_editor("foo bar", "baz foo")

    keys.feed("f", "o", "o", "enter")
    press(editor, "ctrl+f")
    assert editor.buffer.cursor == (0, 0)

    keys.feed("enter")
    press(editor, "ctrl+f")
    assert editor.buffer.cursor == (1, 4)

    keys.feed("ctrl+u", "z", "z", "enter")
    (result,) = press(editor, "ctrl+f")
    assert result.status == "not_found"
    assert editor.status == "Text not found"
    assert editor.buffer.cursor == (1, 4)

    keys.feed("ctrl+u", "enter")
    (result,) = press(editor, "ctrl+f")
    assert result.status == "cancelled"


def test_save_prompts_for_missing_name(tmp_path) -> None:
    editor, keys = make_editor()
    target = tmp_path / "out.txt"

    press(editor, "h", "i")
    keys.feed(*str(target), "enter")
    (result,) = press(editor, "ctrl+s")

    assert result.status == "ok"
    assert editor.status == f"Saved {target}"
    assert target.read_text() == "hi\n"
    assert editor.buffer.modified is False
    assert editor.buffer.path == str(target)


def test_save_as_declined_overwrite_leaves_file(tmp_path) -> None:
    existing = tmp_path / "existing.txt"
    existing.write_text("keep\n")
    editor, keys = make_editor("new text")

    keys.feed(*str(existing), "enter", "n")
    (result,) = press(editor, "ctrl+w")

    assert result.status == "cancelled"
    assert existing.read_text() == "keep\n"

    keys.feed(*str(existing), "enter", "y")
    press(editor, "ctrl+w")
    assert existing.read_text() == "new text\n"


def test_open_file_adds_buffer_and_reports_errors(tmp_path) -> None:
    source = tmp_path / "source.txt"
    source.write_text("line one\nline two\n")
    editor, keys = make_editor()

    keys.feed(*str(source), "enter")
    press(editor, "ctrl+o")

    assert editor.active_index == 1
    assert editor.buffer.lines == ("line one", "line two")

    keys.feed(*str(tmp_path), "enter")
    (result,) = press(editor, "ctrl+o")
    assert result.status == "io_error"
    assert len(editor.buffers) == 2

    keys.feed("escape")
    (result,) = press(editor, "ctrl+o")
    assert result.status == "cancelled"


def test_buffer_cycling_and_closing() -> None:
    editor, keys = make_editor("first")

    (result,) = press(editor, "ctrl+d")
    assert result.status == "refused"
    assert editor.status == "Can't close last remaining buffer"

    press(editor, "ctrl+b", "x")
    assert editor.active_index == 1
    press(editor, "ctrl+n")
    assert editor.active_index == 0
    press(editor, "ctrl+p")
    assert editor.active_index == 1

    keys.feed("c")
    (result,) = press(editor, "ctrl+d")
    assert result.status == "cancelled"
    assert len(editor.buffers) == 2

    keys.feed("n")
    press(editor, "ctrl+d")
    assert len(editor.buffers) == 1
    assert editor.buffer.lines == ("first",)


def test_quit_stops_when_save_fails(tmp_path) -> None:
    editor, keys = make_editor()
    editor.buffer.path = str(tmp_path / "missing" / "file.txt")
    press(editor, "x")

    keys.feed("y")
    (result,) = press(editor, "ctrl+q")

    assert result.status == "io_error"
    assert editor.quit_requested is False


def test_help_waits_for_a_key() -> None:
    editor, keys = make_editor()
    shown: list[object] = []
    editor.bus.subscribe("help.show", shown.append)
    editor.bus.subscribe("help.hide", shown.append)

    keys.feed("q")
    press(editor, "ctrl+h")

    assert ("Ctrl-Q", "quit") in shown[0]
    assert shown[-1] is None
    assert len(keys) == 0
    assert editor.buffer.lines == ("",)


def test_kill_keys() -> None:
    editor, _ = make_editor("hello world")

    press(editor, "right", "right", "ctrl+k")
    assert editor.buffer.lines == ("he",)
    press(editor, "ctrl+u")
    assert editor.buffer.lines == ("",)
    press(editor, "ctrl+z", "ctrl+z")
    assert editor.buffer.lines == ("hello world",)


def test_select_buffer_checks_bounds() -> None:
    editor, _ = make_editor()

    with pytest.raises(IndexError):
        editor.select_buffer(3)
