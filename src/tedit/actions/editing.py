"""Text editing and history commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tedit.base import CommandResult

if TYPE_CHECKING:  # pragma: no cover
    from tedit.session.editor import Editor


def _changed(changed: bool) -> CommandResult:
    return CommandResult(consumed=True, status="ok" if changed else "noop")


def insert_text(editor: "Editor", text: str) -> CommandResult:
    buffer = editor.buffer
    for char in text:
        if char == "\n":
            buffer.insert_newline()
        else:
            buffer.insert_character(char)
    return CommandResult(consumed=True)


def newline(editor: "Editor") -> CommandResult:
    editor.buffer.insert_newline()
    return CommandResult(consumed=True)


def backspace(editor: "Editor") -> CommandResult:
    return _changed(editor.buffer.backspace())


def delete(editor: "Editor") -> CommandResult:
    return _changed(editor.buffer.delete_forward())


def kill_to_line_end(editor: "Editor") -> CommandResult:
    return _changed(editor.buffer.kill_to_line_end())


def kill_to_line_start(editor: "Editor") -> CommandResult:
    return _changed(editor.buffer.kill_to_line_start())


def undo(editor: "Editor") -> CommandResult:
    if not editor.buffer.undo():
        return CommandResult(
            consumed=True, status="history_boundary", message="Already at oldest change"
        )
    return CommandResult(consumed=True)


def redo(editor: "Editor") -> CommandResult:
    if not editor.buffer.redo():
        return CommandResult(
            consumed=True, status="history_boundary", message="Already at newest change"
        )
    return CommandResult(consumed=True)


__all__ = [
    "backspace",
    "delete",
    "insert_text",
    "kill_to_line_end",
    "kill_to_line_start",
    "newline",
    "redo",
    "undo",
]
