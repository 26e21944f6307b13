"""Selection and clipboard commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tedit.base import CommandResult

if TYPE_CHECKING:  # pragma: no cover
    from tedit.session.editor import Editor


def toggle_selection(editor: "Editor") -> CommandResult:
    selecting = editor.buffer.toggle_selection()
    editor.bus.emit(
        "selection.toggle", {"selecting": selecting, "cursor": editor.buffer.cursor}
    )
    return CommandResult(
        consumed=True,
        status="ok",
        message="Selecting" if selecting else None,
    )


def copy_selection(editor: "Editor") -> CommandResult:
    payload = editor.buffer.copy_selection()
    if payload is None:
        return CommandResult(consumed=True, status="noop")
    editor.clipboard.store(payload)
    editor.bus.emit("selection.copy", payload)
    return CommandResult(consumed=True)


def cut_selection(editor: "Editor") -> CommandResult:
    payload = editor.buffer.cut_selection()
    if payload is None:
        return CommandResult(consumed=True, status="noop")
    editor.clipboard.store(payload)
    editor.bus.emit("selection.cut", payload)
    return CommandResult(consumed=True)


def paste(editor: "Editor") -> CommandResult:
    payload = editor.clipboard.load()
    if payload is None:
        return CommandResult(consumed=True, status="noop", message="Clipboard is empty")
    editor.buffer.paste(payload)
    return CommandResult(consumed=True)


__all__ = ["copy_selection", "cut_selection", "paste", "toggle_selection"]
