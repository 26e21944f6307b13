"""Buffer management, file, search and help commands."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional

from tedit.base import CommandResult
from tedit.buffer import Buffer
from tedit.files import FileOperationError, save_buffer

if TYPE_CHECKING:  # pragma: no cover
    from tedit.session.editor import Editor


def _cancelled() -> CommandResult:
    return CommandResult(consumed=True, status="cancelled")


def _io_error(exc: FileOperationError) -> CommandResult:
    return CommandResult(consumed=True, status="io_error", message=str(exc))


def new_buffer(editor: "Editor") -> CommandResult:
    editor.add_buffer(Buffer())
    return CommandResult(consumed=True)


def next_buffer(editor: "Editor") -> CommandResult:
    editor.select_buffer((editor.active_index + 1) % len(editor.buffers))
    return CommandResult(consumed=True)


def previous_buffer(editor: "Editor") -> CommandResult:
    editor.select_buffer((editor.active_index - 1) % len(editor.buffers))
    return CommandResult(consumed=True)


def open_file(editor: "Editor") -> CommandResult:
    path = editor.read_string("Filename")
    if not path:
        return _cancelled()
    try:
        editor.open_path(path)
    except FileOperationError as exc:
        return _io_error(exc)
    return CommandResult(consumed=True)


def _write(editor: "Editor", path: str) -> CommandResult:
    try:
        target = save_buffer(editor.buffer, path)
    except FileOperationError as exc:
        return _io_error(exc)
    editor.bus.emit("buffer.saved", target)
    return CommandResult(consumed=True, message=f"Saved {target}")


def save(editor: "Editor") -> CommandResult:
    path = editor.buffer.path
    if not path:
        path = editor.read_string("Filename")
        if not path:
            return _cancelled()
    return _write(editor, path)


def save_as(editor: "Editor") -> CommandResult:
    path = editor.read_string("New filename")
    if not path:
        return _cancelled()
    if os.path.exists(path):
        if editor.query("Are you sure you want to overwrite file?", "yn") != "y":
            return _cancelled()
    return _write(editor, path)


def _settle_modified(editor: "Editor") -> Optional[CommandResult]:
    """Offer to save the active buffer.

    Returns ``None`` when the caller may go on, otherwise the result that
    stopped it (cancelled prompt or failed save).
    """

    if not editor.buffer.modified:
        return None
    answer = editor.query("Save file?", "ync")
    if answer == "y":
        result = save(editor)
        return None if result.status == "ok" else result
    if answer == "n":
        return None
    return _cancelled()


def close_buffer(editor: "Editor") -> CommandResult:
    if len(editor.buffers) <= 1:
        return CommandResult(
            consumed=True, status="refused", message="Can't close last remaining buffer"
        )
    stopped = _settle_modified(editor)
    if stopped is not None:
        return stopped
    editor.remove_active_buffer()
    return CommandResult(consumed=True)


def quit_editor(editor: "Editor") -> CommandResult:
    for index, buffer in enumerate(list(editor.buffers)):
        if not buffer.modified:
            continue
        editor.select_buffer(index)
        stopped = _settle_modified(editor)
        if stopped is not None:
            return stopped
    editor.quit_requested = True
    editor.bus.emit("editor.quit", None)
    return CommandResult(consumed=True, status="ok")


def find(editor: "Editor") -> CommandResult:
    buffer = editor.buffer
    phrase = editor.read_string("Find", buffer.search.last_query)
    if not phrase:
        return _cancelled()
    match = buffer.find(phrase)
    if match is None:
        return CommandResult(consumed=True, status="not_found", message="Text not found")
    return CommandResult(consumed=True)


def show_help(editor: "Editor") -> CommandResult:
    """Publish the key table and wait for any key to dismiss it."""

    editor.bus.emit("help.show", editor.registry.help_entries())
    try:
        editor.keys.next_key()
    finally:
        editor.bus.emit("help.hide", None)
    return CommandResult(consumed=True)


def redraw(editor: "Editor") -> CommandResult:
    editor.bus.emit("screen.redraw", None)
    return CommandResult(consumed=True)


__all__ = [
    "close_buffer",
    "find",
    "new_buffer",
    "next_buffer",
    "open_file",
    "previous_buffer",
    "quit_editor",
    "redraw",
    "save",
    "save_as",
    "show_help",
]
