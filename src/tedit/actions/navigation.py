"""Cursor movement commands; each one finishes the pending history entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tedit.base import CommandResult

if TYPE_CHECKING:  # pragma: no cover
    from tedit.session.editor import Editor


def _moved(moved: bool) -> CommandResult:
    return CommandResult(consumed=True, status="ok" if moved else "noop")


def up(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.move_up())


def down(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.move_down())


def left(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.move_left())


def right(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.move_right())


def line_start(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.move_line_start())


def line_end(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.move_line_end())


def page_up(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.page_up(editor.config.page_size))


def page_down(editor: "Editor") -> CommandResult:
    return _moved(editor.buffer.page_down(editor.config.page_size))


__all__ = [
    "down",
    "left",
    "line_end",
    "line_start",
    "page_down",
    "page_up",
    "right",
    "up",
]
