"""Built-in command table and key bindings."""

from __future__ import annotations

from typing import Iterable, Sequence

from tedit.actions import editing, navigation, selection, session

from .models import Binding, Command, CommandRef, KeyStroke
from .registry import KeymapRegistry

DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    CommandRef(Command.SELECT, selection.toggle_selection, "start/stop selecting text"),
    CommandRef(Command.LINE_START, navigation.line_start, "go to beginning of line"),
    CommandRef(Command.NEW_BUFFER, session.new_buffer, "create new buffer"),
    CommandRef(Command.COPY, selection.copy_selection, "copy selected text to clipboard"),
    CommandRef(Command.CLOSE_BUFFER, session.close_buffer, "close current buffer"),
    CommandRef(Command.LINE_END, navigation.line_end, "go to end of line"),
    CommandRef(Command.FIND, session.find, "find text"),
    CommandRef(Command.HELP, session.show_help, "show help"),
    CommandRef(Command.KILL_TO_LINE_END, editing.kill_to_line_end, "delete text to end of line"),
    CommandRef(Command.REDRAW, session.redraw, "redraw screen"),
    CommandRef(Command.NEXT_BUFFER, session.next_buffer, "go to next file"),
    CommandRef(Command.OPEN_FILE, session.open_file, "open file in new buffer"),
    CommandRef(Command.PREVIOUS_BUFFER, session.previous_buffer, "go to previous file"),
    CommandRef(Command.QUIT, session.quit_editor, "quit"),
    CommandRef(Command.REDO, editing.redo, "redo previously undone change"),
    CommandRef(Command.SAVE, session.save, "save file"),
    CommandRef(
        Command.KILL_TO_LINE_START,
        editing.kill_to_line_start,
        "delete text from beginning of line",
    ),
    CommandRef(Command.PASTE, selection.paste, "paste text from clipboard"),
    CommandRef(Command.SAVE_AS, session.save_as, "save file as"),
    CommandRef(Command.CUT, selection.cut_selection, "cut selected text to clipboard"),
    CommandRef(Command.UNDO, editing.undo, "undo last change"),
    CommandRef(Command.NEWLINE, editing.newline, "insert new line"),
    CommandRef(Command.UP, navigation.up, "go to previous line"),
    CommandRef(Command.DOWN, navigation.down, "go to next line"),
    CommandRef(Command.LEFT, navigation.left, "go to previous character"),
    CommandRef(Command.RIGHT, navigation.right, "go to next character"),
    CommandRef(Command.PAGE_DOWN, navigation.page_down, "go to next page"),
    CommandRef(Command.PAGE_UP, navigation.page_up, "go to previous page"),
    CommandRef(Command.BACKSPACE, editing.backspace, "delete character left from cursor"),
    CommandRef(Command.DELETE, editing.delete, "delete character right from cursor"),
)

# (token, command, shown on the help screen)
_DEFAULT_KEYS: tuple[tuple[str, Command, bool], ...] = (
    ("ctrl+space", Command.SELECT, True),
    ("ctrl+@", Command.SELECT, False),
    ("ctrl+a", Command.LINE_START, True),
    ("ctrl+b", Command.NEW_BUFFER, True),
    ("ctrl+c", Command.COPY, True),
    ("ctrl+d", Command.CLOSE_BUFFER, True),
    ("ctrl+e", Command.LINE_END, True),
    ("ctrl+f", Command.FIND, True),
    ("ctrl+h", Command.HELP, True),
    ("f1", Command.HELP, False),
    ("ctrl+k", Command.KILL_TO_LINE_END, True),
    ("ctrl+l", Command.REDRAW, True),
    ("ctrl+n", Command.NEXT_BUFFER, True),
    ("ctrl+o", Command.OPEN_FILE, True),
    ("ctrl+p", Command.PREVIOUS_BUFFER, True),
    ("ctrl+q", Command.QUIT, True),
    ("ctrl+r", Command.REDO, True),
    ("ctrl+s", Command.SAVE, True),
    ("ctrl+u", Command.KILL_TO_LINE_START, True),
    ("ctrl+v", Command.PASTE, True),
    ("ctrl+w", Command.SAVE_AS, True),
    ("ctrl+x", Command.CUT, True),
    ("ctrl+z", Command.UNDO, True),
    ("enter", Command.NEWLINE, True),
    ("up", Command.UP, True),
    ("down", Command.DOWN, True),
    ("left", Command.LEFT, True),
    ("right", Command.RIGHT, True),
    ("pagedown", Command.PAGE_DOWN, True),
    ("pageup", Command.PAGE_UP, True),
    ("backspace", Command.BACKSPACE, True),
    ("delete", Command.DELETE, True),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=f"{command.value}.{token}",
        stroke=KeyStroke.parse(token),
        command=command,
        show_in_help=visible,
    )
    for token, command, visible in _DEFAULT_KEYS
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_commands: Sequence[Command] | None = None,
) -> None:
    """Register the built-in commands and their keys."""

    excluded = set(exclude_commands or ())

    for ref in DEFAULT_COMMANDS:
        if ref.command in excluded:
            continue
        registry.register_command(ref, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.command in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_BINDINGS", "DEFAULT_COMMANDS", "load_default_keymaps"]
