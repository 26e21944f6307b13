"""Dataclasses describing editor commands and their key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable


class Command(str, Enum):
    """Every command the editor can dispatch from a key."""

    SELECT = "select"
    LINE_START = "line_start"
    LINE_END = "line_end"
    NEW_BUFFER = "new_buffer"
    COPY = "copy"
    CLOSE_BUFFER = "close_buffer"
    FIND = "find"
    HELP = "help"
    KILL_TO_LINE_END = "kill_to_line_end"
    KILL_TO_LINE_START = "kill_to_line_start"
    REDRAW = "redraw"
    NEXT_BUFFER = "next_buffer"
    OPEN_FILE = "open_file"
    PREVIOUS_BUFFER = "previous_buffer"
    QUIT = "quit"
    REDO = "redo"
    SAVE = "save"
    PASTE = "paste"
    SAVE_AS = "save_as"
    CUT = "cut"
    UNDO = "undo"
    NEWLINE = "newline"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    BACKSPACE = "backspace"
    DELETE = "delete"


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, matched against ``KeyInput.token``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))
        if len(self.key) > 1 or self.modifiers:
            object.__setattr__(self, "key", self.key.lower())

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers) + f"+{self.key}"
        return self.key

    @property
    def label(self) -> str:
        """Human readable name for the help screen (``Ctrl-Z``)."""

        parts = [m.capitalize() for m in self.modifiers]
        parts.append(self.key.capitalize() if len(self.key) > 1 else self.key.upper())
        return "-".join(parts)

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        if len(token) > 1 and "+" in token:
            *modifiers, key = token.split("+")
            return cls(key, tuple(modifiers))
        return cls(token)


@dataclass(frozen=True, slots=True)
class CommandRef:
    """Callable registered for a ``Command``."""

    command: Command
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with a command."""

    id: str
    stroke: KeyStroke
    command: Command
    description: str = ""
    show_in_help: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")

    @property
    def token(self) -> str:
        return self.stroke.token


__all__ = ["Binding", "Command", "CommandRef", "KeyStroke"]
