"""Boundary types handed from the buffer layer to presentation layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .state import Cursor


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Immutable snapshot of one buffer, safe to pass to another thread."""

    lines: Tuple[str, ...]
    cursor: Cursor
    selection: Optional[Tuple[Cursor, Cursor]]
    path: Optional[str]
    modified: bool
    version: int

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def is_selected(self, line: int, column: int) -> bool:
        if self.selection is None:
            return False
        lower, higher = self.selection
        return lower <= (line, column) < higher


class BufferValidationError(RuntimeError):
    """Raised when a splice or cursor request points outside the document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
