"""Anchor/active selection tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .document import Document
from .state import Cursor


@dataclass(slots=True)
class SelectionTracker:
    """Two points plus a ``selecting`` flag.

    The selection stays visible after selecting stops; it only collapses on
    ``reset`` (cut, copy, new buffer). Equal points select nothing.
    """

    anchor: Cursor = (0, 0)
    active: Cursor = (0, 0)
    selecting: bool = False

    def start_or_stop(self, cursor: Cursor) -> bool:
        """Toggle selecting; starting pins both points to ``cursor``."""

        if not self.selecting:
            self.anchor = cursor
            self.active = cursor
        self.selecting = not self.selecting
        return self.selecting

    def follow_cursor(self, cursor: Cursor) -> None:
        if self.selecting:
            self.active = cursor

    def reset(self, cursor: Cursor) -> None:
        self.anchor = cursor
        self.active = cursor
        self.selecting = False

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    def normalized(self) -> Tuple[Cursor, Cursor]:
        """Return ``(lower, higher)`` in reading order.

        Points are swapped whole: when the anchor sits on a later line it
        becomes ``higher`` with its own column, so ``lower`` may carry the
        larger column.
        """

        anchor, active = self.anchor, self.active
        if anchor[0] > active[0]:
            return active, anchor
        if anchor[0] == active[0] and anchor[1] > active[1]:
            return active, anchor
        return anchor, active

    def contains(self, line: int, column: int) -> bool:
        if self.is_empty:
            return False
        (low_line, low_col), (high_line, high_col) = self.normalized()
        if low_line < line < high_line:
            return True
        if line == low_line and column >= low_col:
            return line < high_line or column < high_col
        if line == high_line and column < high_col:
            return line > low_line or column >= low_col
        return False

    def extract_text(self, document: Document) -> List[str]:
        lower, higher = self.normalized()
        return document.extract(lower, higher)


__all__ = ["SelectionTracker"]
