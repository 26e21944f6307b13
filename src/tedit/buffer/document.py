"""Line storage, cursor, and the splice primitive shared with undo/redo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .state import Cursor
from .sync import BufferValidationError
from .validation import ensure_cursor


@dataclass(slots=True)
class Document:
    """Mutable list-of-lines text with a single cursor.

    Lines are plain ``str`` values, so every column is a code point offset.
    The document never has fewer than one line and the cursor always sits on
    an existing line at ``0 <= column <= len(line)``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    line: int = 0
    column: int = 0

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]
        self.clamp_cursor()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Document":
        return cls(_lines=list(lines))

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(_lines=text.split("\n"))

    # -- inspection -------------------------------------------------------

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def cursor(self) -> Cursor:
        return (self.line, self.column)

    @property
    def current_line(self) -> str:
        return self._lines[self.line]

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    # -- cursor -----------------------------------------------------------

    def set_cursor(self, line: int, column: int) -> None:
        self.line = line
        self.column = column
        self.clamp_cursor()

    def clamp_cursor(self) -> None:
        """Pull a stranded cursor back inside the document.

        The column is corrected first, against whatever line the index still
        points at, then the line index walks back until it is in range.
        """

        if self.line < 0:
            self.line = 0
        if self.line < len(self._lines):
            self.column = min(self.column, len(self._lines[self.line]))
        while self.line >= len(self._lines):
            self.line -= 1
        self.column = max(0, min(self.column, len(self._lines[self.line])))

    # -- single character edits -------------------------------------------

    def insert_character(self, char: str) -> None:
        current = self._lines[self.line]
        self._lines[self.line] = current[: self.column] + char + current[self.column :]
        self.column += len(char)

    def split_line_at_cursor(self) -> None:
        current = self._lines[self.line]
        self._lines[self.line] = current[: self.column]
        self._lines.insert(self.line + 1, current[self.column :])
        self.line += 1
        self.column = 0

    def join_with_next_line(self) -> bool:
        """Merge the following line into the current one; False at the end."""

        if self.line >= len(self._lines) - 1:
            return False
        following = self._lines.pop(self.line + 1)
        self._lines[self.line] += following
        return True

    def join_with_previous_line(self) -> bool:
        """Merge the current line into the previous one; False on line 0.

        The cursor lands on the former boundary.
        """

        if self.line == 0:
            return False
        current = self._lines.pop(self.line)
        self.line -= 1
        self.column = len(self._lines[self.line])
        self._lines[self.line] += current
        return True

    def delete_character_before_cursor(self) -> Optional[str]:
        if self.column == 0:
            return None
        current = self._lines[self.line]
        removed = current[self.column - 1]
        self._lines[self.line] = current[: self.column - 1] + current[self.column :]
        self.column -= 1
        return removed

    def delete_character_at_cursor(self) -> Optional[str]:
        current = self._lines[self.line]
        if self.column >= len(current):
            return None
        removed = current[self.column]
        self._lines[self.line] = current[: self.column] + current[self.column + 1 :]
        return removed

    def truncate_line(self, start: int, end: int) -> str:
        """Drop ``[start:end]`` of the current line and return it."""

        current = self._lines[self.line]
        removed = current[start:end]
        self._lines[self.line] = current[:start] + current[end:]
        return removed

    # -- splice -----------------------------------------------------------

    def splice_insert(self, anchor: Cursor, payload: Sequence[str]) -> None:
        """Insert ``payload`` lines at ``anchor``.

        A one-line payload lands inside the anchor line. Longer payloads turn
        the anchor line into ``len(payload)`` lines: the first payload line
        follows the anchor prefix, the last one precedes the anchor suffix.
        The cursor is left alone.
        """

        if not payload:
            raise BufferValidationError("Empty payload", cursor=anchor)
        line, column = ensure_cursor(self._lines, anchor)
        current = self._lines[line]
        prefix, suffix = current[:column], current[column:]
        if len(payload) == 1:
            self._lines[line] = prefix + payload[0] + suffix
            return
        replacement = list(payload)
        replacement[0] = prefix + replacement[0]
        replacement[-1] = replacement[-1] + suffix
        self._lines[line : line + 1] = replacement

    def splice_remove(self, anchor: Cursor, payload: Sequence[str]) -> None:
        """Undo ``splice_insert(anchor, payload)``.

        Only the shape of ``payload`` matters: its line count and the lengths
        of its first and last lines. The cursor is left alone.
        """

        if not payload:
            raise BufferValidationError("Empty payload", cursor=anchor)
        line, column = ensure_cursor(self._lines, anchor)
        last = line + len(payload) - 1
        if last >= len(self._lines):
            raise BufferValidationError("Payload runs past the last line", cursor=anchor)
        current = self._lines[line]
        if len(payload) == 1:
            end = column + len(payload[0])
            if end > len(current):
                raise BufferValidationError("Payload runs past line end", cursor=anchor)
            self._lines[line] = current[:column] + current[end:]
            return
        tail_line = self._lines[last]
        if len(payload[-1]) > len(tail_line):
            raise BufferValidationError("Payload runs past line end", cursor=anchor)
        self._lines[line : last + 1] = [current[:column] + tail_line[len(payload[-1]) :]]

    def extract(self, lower: Cursor, higher: Cursor) -> List[str]:
        """Copy the text between two ordered points, one entry per line."""

        low_line, low_col = lower
        high_line, high_col = higher
        if low_line == high_line:
            return [self._lines[low_line][low_col:high_col]]
        extracted = [self._lines[low_line][low_col:]]
        extracted.extend(self._lines[low_line + 1 : high_line])
        extracted.append(self._lines[high_line][:high_col])
        return extracted


__all__ = ["Document"]
