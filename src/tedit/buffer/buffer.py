"""Buffer facade combining document, history, selection and search."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional, Sequence

from tedit.runtime import telemetry

from .document import Document
from .search import TextSearch
from .selection import SelectionTracker
from .state import Cursor, payload_end
from .sync import BufferMirror
from .undo import HistoryManager, OpKind


class Buffer:
    """One open file: its text, cursor, history and per-buffer search state."""

    def __init__(
        self,
        *,
        name: str = "untitled",
        path: Optional[str] = None,
        document: Optional[Document] = None,
        history: Optional[HistoryManager] = None,
        selection: Optional[SelectionTracker] = None,
        search: Optional[TextSearch] = None,
    ) -> None:
        self.name = name
        self.path = path
        self.document = document or Document()
        self.history = history or HistoryManager()
        self.selection = selection or SelectionTracker()
        self.search = search or TextSearch()
        self.modified = False
        self.version = 0

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, path: Optional[str] = None
    ) -> "Buffer":
        return cls(name=path or "untitled", path=path, document=Document.from_lines(lines))

    @property
    def cursor(self) -> Cursor:
        return self.document.cursor

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def mirror(self) -> BufferMirror:
        selection = None
        if not self.selection.is_empty:
            lower, higher = self.selection.normalized()
            selection = (self.document_point(lower), self.document_point(higher))
        return BufferMirror(
            lines=tuple(self.document.snapshot()),
            cursor=self.document.cursor,
            selection=selection,
            path=self.path,
            modified=self.modified,
            version=self.version,
        )

    def mark_saved(self, path: str) -> None:
        self.path = path
        self.name = path
        self.modified = False

    def document_point(self, point: Cursor) -> Cursor:
        """Clamp a stored point to the current text."""

        line = max(0, min(point[0], self.document.line_count - 1))
        column = max(0, min(point[1], len(self.document.get_line(line))))
        return (line, column)

    # -- typing -----------------------------------------------------------

    def insert_character(self, char: str) -> None:
        if len(char) != 1 or char == "\n":
            raise ValueError(f"expected a single non-newline character, got {char!r}")
        with Transaction(self, "insert_character") as tx:
            anchor = self.document.cursor
            self.document.insert_character(char)
            self.history.record_insert(char, anchor)
            tx.touch()

    def insert_newline(self) -> None:
        with Transaction(self, "insert_newline") as tx:
            anchor = self.document.cursor
            self.document.split_line_at_cursor()
            self.history.record_line_break(anchor)
            tx.touch()

    def backspace(self) -> bool:
        with Transaction(self, "backspace") as tx:
            removed = self.document.delete_character_before_cursor()
            if removed is not None:
                self.history.record_backspace(removed, self.document.cursor)
            elif self.document.join_with_previous_line():
                self.history.record_backspace_join(self.document.cursor)
            else:
                return False
            tx.touch()
            return True

    def delete_forward(self) -> bool:
        with Transaction(self, "delete_forward") as tx:
            cursor = self.document.cursor
            removed = self.document.delete_character_at_cursor()
            if removed is not None:
                self.history.record_forward_delete(removed, cursor)
            elif self.document.join_with_next_line():
                self.history.record_forward_join(cursor)
            else:
                return False
            tx.touch()
            return True

    def kill_to_line_end(self) -> bool:
        with Transaction(self, "kill_to_line_end") as tx:
            line, column = self.document.cursor
            end = len(self.document.current_line)
            if column >= end:
                return False
            removed = self.document.truncate_line(column, end)
            self.history.record(OpKind.REMOVED, (line, column), [removed])
            tx.touch()
            return True

    def kill_to_line_start(self) -> bool:
        with Transaction(self, "kill_to_line_start") as tx:
            line, column = self.document.cursor
            if column == 0:
                return False
            removed = self.document.truncate_line(0, column)
            self.document.set_cursor(line, 0)
            self.history.record(OpKind.REMOVED, (line, 0), [removed])
            tx.touch()
            return True

    # -- navigation -------------------------------------------------------

    def _moved(self, line: int, column: int) -> bool:
        before = self.document.cursor
        self.document.set_cursor(line, column)
        self.history.finish()
        self.selection.follow_cursor(self.document.cursor)
        return self.document.cursor != before

    def move_left(self) -> bool:
        line, column = self.document.cursor
        return self._moved(line, max(0, column - 1))

    def move_right(self) -> bool:
        line, column = self.document.cursor
        return self._moved(line, column + 1)

    def move_up(self, rows: int = 1) -> bool:
        line, column = self.document.cursor
        return self._moved(max(0, line - rows), column)

    def move_down(self, rows: int = 1) -> bool:
        line, column = self.document.cursor
        return self._moved(min(self.document.line_count - 1, line + rows), column)

    def move_line_start(self) -> bool:
        return self._moved(self.document.line, 0)

    def move_line_end(self) -> bool:
        return self._moved(self.document.line, len(self.document.current_line))

    def page_up(self, rows: int) -> bool:
        return self.move_up(max(1, rows))

    def page_down(self, rows: int) -> bool:
        return self.move_down(max(1, rows))

    # -- selection and clipboard -----------------------------------------

    def toggle_selection(self) -> bool:
        return self.selection.start_or_stop(self.document.cursor)

    def _selected_range(self) -> tuple[Cursor, Cursor]:
        lower, higher = self.selection.normalized()
        return self.document_point(lower), self.document_point(higher)

    def copy_selection(self) -> Optional[List[str]]:
        lower, higher = self._selected_range()
        self.selection.reset(self.document.cursor)
        if lower == higher:
            return None
        return self.document.extract(lower, higher)

    def cut_selection(self) -> Optional[List[str]]:
        """Remove the selected text, recording it as one finished op."""

        lower, higher = self._selected_range()
        if lower == higher:
            self.selection.reset(self.document.cursor)
            return None
        with Transaction(self, "cut_selection") as tx:
            payload = self.document.extract(lower, higher)
            self.document.splice_remove(lower, payload)
            self.history.record(OpKind.REMOVED, lower, payload)
            self.document.set_cursor(*lower)
            self.selection.reset(self.document.cursor)
            tx.touch()
            return payload

    def paste(self, payload: Sequence[str]) -> None:
        with Transaction(self, "paste") as tx:
            anchor = self.document.cursor
            self.document.splice_insert(anchor, payload)
            self.history.record(OpKind.INSERTED, anchor, payload)
            self.document.set_cursor(*payload_end(anchor, payload))
            tx.touch()

    # -- history and search ----------------------------------------------

    def undo(self) -> bool:
        with Transaction(self, "undo") as tx:
            if not self.history.undo(self.document):
                tx.boundary()
                return False
            tx.touch()
            return True

    def redo(self) -> bool:
        with Transaction(self, "redo") as tx:
            if not self.history.redo(self.document):
                tx.boundary()
                return False
            tx.touch()
            return True

    def find(self, phrase: str) -> Optional[Cursor]:
        with telemetry.span(
            "buffer::find", component="search", metadata={"buffer": self.name}
        ) as handle:
            match = self.search.find(self.document, phrase)
            handle.add_metadata("found", match is not None)
        if match is not None:
            self._moved(*match)
        return match


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around one buffer command.

    Commands call ``touch`` once the document really changed; a clean exit
    then flags the buffer modified and bumps its version.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._changed = False

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def touch(self) -> None:
        self._changed = True

    def boundary(self) -> None:
        if self._handle is not None:
            self._handle.note("history_boundary")

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self._changed:
            self.buffer.modified = True
            self.buffer.version += 1
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
