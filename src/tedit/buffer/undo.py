"""Coalescing undo/redo history built on the document splice primitive."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from tedit.runtime import telemetry

from .document import Document
from .state import Cursor, Payload, payload_end


class OpKind(str, Enum):
    INSERTED = "inserted"
    REMOVED = "removed"


@dataclass(slots=True)
class EditOperation:
    kind: OpKind
    anchor: Cursor
    payload: Payload = field(default_factory=lambda: [""])
    finished: bool = False

    def apply(self, document: Document) -> None:
        if self.kind is OpKind.INSERTED:
            document.splice_insert(self.anchor, self.payload)
        else:
            document.splice_remove(self.anchor, self.payload)

    def revert(self, document: Document) -> None:
        if self.kind is OpKind.INSERTED:
            document.splice_remove(self.anchor, self.payload)
        else:
            document.splice_insert(self.anchor, self.payload)

    @property
    def end(self) -> Cursor:
        return payload_end(self.anchor, self.payload)


class HistoryManager:
    """Linear operation log with a pointer at the last applied entry.

    Only the entry at the pointer can still be accumulating; pushing a new
    entry finishes the previous one and prunes anything that was undone.
    """

    def __init__(self, *, logger_name: str = "tedit.history") -> None:
        self._operations: List[EditOperation] = []
        self._pointer: int = -1
        self._logger_name = logger_name

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def operations(self) -> Sequence[EditOperation]:
        return tuple(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def can_undo(self) -> bool:
        return self._pointer >= 0

    def can_redo(self) -> bool:
        return self._pointer < len(self._operations) - 1

    def latest(self) -> Optional[EditOperation]:
        if self._pointer < 0:
            return None
        return self._operations[self._pointer]

    # -- recording --------------------------------------------------------

    def _pending(self, kind: OpKind) -> Optional[EditOperation]:
        op = self.latest()
        if op is not None and op.kind is kind and not op.finished:
            return op
        return None

    def _push(self, op: EditOperation) -> EditOperation:
        if self.can_redo():
            del self._operations[self._pointer + 1 :]
        previous = self.latest()
        if previous is not None:
            previous.finished = True
        self._operations.append(op)
        self._pointer = len(self._operations) - 1
        telemetry.record_event(
            "history.push",
            level="debug",
            data={"kind": op.kind.value, "anchor": op.anchor, "index": self._pointer},
            logger_name=self._logger_name,
        )
        return op

    def _pending_or_new(self, kind: OpKind, anchor: Cursor) -> EditOperation:
        return self._pending(kind) or self._push(EditOperation(kind, anchor))

    def record_insert(self, char: str, anchor: Cursor) -> None:
        """Typed ``char`` at ``anchor`` (the cursor before the insert)."""

        op = self._pending_or_new(OpKind.INSERTED, anchor)
        op.payload[-1] += char

    def record_line_break(self, anchor: Cursor) -> None:
        op = self._pending_or_new(OpKind.INSERTED, anchor)
        op.payload.append("")

    def record_backspace(self, char: str, cursor: Cursor) -> None:
        """Backspace removed ``char``; ``cursor`` is where it now stands."""

        op = self._pending_or_new(OpKind.REMOVED, cursor)
        op.payload[0] = char + op.payload[0]
        op.anchor = cursor

    def record_backspace_join(self, cursor: Cursor) -> None:
        op = self._pending_or_new(OpKind.REMOVED, cursor)
        op.payload.insert(0, "")
        op.anchor = cursor

    def record_forward_delete(self, char: str, cursor: Cursor) -> None:
        op = self._pending_or_new(OpKind.REMOVED, cursor)
        op.payload[-1] += char

    def record_forward_join(self, cursor: Cursor) -> None:
        op = self._pending_or_new(OpKind.REMOVED, cursor)
        op.payload.append("")

    def record(self, kind: OpKind, anchor: Cursor, payload: Sequence[str]) -> None:
        """Record a complete change (paste, cut, kill) as one finished entry."""

        self._push(EditOperation(kind, anchor, list(payload), finished=True))

    def finish(self) -> None:
        op = self.latest()
        if op is not None:
            op.finished = True

    # -- replay -----------------------------------------------------------

    def undo(self, document: Document) -> bool:
        if not self.can_undo():
            return False
        op = self._operations[self._pointer]
        op.finished = True
        op.revert(document)
        self._pointer -= 1
        document.set_cursor(*op.anchor)
        telemetry.record_event(
            "history.undo",
            level="debug",
            data={"kind": op.kind.value, "index": self._pointer + 1},
            logger_name=self._logger_name,
        )
        return True

    def redo(self, document: Document) -> bool:
        if not self.can_redo():
            return False
        self._pointer += 1
        op = self._operations[self._pointer]
        op.apply(document)
        target = op.end if op.kind is OpKind.INSERTED else op.anchor
        document.set_cursor(*target)
        telemetry.record_event(
            "history.redo",
            level="debug",
            data={"kind": op.kind.value, "index": self._pointer},
            logger_name=self._logger_name,
        )
        return True


__all__ = ["OpKind", "EditOperation", "HistoryManager"]
