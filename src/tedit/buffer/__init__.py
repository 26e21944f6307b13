"""Document, history, selection and search for one open file."""

from .buffer import Buffer, Transaction
from .document import Document
from .registers import Clipboard
from .search import TextSearch
from .selection import SelectionTracker
from .state import Cursor, Payload, payload_end
from .sync import BufferMirror, BufferValidationError
from .undo import EditOperation, HistoryManager, OpKind
from .validation import ensure_cursor

__all__ = [
    "Buffer",
    "BufferMirror",
    "BufferValidationError",
    "Clipboard",
    "Cursor",
    "Document",
    "EditOperation",
    "HistoryManager",
    "OpKind",
    "Payload",
    "SelectionTracker",
    "TextSearch",
    "Transaction",
    "ensure_cursor",
    "payload_end",
]
