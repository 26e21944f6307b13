"""Coordinate checks for callers that pass positions into a document."""

from __future__ import annotations

from typing import Sequence

from .state import Cursor
from .sync import BufferValidationError


def ensure_cursor(lines: Sequence[str], cursor: Cursor) -> Cursor:
    line, column = cursor
    if line < 0 or line >= len(lines):
        raise BufferValidationError("Line out of range", cursor=cursor)
    if column < 0 or column > len(lines[line]):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor
