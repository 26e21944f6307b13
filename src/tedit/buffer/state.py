"""Cursor coordinates and line payload aliases shared by the buffer layer."""

from __future__ import annotations

from typing import List, Sequence, Tuple

Cursor = Tuple[int, int]  # (line, column), both absolute
Payload = List[str]  # one entry per line, never empty


def payload_end(anchor: Cursor, payload: Sequence[str]) -> Cursor:
    """Position right after ``payload`` once it is spliced in at ``anchor``."""

    line, column = anchor
    if len(payload) == 1:
        return (line, column + len(payload[0]))
    return (line + len(payload) - 1, len(payload[-1]))


__all__ = ["Cursor", "Payload", "payload_end"]
