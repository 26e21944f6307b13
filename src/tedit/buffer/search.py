"""Wrap-around phrase search that resumes where the previous match was."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .document import Document
from .state import Cursor


@dataclass(slots=True)
class TextSearch:
    phrase: Optional[str] = None
    last_line: int = 0
    last_query: str = ""

    def find(self, document: Document, phrase: str) -> Optional[Cursor]:
        """Return ``(line, column)`` of the next line containing ``phrase``.

        A new phrase restarts the scan one line above the cursor (the last
        line when the cursor is on line 0); repeating the previous phrase
        continues after the previous match. The phrase is remembered even
        when nothing matches; the resume line only moves on a match.
        """

        self.last_query = phrase
        lines = document.snapshot()
        if phrase == self.phrase:
            start = min(self.last_line, len(lines) - 1)
        elif document.line > 0:
            start = document.line - 1
        else:
            start = len(lines) - 1

        self.phrase = phrase
        order = list(range(start + 1, len(lines))) + list(range(0, start + 1))
        for index in order:
            column = lines[index].find(phrase)
            if column >= 0:
                self.last_line = index
                return (index, column)
        return None


__all__ = ["TextSearch"]
