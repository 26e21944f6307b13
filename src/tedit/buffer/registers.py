"""The single in-process clipboard register shared by every buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence


@dataclass(slots=True)
class Clipboard:
    """Holds the most recent cut/copy payload, one entry per line."""

    _lines: Optional[List[str]] = field(default=None)

    @property
    def is_empty(self) -> bool:
        return self._lines is None

    def store(self, payload: Sequence[str]) -> None:
        if not payload:
            raise ValueError("clipboard payload needs at least one line")
        self._lines = list(payload)

    def load(self) -> Optional[List[str]]:
        """Return a copy so pasting never aliases the stored payload."""

        if self._lines is None:
            return None
        return list(self._lines)

    def clear(self) -> None:
        self._lines = None


__all__ = ["Clipboard"]
