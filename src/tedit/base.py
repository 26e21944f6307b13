"""Key events, command results and the event bus shared across layers."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterable, Optional, Protocol, Tuple


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event; ``text`` carries the typed character, if any."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(sorted(m.lower() for m in self.modifiers))
            return f"{modifier}+{self.key.lower()}"
        return self.key.lower() if len(self.key) > 1 else self.key

    @classmethod
    def char(cls, text: str) -> "KeyInput":
        return cls(key=text, text=text)

    @classmethod
    def parse(cls, token: str) -> "KeyInput":
        """Build a key from ``ctrl+z`` / ``enter`` / ``a`` style tokens."""

        if len(token) > 1 and "+" in token:
            *modifiers, key = token.split("+")
            return cls(key=key, modifiers=tuple(modifiers))
        if len(token) == 1:
            return cls.char(token)
        return cls(key=token)


@dataclass(slots=True)
class CommandResult:
    """Outcome of one dispatched command.

    ``status`` is one of ``ok``, ``noop``, ``cancelled``, ``not_found``,
    ``history_boundary``, ``io_error``, ``refused`` or ``unbound``; none of
    them stop the editor.
    """

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class EventBus:
    """Minimal publish/subscribe hub between the session and front ends."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class KeySource(Protocol):
    """Blocking supplier of key events for the input loop and prompts."""

    def next_key(self) -> KeyInput:
        ...


class ScriptedKeySource:
    """Replays a fixed list of keys; raises ``EOFError`` once exhausted."""

    def __init__(self, keys: Iterable[KeyInput | str] = ()) -> None:
        self._keys: Deque[KeyInput] = deque()
        self.feed(*keys)

    def feed(self, *keys: KeyInput | str) -> None:
        for key in keys:
            self._keys.append(KeyInput.parse(key) if isinstance(key, str) else key)

    def next_key(self) -> KeyInput:
        if not self._keys:
            raise EOFError("no more scripted keys")
        return self._keys.popleft()

    def __len__(self) -> int:
        return len(self._keys)


__all__ = [
    "CommandResult",
    "EventBus",
    "KeyInput",
    "KeySource",
    "ScriptedKeySource",
]
