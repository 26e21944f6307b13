"""Synchronous status-line prompts that pull keys from the active key source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tedit.base import EventBus, KeyInput, KeySource
from tedit.runtime import telemetry

ABORT_TOKENS = frozenset({"escape", "ctrl+g"})
CONFIRM_TOKENS = frozenset({"enter", "ctrl+m"})


@dataclass(slots=True)
class LineInput:
    """Editable single-line text with its own cursor."""

    text: str = ""
    cursor: int = 0

    def __post_init__(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.text)))

    @classmethod
    def prefilled(cls, text: str) -> "LineInput":
        return cls(text=text, cursor=len(text))

    def handle(self, key: KeyInput) -> bool:
        """Apply one editing key; False when the key means nothing here."""

        token = key.token
        if token == "left":
            self.cursor = max(0, self.cursor - 1)
        elif token == "right":
            self.cursor = min(len(self.text), self.cursor + 1)
        elif token in {"backspace", "ctrl+h"}:
            if self.cursor > 0:
                self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
                self.cursor -= 1
        elif token == "delete":
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        elif token == "ctrl+u":
            self.text = self.text[self.cursor :]
            self.cursor = 0
        elif token == "ctrl+k":
            self.text = self.text[: self.cursor]
        elif token == "ctrl+a":
            self.cursor = 0
        elif token == "ctrl+e":
            self.cursor = len(self.text)
        elif key.text and not key.modifiers and key.text.isprintable():
            self.text = self.text[: self.cursor] + key.text + self.text[self.cursor :]
            self.cursor += len(key.text)
        else:
            return False
        return True


@dataclass(frozen=True, slots=True)
class PromptState:
    """What a front end should draw on the prompt line."""

    label: str
    text: str
    cursor: int


class KeyPrompter:
    """Collects answers by reading keys until confirmed or aborted.

    Each call blocks the caller and returns a value; nothing is dispatched
    to the editor while a prompt is open. Progress is published on the bus
    as ``prompt.update`` (``PromptState``) and ``prompt.close``.
    """

    def __init__(self, keys: KeySource, bus: EventBus) -> None:
        self.keys = keys
        self.bus = bus

    def read_string(self, label: str, initial: str = "") -> Optional[str]:
        line = LineInput.prefilled(initial)
        try:
            while True:
                self.bus.emit("prompt.update", PromptState(f"{label}: ", line.text, line.cursor))
                key = self.keys.next_key()
                if key.token in CONFIRM_TOKENS:
                    telemetry.record_event(
                        "prompt.confirm", level="debug", data={"label": label}
                    )
                    return line.text
                if key.token in ABORT_TOKENS:
                    telemetry.record_event(
                        "prompt.cancel", level="debug", data={"label": label}
                    )
                    return None
                line.handle(key)
        finally:
            self.bus.emit("prompt.close", None)

    def query(self, label: str, answers: str) -> Optional[str]:
        """Ask until one of ``answers`` is typed; ``None`` when aborted."""

        text = f"{label} [{answers}]"
        try:
            while True:
                self.bus.emit("prompt.update", PromptState(text, "", 0))
                key = self.keys.next_key()
                if key.token in ABORT_TOKENS:
                    return None
                if key.text and not key.modifiers and key.text in answers:
                    return key.text
        finally:
            self.bus.emit("prompt.close", None)


__all__ = ["KeyPrompter", "LineInput", "PromptState"]
