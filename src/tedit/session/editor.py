"""The editor session: open buffers, clipboard, prompts and dispatch."""

from __future__ import annotations

from typing import Iterable, List, Optional

from tedit.base import CommandResult, EventBus, KeyInput, KeySource
from tedit.buffer import Buffer, Clipboard
from tedit.config import EditorConfig
from tedit.files import load_buffer
from tedit.keymaps import KeymapRegistry, load_default_keymaps
from tedit.runtime import telemetry

from .dispatcher import CommandDispatcher
from .prompt import KeyPrompter


class Editor:
    """Owns every open buffer and the index of the active one.

    Commands receive the editor explicitly; there is no module level state.
    ``handle_key`` processes one key to completion, including any prompt it
    opens, before returning.
    """

    def __init__(
        self,
        keys: KeySource,
        *,
        config: Optional[EditorConfig] = None,
        bus: Optional[EventBus] = None,
        registry: Optional[KeymapRegistry] = None,
        buffers: Iterable[Buffer] = (),
        load_defaults: bool = True,
    ) -> None:
        self.keys = keys
        self.config = config or EditorConfig()
        self.bus = bus or EventBus()
        self.registry = registry or KeymapRegistry(logger_name="tedit.keymaps")
        if load_defaults and registry is None:
            load_default_keymaps(self.registry)
        self.dispatcher = CommandDispatcher(self.registry)
        self.prompter = KeyPrompter(keys, self.bus)
        self.clipboard = Clipboard()
        self.buffers: List[Buffer] = list(buffers) or [Buffer()]
        self._active = 0
        self.status = ""
        self.quit_requested = False

    # -- buffers ----------------------------------------------------------

    @property
    def active_index(self) -> int:
        return self._active

    @property
    def buffer(self) -> Buffer:
        return self.buffers[self._active]

    def select_buffer(self, index: int) -> Buffer:
        if not 0 <= index < len(self.buffers):
            raise IndexError(f"buffer index {index} out of range")
        self._active = index
        self.bus.emit("buffer.switch", index)
        return self.buffers[index]

    def add_buffer(self, buffer: Buffer) -> Buffer:
        self.buffers.append(buffer)
        self.select_buffer(len(self.buffers) - 1)
        return buffer

    def remove_active_buffer(self) -> Buffer:
        removed = self.buffers.pop(self._active)
        if self._active >= len(self.buffers):
            self._active = max(0, len(self.buffers) - 1)
        self.bus.emit("buffer.close", removed.path)
        return removed

    def open_path(self, path: str) -> Buffer:
        """Load ``path`` into a new active buffer (``FileOperationError`` on I/O failure)."""

        return self.add_buffer(load_buffer(path))

    # -- prompts ----------------------------------------------------------

    def read_string(self, label: str, initial: str = "") -> Optional[str]:
        return self.prompter.read_string(label, initial)

    def query(self, label: str, answers: str) -> Optional[str]:
        return self.prompter.query(label, answers)

    # -- input ------------------------------------------------------------

    def handle_key(self, key: KeyInput) -> CommandResult:
        if self.quit_requested:
            return CommandResult(consumed=False, status="noop")
        result = self.dispatcher.handle_key(self, key)
        self.set_status(result.message if result.status != "unbound" else None)
        if result.status in {"history_boundary", "not_found", "io_error", "refused"}:
            telemetry.record_event(
                f"editor.{result.status}",
                level="warning",
                data={"message": result.message or ""},
            )
        self.bus.emit("editor.result", result)
        return result

    def set_status(self, message: Optional[str]) -> None:
        self.status = message or ""
        self.bus.emit("status", self.status)

    def run(self) -> None:
        """Process keys until a quit command is confirmed."""

        with telemetry.span("editor::run", component="editor"):
            while not self.quit_requested:
                self.handle_key(self.keys.next_key())


__all__ = ["Editor"]
