"""Bridges an ``Editor`` session to UI callbacks without importing Textual."""

from __future__ import annotations

import queue
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from tedit.base import CommandResult, KeyInput
from tedit.buffer import BufferMirror
from tedit.runtime import telemetry
from tedit.session import Editor, PromptState


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


class QueueKeySource:
    """Thread-safe key source fed by the UI thread.

    ``next_key`` blocks the editor thread until a key arrives; after
    ``close`` it raises ``EOFError`` so the session loop unwinds.
    """

    _CLOSED = object()

    def __init__(self) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._closed = False

    def push(self, key: KeyInput) -> None:
        if not self._closed:
            self._queue.put(key)

    def close(self) -> None:
        self._closed = True
        self._queue.put(self._CLOSED)

    def next_key(self) -> KeyInput:
        item = self._queue.get()
        if item is self._CLOSED:
            self._queue.put(item)
            raise EOFError("key source closed")
        return item  # type: ignore[return-value]


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_prompt: Callable[[Optional[PromptState]], None] = _noop
    show_help: Callable[[Optional[Sequence[Tuple[str, str]]]], None] = _noop
    on_quit: Callable[[], None] = _noop
    # One trace line per key, result and buffer event
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Relays editor bus events to ``TextualUIHooks``.

    The hooks are called on whatever thread runs the editor; a host that
    runs ``run`` off its UI thread must marshal them back itself.
    """

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Dispatch one key synchronously (prompts read from the editor's source)."""

        normalized = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized)
        result = self.editor.handle_key(KeyInput(key=key, text=text, modifiers=normalized))
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def run(self) -> None:
        """Run the session loop until quit or until the key source is exhausted."""

        try:
            self.editor.run()
        except EOFError:
            telemetry.record_event("adapter.keys_exhausted", level="debug")
        finally:
            self.hooks.on_quit()

    def refresh(self) -> None:
        self.hooks.update_buffer(self.editor.buffer.mirror())

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        bus.subscribe("editor.result", lambda _payload: self.refresh())
        bus.subscribe("status", lambda payload: self.hooks.update_status(str(payload or "")))
        bus.subscribe("prompt.update", self._prompt_update)
        bus.subscribe("prompt.close", lambda _payload: self.hooks.show_prompt(None))
        bus.subscribe("help.show", self._help_show)
        bus.subscribe("help.hide", lambda _payload: self.hooks.show_help(None))
        for event in ("buffer.switch", "buffer.close", "buffer.saved", "screen.redraw"):
            bus.subscribe(event, lambda payload, name=event: self._buffer_event(name, payload))

    def _prompt_update(self, payload: object | None) -> None:
        if isinstance(payload, PromptState):
            self.hooks.show_prompt(payload)

    def _help_show(self, payload: object | None) -> None:
        entries = list(payload) if isinstance(payload, (list, tuple)) else []
        self.hooks.show_help(entries)

    def _buffer_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.refresh()

    def _log_state(self, prefix: str, **fields: object) -> None:
        buffer = self.editor.buffer
        snapshot = {
            "buffer": buffer.name,
            "cursor": buffer.cursor,
            "version": buffer.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["QueueKeySource", "TextualEditorAdapter", "TextualUIHooks"]
