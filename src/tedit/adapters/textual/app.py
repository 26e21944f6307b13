"""Executable Textual app that hosts the editor session."""

from __future__ import annotations

import argparse
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.cells import cell_len
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use tedit.adapters.textual.app"
    ) from exc

from tedit.base import EventBus, KeyInput
from tedit.buffer import Buffer, BufferMirror
from tedit.config import EditorConfig
from tedit.files import FileOperationError, load_buffer
from tedit.runtime import telemetry
from tedit.session import Editor, PromptState

from .controller import QueueKeySource, TextualEditorAdapter, TextualUIHooks

SELECTION_STYLE = "reverse"
CURSOR_STYLE = "black on white"


def render_lines(
    mirror: BufferMirror,
    *,
    top: int,
    height: int,
    tab_width: int,
) -> Text:
    """Render ``height`` lines from ``top`` with selection and cursor styling."""

    output = Text(no_wrap=True, overflow="crop")
    cursor_line, cursor_col = mirror.cursor
    last = min(len(mirror.lines), top + max(1, height))
    for index in range(top, last):
        line = mirror.lines[index]
        width = 0
        for column, char in enumerate(line + " "):
            style = ""
            if (index, column) == (cursor_line, cursor_col):
                style = CURSOR_STYLE
            elif column < len(line) and mirror.is_selected(index, column):
                style = SELECTION_STYLE
            elif column == len(line):
                continue
            if char == "\t":
                pad = tab_width - (width % tab_width)
                output.append(" " * pad, style=style)
                width += pad
            else:
                output.append(char, style=style)
                width += cell_len(char)
        if index + 1 < last:
            output.append("\n")
    return output


def key_from_event(event: events.Key) -> Optional[KeyInput]:
    """Translate a Textual key event into the editor's ``KeyInput``."""

    key = event.key
    if key in {"return", "ctrl+m"}:
        key = "enter"
    elif key == "ctrl+i":
        key = "tab"
    elif key == "ctrl+at":
        key = "ctrl+@"
    character = event.character
    if (
        character
        and len(character) == 1
        and character.isprintable()
        and "ctrl+" not in key
        and "alt+" not in key
    ):
        return KeyInput.char(character)
    if not key:
        return None
    return KeyInput.parse(key)


@dataclass
class UIState:
    mirror: Optional[BufferMirror] = None
    status_text: str = ""
    prompt: Optional[PromptState] = None
    help_entries: Optional[List[Tuple[str, str]]] = None
    top: int = 0


class EditorView(Static, can_focus=True):
    """Focusable view that forwards every key press to the editor."""

    def __init__(self, on_key_input: Callable[[KeyInput], None], **kwargs) -> None:
        super().__init__("", **kwargs)
        self._on_key_input = on_key_input

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        key = key_from_event(event)
        if key is not None:
            self._on_key_input(key)


class TeditApp(App[None], inherit_bindings=False):
    """Textual UI around a blocking ``Editor`` loop running in a worker thread."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#prompt-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    def __init__(
        self,
        *,
        buffers: Sequence[Buffer] = (),
        config: Optional[EditorConfig] = None,
    ) -> None:
        super().__init__()
        self.config = config or EditorConfig()
        self.keys = QueueKeySource()
        self.editor = Editor(
            self.keys, config=self.config, bus=EventBus(), buffers=buffers
        )
        self.adapter: TextualEditorAdapter | None = None
        self._state = UIState()
        self._view: EditorView | None = None
        self._status_widget: Static | None = None
        self._prompt_widget: Static | None = None
        self._closing = False
        self._ui_thread = threading.get_ident()

    def compose(self) -> ComposeResult:
        self._view = EditorView(self.keys.push, id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._prompt_widget = Static("", id="prompt-line")
        yield self._view
        yield self._status_widget
        yield self._prompt_widget

    def on_mount(self) -> None:
        self._ui_thread = threading.get_ident()
        hooks = TextualUIHooks(
            update_buffer=lambda mirror: self._from_worker(self._update_buffer, mirror),
            update_status=lambda text: self._from_worker(self._update_status, text),
            show_prompt=lambda state: self._from_worker(self._show_prompt, state),
            show_help=lambda entries: self._from_worker(self._show_help, entries),
            on_quit=lambda: self._from_worker(self.exit),
            log=_trace,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        if self._view is not None:
            self._view.focus()
        self._update_buffer(self.editor.buffer.mirror())
        self.run_worker(self.adapter.run, thread=True, exit_on_error=False)

    def on_unmount(self) -> None:
        self._closing = True
        self.keys.close()

    def on_resize(self, _event: events.Resize) -> None:
        self._render_buffer()

    def _from_worker(self, callback: Callable[..., None], *args: object) -> None:
        # Hooks fire on the worker thread, except the first refresh in on_mount.
        if self._closing:
            return
        if threading.get_ident() == self._ui_thread:
            callback(*args)
        else:
            self.call_from_thread(callback, *args)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.mirror = mirror
        self._render_buffer()
        self._render_status()

    def _update_status(self, text: str) -> None:
        self._state.status_text = text
        self._render_status()

    def _show_prompt(self, state: Optional[PromptState]) -> None:
        self._state.prompt = state
        if self._prompt_widget is None:
            return
        if state is None:
            self._prompt_widget.update("")
            return
        line = Text(state.label)
        text = state.text + " "
        line.append(text[: state.cursor])
        line.append(text[state.cursor], style=CURSOR_STYLE)
        line.append(text[state.cursor + 1 :])
        self._prompt_widget.update(line)

    def _show_help(self, entries: Optional[Sequence[Tuple[str, str]]]) -> None:
        self._state.help_entries = list(entries) if entries is not None else None
        self._render_buffer()

    def _render_buffer(self) -> None:
        if self._view is None:
            return
        if self._state.help_entries is not None:
            width = max((len(label) for label, _ in self._state.help_entries), default=0)
            body = "\n".join(
                f"{label.ljust(width)}  {description}"
                for label, description in self._state.help_entries
            )
            self._view.update(body + "\n\nPress any key to continue")
            return
        mirror = self._state.mirror
        if mirror is None:
            return
        height = max(1, self._view.size.height)
        line = mirror.cursor[0]
        if line < self._state.top:
            self._state.top = line
        elif line >= self._state.top + height:
            self._state.top = line - height + 1
        self._view.update(
            render_lines(
                mirror,
                top=self._state.top,
                height=height,
                tab_width=self.config.tab_width,
            )
        )

    def _render_status(self) -> None:
        if self._status_widget is None or self._state.mirror is None:
            return
        mirror = self._state.mirror
        name = mirror.path or "[untitled]"
        flag = " [+]" if mirror.modified else ""
        position = f"{mirror.cursor[0] + 1}:{mirror.cursor[1] + 1}"
        index = f"{self.editor.active_index + 1}/{len(self.editor.buffers)}"
        parts = [f"{name}{flag}", position, index]
        if self._state.status_text:
            parts.append(self._state.status_text)
        self._status_widget.update("  ".join(parts))


def _trace(line: str) -> None:
    telemetry.record_event(
        "adapter.trace", level="debug", data={"line": line}, logger_name="tedit.adapter"
    )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit text files in the terminal.")
    parser.add_argument("files", nargs="*", help="Files to open, one buffer each")
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset (default: TEDIT_LOG_PRESET or production)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = EditorConfig.from_env()
    telemetry.configure(preset=args.log_preset or config.log_preset or "production")
    buffers: List[Buffer] = []
    for path in args.files:
        try:
            buffers.append(load_buffer(path))
        except FileOperationError as exc:
            raise SystemExit(str(exc)) from exc
    app = TeditApp(buffers=buffers, config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
