"""Loading and crash-safe saving of newline-delimited UTF-8 text."""

from __future__ import annotations

import os
import stat
import tempfile
from typing import List, Optional, Sequence

from tedit.buffer import Buffer
from tedit.runtime import telemetry


class FileOperationError(RuntimeError):
    """Open or save failed; the message is suitable for the status line."""

    def __init__(
        self, message: str, *, path: str, temp_path: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.temp_path = temp_path


def read_lines(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8", newline="") as handle:
        content = handle.read()
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    return lines or [""]


def load_buffer(path: str) -> Buffer:
    """Open ``path``; a missing file gives an empty buffer bound to it."""

    with telemetry.span("files::load", component="files", metadata={"path": path}):
        try:
            lines = read_lines(path)
        except FileNotFoundError:
            telemetry.record_event("files.new", data={"path": path})
            return Buffer(name=path, path=path)
        except (OSError, UnicodeDecodeError) as exc:
            raise FileOperationError(
                f"Couldn't open file: {exc}", path=path
            ) from exc
    telemetry.record_event("files.loaded", data={"path": path, "lines": len(lines)})
    return Buffer.from_lines(lines, path=path)


def _copy_mode(source: str, target: str) -> None:
    try:
        mode = stat.S_IMODE(os.stat(source).st_mode)
    except FileNotFoundError:
        return
    os.chmod(target, mode)


def save_lines(path: str, lines: Sequence[str]) -> None:
    """Write ``lines`` next to ``path`` and rename the result over it.

    An existing destination keeps its permission bits.
    A failure before the rename leaves ``path`` untouched and the temporary
    file where it is, named in the raised ``FileOperationError``.
    """

    directory = os.path.dirname(os.path.abspath(path))
    temp_path: Optional[str] = None
    with telemetry.span(
        "files::save", component="files", metadata={"path": path}
    ) as handle:
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                newline="\n",
                dir=directory,
                prefix=".tmp",
                delete=False,
            ) as temp:
                temp_path = temp.name
                handle.add_metadata("temp_path", temp_path)
                for line in lines:
                    temp.write(line + "\n")
                temp.flush()
                os.fsync(temp.fileno())
                _copy_mode(path, temp_path)
        except OSError as exc:
            if temp_path is None:
                message = f"Failed to open temporary file: {exc}"
            else:
                message = f"Failed to write temporary file {temp_path}: {exc}"
            raise FileOperationError(message, path=path, temp_path=temp_path) from exc

        try:
            os.replace(temp_path, path)
        except OSError as exc:
            raise FileOperationError(
                f"Failed to replace {path} with temporary file {temp_path}: {exc}",
                path=path,
                temp_path=temp_path,
            ) from exc
    telemetry.record_event("files.saved", data={"path": path, "lines": len(lines)})


def save_buffer(buffer: Buffer, path: Optional[str] = None) -> str:
    target = path or buffer.path
    if not target:
        raise ValueError("buffer has no file name")
    save_lines(target, buffer.document.snapshot())
    buffer.mark_saved(target)
    return target


__all__ = [
    "FileOperationError",
    "load_buffer",
    "read_lines",
    "save_buffer",
    "save_lines",
]
