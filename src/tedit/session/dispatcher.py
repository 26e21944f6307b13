"""Key event to command dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tedit.actions import editing
from tedit.base import CommandResult, KeyInput
from tedit.keymaps import KeymapRegistry
from tedit.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from .editor import Editor

TEXT_KEYS = {"tab": "\t"}


class CommandDispatcher:
    """Looks a key up in the registry and runs the bound command.

    Unbound keys that carry printable text (and Tab) are typed into the
    active buffer; anything else is reported as ``unbound``.
    """

    def __init__(self, registry: KeymapRegistry) -> None:
        self.registry = registry

    def handle_key(self, editor: "Editor", key: KeyInput) -> CommandResult:
        token = key.token
        binding = self.registry.lookup(token)
        if binding is not None:
            ref = self.registry.get_command(binding.command)
            with telemetry.span(
                "dispatch::command",
                component="dispatch",
                metadata={"token": token, "command": binding.command.value},
            ) as handle:
                result = ref(editor)
                handle.add_metadata("status", getattr(result, "status", "ok"))
            if isinstance(result, CommandResult):
                return result
            return CommandResult(consumed=True)

        text = TEXT_KEYS.get(token)
        if text is None and key.text and not key.modifiers and key.text.isprintable():
            text = key.text
        if text is not None:
            with telemetry.span("dispatch::text", component="dispatch"):
                return editing.insert_text(editor, text)

        telemetry.record_event("dispatch.unbound", level="debug", data={"token": token})
        return CommandResult(consumed=False, status="unbound", message=token)


__all__ = ["CommandDispatcher"]
