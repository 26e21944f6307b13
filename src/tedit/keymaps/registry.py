"""Keymap registry storing command handlers and key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from tedit.runtime.telemetry import span

from .models import Binding, Command, CommandRef


@dataclass(slots=True)
class RegistryStats:
    command_count: int
    binding_count: int


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a key that is already bound."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns command handlers and the key token -> binding index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[Command, CommandRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_token: Dict[str, str] = {}
        self._logger_name = logger_name

    def get_command(self, command: Command) -> CommandRef:
        try:
            return self._commands[command]
        except KeyError as exc:
            raise KeyError(f"Command '{command.value}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_command(self, ref: CommandRef, *, replace: bool = False) -> CommandRef:
        with span(
            "keymaps::register_command",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"command": ref.command.value},
        ):
            if not replace and ref.command in self._commands:
                raise ValueError(f"Command '{ref.command.value}' already registered")
            self._commands[ref.command] = ref
            return ref

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "token": binding.token},
        ) as handle:
            if binding.command not in self._commands:
                handle.add_metadata("missing_command", binding.command.value)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown command "
                    f"'{binding.command.value}'"
                )

            conflict = self.lookup(binding.token)
            if conflict is not None and conflict.id != binding.id and not replace:
                handle.add_metadata("conflicts", conflict.id)
                raise KeymapConflictError(binding, [conflict])
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if conflict is not None:
                self.unregister_binding(conflict.id)
            if binding.id in self._bindings:
                self.unregister_binding(binding.id)

            self._bindings[binding.id] = binding
            self._by_token[binding.token] = binding.id
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None and self._by_token.get(binding.token) == binding_id:
            del self._by_token[binding.token]
        return binding

    def lookup(self, token: str) -> Optional[Binding]:
        binding_id = self._by_token.get(token)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def help_entries(self) -> list[tuple[str, str]]:
        """``(key label, description)`` pairs in registration order."""

        entries = []
        for binding in self._bindings.values():
            if not binding.show_in_help:
                continue
            description = binding.description or self.get_command(binding.command).description
            entries.append((binding.stroke.label, description))
        return entries

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            binding_count=len(self._bindings),
        )


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
