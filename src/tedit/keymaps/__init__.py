"""Command enum, key binding models and the default key table."""

from .models import Binding, Command, CommandRef, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import DEFAULT_BINDINGS, DEFAULT_COMMANDS, load_default_keymaps

__all__ = [
    "Binding",
    "Command",
    "CommandRef",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "load_default_keymaps",
]
