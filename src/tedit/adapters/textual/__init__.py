"""Textual front end; ``controller`` has no Textual dependency."""

from .controller import QueueKeySource, TextualEditorAdapter, TextualUIHooks

__all__ = ["QueueKeySource", "TextualEditorAdapter", "TextualUIHooks"]
