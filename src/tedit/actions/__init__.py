"""Command handlers; each takes the editor and returns a ``CommandResult``."""

from . import editing, navigation, selection, session

__all__ = ["editing", "navigation", "selection", "session"]
