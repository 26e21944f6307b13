"""Terminal text editor built around a line-oriented edit engine."""

__all__ = [
    "actions",
    "adapters",
    "base",
    "buffer",
    "config",
    "files",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
