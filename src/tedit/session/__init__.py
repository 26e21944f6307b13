"""Editor session: buffer collection, prompts and key dispatch."""

from .dispatcher import CommandDispatcher
from .editor import Editor
from .prompt import KeyPrompter, LineInput, PromptState

__all__ = [
    "CommandDispatcher",
    "Editor",
    "KeyPrompter",
    "LineInput",
    "PromptState",
]
