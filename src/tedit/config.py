"""Editor settings with ``TEDIT_*`` environment overrides."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tedit.runtime.telemetry import PRESETS, env

DEFAULT_PAGE_SIZE = 20
DEFAULT_TAB_WIDTH = 8


def _env_int(name: str, fallback: int) -> int:
    raw = env(name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


@dataclass(slots=True)
class EditorConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    tab_width: int = DEFAULT_TAB_WIDTH
    log_preset: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EditorConfig":
        preset = env("LOG_PRESET")
        if preset is not None and preset.lower() not in PRESETS:
            preset = None
        return cls(
            page_size=_env_int("PAGE_SIZE", DEFAULT_PAGE_SIZE),
            tab_width=_env_int("TAB_WIDTH", DEFAULT_TAB_WIDTH),
            log_preset=preset.lower() if preset else None,
        )


__all__ = ["EditorConfig"]
