"""Editor telemetry on top of telelog.

The rest of the editor only touches four entry points:

``configure(...)`` -- choose a preset or hand over an explicit telelog config
``get_logger(name)`` -- cached logger bound to the active config
``record_event(name, ...)`` -- one structured event at the requested level
``span(name, ...)`` -- profiled block, optionally tracked as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEDIT_"
DEFAULT_LOGGER_NAME = "tedit"


@dataclass(frozen=True)
class _Settings:
    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: Optional[int] = None


# The terminal belongs to the editor, so only development logs to the console.
_PRESETS: Dict[str, _Settings] = {
    "development": _Settings(level="DEBUG"),
    "production": _Settings(console=False, log_file="tedit.log", buffered=True),
    "performance": _Settings(
        level="DEBUG",
        console=False,
        json=True,
        log_file="tedit-performance.log",
        buffered=True,
    ),
}
PRESETS = tuple(_PRESETS)

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read ``TEDIT_<name>`` from the environment."""

    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str) -> bool:
    return (env(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return value if isinstance(value, str) else str(value)


def _env_settings() -> _Settings:
    buffer_size = env("LOG_BUFFER_SIZE")
    return _Settings(
        level=(env("LOG_LEVEL") or "INFO").upper(),
        console=not _env_flag("DISABLE_CONSOLE"),
        colored=not _env_flag("NO_COLOR"),
        json=_env_flag("LOG_JSON"),
        log_file=env("LOG_FILE") or "",
        buffered=_env_flag("LOG_BUFFERED"),
        buffer_size=int(buffer_size) if buffer_size else None,
    )


def _build_config(settings: _Settings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    config.with_json_format(settings.json)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        if settings.buffer_size:
            config.with_buffer_size(settings.buffer_size)
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``telelog.Config`` to adopt as-is (profiling is forced on).
    preset:
        One of ``PRESETS``; ``TEDIT_LOG_FILE`` still overrides its log file.
        Mutually exclusive with ``config``.

    With neither, the configuration comes from ``TEDIT_*`` variables.
    Cached loggers are dropped so the next ``get_logger`` call picks up the
    new configuration.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        try:
            settings = _PRESETS[preset.strip().lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown telemetry preset '{preset}'.") from exc
        override = env("LOG_FILE")
        if override:
            settings = replace(settings, log_file=override)
        config = _build_config(settings)
    elif config is None:
        config = _build_config(_env_settings())
    else:
        config.with_profiling(True)

    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached telelog logger called ``name``."""

    if _CONFIG is None:
        configure()
    logger_name = name or env("LOGGER") or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return _LOGGERS[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    # Structured ``<level>_with`` methods take key/value pairs.
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can annotate the running block."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def _report(self, level: str, message: str, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, level, message, payload)

    def fail(self, reason: str) -> None:
        self._report("error", "span::fail", reason)

    def note(self, reason: str) -> None:
        self._report("warning", "span::note", reason)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of editor work.

    ``component=True`` tracks the block under its own name, a string tracks
    it under that component. ``metadata`` is pushed as logger context for
    the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    handle = SpanHandle(logger=log, span_name=name, component_name=component_name)

    with ExitStack() as stack:
        for key, value in (metadata or {}).items():
            handle.add_metadata(key, value)
            log.add_context(key, handle.metadata[key])
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "SpanHandle",
    "configure",
    "env",
    "get_logger",
    "record_event",
    "span",
]
