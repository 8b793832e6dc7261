"""Structured logging and profiling for the sync core, on top of telelog.

Loggers are built from a telelog ``Config`` chosen either from the
``PAGE_SYNC_*`` environment or from one of the named :data:`PRESETS`.
Sync code only touches :func:`get_logger`, :func:`record_event` and
:func:`span`; hosts pick a preset once at start-up with :func:`configure`.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from page_sync.config import env_flag, env_value

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = env_value("LOGGER", "page_sync") or "page_sync"

# Each preset is a list of ``Config.with_*`` calls applied in order.
PRESETS: Mapping[str, tuple[tuple[str, Any], ...]] = {
    "development": (
        ("min_level", "DEBUG"),
        ("console_output", True),
        ("colored_output", True),
    ),
    "demo": (
        ("min_level", "INFO"),
        ("console_output", False),
        ("file_output", "page_sync-demo.log"),
        ("buffering", True),
    ),
    "quiet": (
        ("min_level", "ERROR"),
        ("console_output", False),
    ),
}

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _apply(config: Any, calls: tuple[tuple[str, Any], ...]) -> Any:
    for option, value in calls:
        getattr(config, f"with_{option}")(value)
    # spans are built on logger.profile
    config.with_profiling(True)
    return config


def _env_calls() -> tuple[tuple[str, Any], ...]:
    calls: list[tuple[str, Any]] = [
        ("min_level", (env_value("LOG_LEVEL") or "INFO").upper())
    ]
    console = not env_flag("DISABLE_CONSOLE", False)
    calls.append(("console_output", console))
    if console:
        calls.append(("colored_output", not env_flag("NO_COLOR", False)))
    if env_flag("LOG_JSON", False):
        calls.append(("json_format", True))
    log_file = env_value("LOG_FILE")
    if log_file:
        calls.append(("file_output", log_file))
    if env_flag("LOG_BUFFERED", False):
        calls.append(("buffering", True))
        calls.append(("buffer_size", int(env_value("LOG_BUFFER_SIZE") or "2048")))
    return tuple(calls)


def configure(*, preset: Optional[str] = None) -> None:
    """Rebuild every logger from ``preset``, or from the environment when omitted."""

    global _config
    if preset is None:
        calls = _env_calls()
    else:
        try:
            calls = PRESETS[preset.lower()]
        except KeyError as exc:
            known = ", ".join(sorted(PRESETS))
            raise ValueError(f"Unknown log preset '{preset}' (known: {known})") from exc
    _config = _apply(tl.Config(), calls)
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` for ``name``."""

    if _config is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _loggers.get(logger_name)
    if logger is None:
        logger = _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return logger


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    level = level.lower()
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(logger, level, None)
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
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Lets the profiled block attach metadata reported on failure."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, tracking it under ``component`` when one is given.

    ``metadata`` is pushed as logger context for the duration of the block.
    An exception escaping the block is reported with ``span::fail`` and
    re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(logger=log, name=name, component=component, metadata=dict(context))

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = ["PRESETS", "SpanHandle", "configure", "get_logger", "record_event", "span"]
