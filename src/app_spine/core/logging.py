"""
Structured logging for app-spine.

Log lines go to stderr so command output on stdout stays machine-readable
(``--json``).  The CLI calls :func:`configure_logging` once; everything else
only asks for a logger and binds per-run keys.

    >>> logger = get_logger(__name__)
    >>> with LogContext(install_run_id="3f2a9c", team="acme"):
    ...     logger.info("install_phase_changed", phase="installing")

Tags:
    logging, structlog, app-spine
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

REDACTED = "[redacted]"
_SECRET_KEYS = frozenset({"token", "authorization"})


def _redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask session tokens passed to a log call."""
    for key in _SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _add_tool_name(name: str) -> Processor:
    def add_tool(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("tool", name)
        return event_dict

    return add_tool


def configure_logging(
    level: str = "WARNING",
    json_format: bool | None = None,
    service: str = "app-spine",
    add_timestamp: bool = True,
) -> None:
    """Set up structlog for one CLI process.

    Args:
        level: Minimum level name; unknown names fall back to WARNING.
        json_format: ``None`` picks JSON when stderr is not a terminal.
        service: Value of the ``tool`` key on every line.
        add_timestamp: Prefix lines with a UTC ISO timestamp.
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    processors: list[Processor] = []
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    processors += [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_tool_name(service),
        _redact_secrets,
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors += [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    min_level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)


def bind_context(**values: Any) -> None:
    """Attach keys to every later log line in this context."""
    structlog.contextvars.bind_contextvars(**values)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Bind keys for the duration of a ``with`` block.

    On exit each key gets back the value it had before, so nested blocks
    binding the same key behave.
    """

    def __init__(self, **values: Any):
        self._values = values
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> LogContext:
        self._tokens = dict(structlog.contextvars.bind_contextvars(**self._values))
        return self

    def __exit__(self, *exc_info: object) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)


__all__ = [
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
