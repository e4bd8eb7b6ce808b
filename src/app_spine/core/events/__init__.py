"""Lifecycle events for install runs.

Why This Package Exists
-----------------------
The installers know when a manifest is created, when an icon upload fails,
when the install finishes.  The terminal renderer and telemetry want to hear
about it, but the orchestration must not know how anything is displayed.
``EventBus`` carries named :class:`LogEvent` objects from producer to
observers synchronously, on the caller's thread, in emission order.

Usage::

    from app_spine.core.events import EventBus, LogEvent, INSTALL_START

    bus = EventBus()

    def render(event: LogEvent) -> None:
        if event.name == INSTALL_START:
            print(f"Installing {event.data_to_string('app_name')}")

    bus.register(render)
    bus.log("info", INSTALL_START, app_name="tasks", team_name="acme")

Observers must ignore event names they do not recognise.

Modules
-------
bus         EventBus -- synchronous, ordered, failure-isolated delivery
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

__all__ = [
    "LogEvent",
    "EventObserver",
    "EventBus",
    "INSTALL_MANIFEST",
    "INSTALL_MANIFEST_CREATE",
    "INSTALL_MANIFEST_UPDATE",
    "INSTALL_START",
    "INSTALL_ICON_SUCCESS",
    "INSTALL_ICON_ERROR",
    "INSTALL_COMPLETE",
    "ON_PUT_RESULT",
    "SUCCESS",
]


# ── Event names ──────────────────────────────────────────────────────────

INSTALL_MANIFEST = "install_manifest"
INSTALL_MANIFEST_CREATE = "install_manifest_create"
INSTALL_MANIFEST_UPDATE = "install_manifest_update"
INSTALL_START = "install_start"
INSTALL_ICON_SUCCESS = "install_icon_success"
INSTALL_ICON_ERROR = "install_icon_error"
INSTALL_COMPLETE = "install_complete"
ON_PUT_RESULT = "on_put_result"
SUCCESS = "success"


# ── Event Model ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LogEvent:
    """Immutable named event with a key/value payload.

    Attributes:
        name: Event name (e.g. ``install_start``)
        level: Log level the producer attached (``info``, ``debug``, ``warn``)
        data: Read-only snapshot of the payload at emission time
        timestamp: When the event was created (UTC)
    """

    name: str
    level: str = "info"
    data: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def data_to_string(self, key: str) -> str:
        """Payload value as text; missing keys and ``None`` give ``""``."""
        value = self.data.get(key)
        if value is None:
            return ""
        return str(value)


EventObserver = Callable[[LogEvent], None]


from app_spine.core.events.bus import EventBus  # noqa: E402
