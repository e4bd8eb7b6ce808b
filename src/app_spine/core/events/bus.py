"""
Synchronous event bus.

Manifesto:
    The install pipeline needs a side channel, not a gate.  Events are
    delivered immediately, in registration order, on the emitting thread.
    A failing observer is logged and skipped; it never reaches the
    orchestrator.

A bus lives for exactly one run.  ``close()`` is called when the run returns,
after which emissions are dropped.

Tags:
    app-spine, events, observers, single-producer

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from app_spine.core.events import SUCCESS, EventObserver, LogEvent
from app_spine.core.logging import get_logger

__all__ = ["EventBus"]

logger = get_logger(__name__)


class EventBus:
    """Single-run, single-producer event bus.

    ``data`` is a shared payload the producer may fill in before calling
    :meth:`log`; keyword arguments passed to :meth:`log` are merged over it
    for that one event.

    Example::

        bus = EventBus(render)
        bus.data["put_result"] = result
        bus.log("info", "on_put_result")
        return bus.success_event()
    """

    def __init__(self, *observers: EventObserver) -> None:
        self._observers: list[EventObserver] = list(observers)
        self._closed = False
        self.data: dict[str, Any] = {}

    def register(self, observer: EventObserver) -> None:
        """Attach an observer for the rest of this run."""
        self._observers.append(observer)

    def emit(self, event: LogEvent) -> None:
        """Deliver ``event`` to every observer, isolating observer failures."""
        if self._closed:
            logger.debug("event_dropped_after_close", event_name=event.name)
            return

        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as e:
                logger.warning(
                    "event_observer_error",
                    event_name=event.name,
                    observer=getattr(observer, "__qualname__", repr(observer)),
                    error=str(e),
                )

    def log(self, level: str, name: str, **data: Any) -> LogEvent:
        """Build an event from the shared payload plus ``data`` and emit it."""
        event = LogEvent(name=name, level=level, data={**self.data, **data})
        self.emit(event)
        return event

    def success_event(self) -> LogEvent:
        """Event summarising a successful operation; not emitted."""
        return LogEvent(name=SUCCESS, level="info", data=self.data)

    def close(self) -> None:
        """Stop delivery and release observers."""
        self._closed = True
        self._observers.clear()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def observer_count(self) -> int:
        """Number of registered observers."""
        return len(self._observers)
