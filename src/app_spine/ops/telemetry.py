"""
Telemetry observer.

Forwards every lifecycle event to the structured log with a hashed host name
and the session the event belongs to.  Payload values are logged as text;
tokens never appear in event payloads.
"""

from __future__ import annotations

import uuid

from app_spine.core.events import EventObserver, LogEvent
from app_spine.core.hashing import get_hostname
from app_spine.core.logging import get_logger

logger = get_logger("app_spine.telemetry")


def new_telemetry_observer(team_domain: str, session_id: str | None = None) -> EventObserver:
    """Observer logging each event as ``lifecycle_event``."""
    hostname = get_hostname()
    session_id = session_id or uuid.uuid4().hex

    def observe(event: LogEvent) -> None:
        logger.info(
            "lifecycle_event",
            event_name=event.name,
            event_level=event.level,
            team=team_domain,
            host=hostname,
            session_id=session_id,
            **{f"data.{key}": event.data_to_string(key) for key in event.data},
        )

    return observe
