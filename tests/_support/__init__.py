"""
Test support utilities for app-spine tests.

Helpers that don't fit as pytest fixtures but are used across test files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from app_spine.core.events import LogEvent
from app_spine.core.models import App, Auth, Selection


def write_json(path: Path, data: Any) -> Path:
    """Write ``data`` as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class EventRecorder:
    """Observer collecting every event it sees."""

    def __init__(self) -> None:
        self.events: list[LogEvent] = []

    def __call__(self, event: LogEvent) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.events]


def make_selection(
    team: str = "acme",
    *,
    is_dev: bool = False,
    app_id: str = "A1",
    token: str = "xoxp-token",
    enterprise: bool = False,
) -> Selection:
    """Build a Selection for ``team``; ``enterprise`` makes the auth org-wide."""
    auth = Auth(
        token=token,
        team_domain=team,
        team_id="T1",
        enterprise_id="E1" if enterprise else "",
        is_enterprise_install=enterprise,
    )
    app = App(app_id=app_id, app_name="Tasks", team_domain=team, team_id="T1", is_dev=is_dev)
    return Selection(auth=auth, app=app)
