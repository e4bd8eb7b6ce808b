"""Shared fixtures for app_spine.cli tests."""

import logging
from unittest.mock import patch

import pytest
import structlog
from typer.testing import CliRunner

from app_spine.cli.utils import CliState
from app_spine.ops.update import UpdateNotification
from tests._support import write_json


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep log lines out of command output.

    The root callback would bind structlog to the runner's stderr, which is
    closed once the invocation returns.
    """
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    with patch("app_spine.core.logging.configure_logging"):
        yield
    structlog.reset_defaults()


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def state(settings, clients) -> CliState:
    """CLI process state wired to the mock collaborators."""
    return CliState(
        settings=settings,
        clients=clients,
        updates=UpdateNotification([], enabled=False),
        session_id="test-session",
    )


@pytest.fixture()
def credentials(settings):
    return write_json(settings.credentials_path, {"T1": {"token": "xoxp-acme", "team_domain": "acme"}})


@pytest.fixture()
def saved_apps(project_dir):
    write_json(project_dir / ".app-spine" / "apps.json", {"apps": {"T1": {"app_id": "A1", "app_name": "Tasks"}}})
