"""
Shared pytest fixtures for app-spine tests.

This module provides:
- Isolated settings pointing at a temporary project and config directory
- A ClientFactory wired to MagicMock collaborators
- An event recorder wired in as the run's observer
- Dev and prod selections

Usage:
    Fixtures are auto-discovered by pytest.  Non-fixture helpers live in
    ``tests._support``.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure app_spine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from app_spine.core.config import AppSpineSettings
from app_spine.core.models import Selection
from app_spine.ops.clients import ClientFactory
from app_spine.ops.context import OperationContext
from tests._support import EventRecorder, make_selection, write_json


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the real home directory and the network."""
    monkeypatch.setenv("APP_SPINE_SKIP_UPDATE_CHECK", "true")
    monkeypatch.setenv("APP_SPINE_CONFIG_DIR", str(tmp_path / "home"))
    monkeypatch.delenv("APP_SPINE_NON_INTERACTIVE", raising=False)


# =============================================================================
# Project files
# =============================================================================


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A valid project with a local manifest source."""
    root = tmp_path / "project"
    write_json(root / ".app-spine" / "config.json", {"project_id": "p1", "manifest": {"source": "local"}})
    write_json(root / "manifest.json", {"display_information": {"name": "Tasks"}})
    return root


@pytest.fixture
def settings(tmp_path: Path, project_dir: Path) -> AppSpineSettings:
    return AppSpineSettings(
        project_dir=project_dir,
        config_dir=tmp_path / "home",
        skip_update_check=True,
    )


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def api() -> MagicMock:
    return MagicMock(name="api")


@pytest.fixture
def prompter() -> MagicMock:
    mock = MagicMock(name="prompter")
    mock.interactive = True
    return mock


@pytest.fixture
def local_installer() -> MagicMock:
    return MagicMock(name="local_installer")


@pytest.fixture
def remote_installer() -> MagicMock:
    return MagicMock(name="remote_installer")


@pytest.fixture
def clients(settings, api, prompter, local_installer, remote_installer, recorder) -> ClientFactory:
    return ClientFactory(
        settings=settings,
        api=api,
        prompter=prompter,
        local_installer=local_installer,
        remote_installer=remote_installer,
        observer_factories=[lambda team_domain: recorder],
    )


@pytest.fixture
def ctx(clients) -> OperationContext:
    return OperationContext(clients=clients, caller="test")


# =============================================================================
# Selections
# =============================================================================


@pytest.fixture
def prod_selection() -> Selection:
    return make_selection(is_dev=False)


@pytest.fixture
def dev_selection() -> Selection:
    return make_selection(is_dev=True)
