"""Tests for CLI wiring and error output helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import typer

from app_spine.cli.prompts import QuestionaryPrompter
from app_spine.cli.utils import build_state, exit_with_error
from app_spine.core.errors import ConfigurationConflictError
from app_spine.core.transports.http import HttpApiClient
from app_spine.ops.apps import add_app, install_local_app


class TestBuildState:
    def test_wires_default_collaborators(self, settings):
        state = build_state(settings)

        clients = state.clients
        assert clients.settings is settings
        assert isinstance(clients.api, HttpApiClient)
        assert isinstance(clients.prompter, QuestionaryPrompter)
        assert clients.local_installer is install_local_app
        assert clients.remote_installer is add_app
        assert len(clients.observer_factories) == 2
        assert not state.updates.enabled

    def test_non_interactive_setting_disables_prompts(self, settings):
        settings.non_interactive = True

        assert not build_state(settings).clients.prompter.interactive

    def test_run_observers_are_built_per_team(self, settings):
        observers = build_state(settings).clients.new_observers("acme")

        assert len(observers) == 2
        assert all(callable(o) for o in observers)


class TestExitWithError:
    @patch("app_spine.cli.utils.err_console")
    def test_prints_code_details_and_suggestion(self, mock_console):
        error = ConfigurationConflictError(
            "Apps cannot be installed",
            remediation="Install from app settings",
            details=[{"code": "project_config_manifest_source", "message": "Manifest is remote"}],
        )

        with pytest.raises(typer.Exit) as exc_info:
            exit_with_error(error)

        assert exc_info.value.exit_code == 1
        printed = " ".join(str(c.args[0]) for c in mock_console.print.call_args_list)
        assert "app_install_forbidden" in printed
        assert "project_config_manifest_source" in printed
        assert "Install from app settings" in printed
