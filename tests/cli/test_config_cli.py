"""Tests for ``app-spine config`` CLI commands."""

from __future__ import annotations

import json

from app_spine.cli.app import app


class TestConfigShow:
    def test_table(self, runner, state):
        result = runner.invoke(app, ["config", "show"], obj=state)

        assert result.exit_code == 0, result.output
        assert "Manifest Source" in result.output
        assert "local" in result.output
        assert "log_level" in result.output

    def test_table_outside_project(self, runner, state, tmp_path):
        state.settings.project_dir = tmp_path / "nowhere"

        result = runner.invoke(app, ["config", "show"], obj=state)

        assert result.exit_code == 0, result.output
        assert "Not a project directory" in result.output

    def test_json(self, runner, state):
        result = runner.invoke(app, ["config", "show", "--format", "json"], obj=state)

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["log_level"] == "WARNING"
        assert data["skip_update_check"] is True

    def test_env(self, runner, state):
        result = runner.invoke(app, ["config", "show", "-f", "env"], obj=state)

        assert result.exit_code == 0, result.output
        assert "APP_SPINE_LOG_LEVEL=WARNING" in result.output
        assert "APP_SPINE_NON_INTERACTIVE=False" in result.output
