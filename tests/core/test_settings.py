"""Tests for AppSpineSettings and manifest hook environment."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from app_spine.core.config import AppSpineSettings, load_settings, set_manifest_env_team_vars
from app_spine.core.config.environment import ENV_VAR, WORKSPACE_VAR


class TestAppSpineSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("APP_SPINE_SKIP_UPDATE_CHECK")

        settings = AppSpineSettings()

        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert not settings.non_interactive
        assert not settings.skip_update_check
        assert settings.manifest_env == {}

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("APP_SPINE_NON_INTERACTIVE", "true")
        monkeypatch.setenv("APP_SPINE_API_HOST", "https://api.test")
        monkeypatch.setenv("APP_SPINE_MANIFEST_ENV", '{"REGION": "eu"}')

        settings = AppSpineSettings()

        assert settings.non_interactive
        assert settings.api_host == "https://api.test"
        assert settings.manifest_env == {"REGION": "eu"}

    def test_credentials_path_under_config_dir(self, tmp_path):
        settings = AppSpineSettings(config_dir=tmp_path)

        assert settings.credentials_path == tmp_path / "credentials.json"

    def test_log_format_is_normalized(self):
        assert AppSpineSettings(log_format="JSON").log_format == "json"

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            AppSpineSettings(log_format="xml")

    def test_load_settings_overrides_env(self, monkeypatch):
        monkeypatch.setenv("APP_SPINE_LOG_LEVEL", "INFO")

        assert load_settings(log_level="DEBUG").log_level == "DEBUG"

    def test_load_settings_returns_fresh_instances(self):
        first, second = load_settings(), load_settings()
        first.manifest_env = {"A": "1"}

        assert first is not second
        assert second.manifest_env == {}

    def test_project_dir_defaults_to_cwd(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        assert AppSpineSettings().project_dir == Path(tmp_path)


class TestSetManifestEnvTeamVars:
    def test_dev_install(self):
        env = set_manifest_env_team_vars({}, "acme", True)

        assert env == {WORKSPACE_VAR: "acme", ENV_VAR: "local"}

    def test_deployed_install(self):
        assert set_manifest_env_team_vars(None, "acme", False)[ENV_VAR] == "deployed"

    def test_input_not_modified(self):
        original = {"EXTRA": "1", WORKSPACE_VAR: "old"}

        env = set_manifest_env_team_vars(original, "acme", False)

        assert original == {"EXTRA": "1", WORKSPACE_VAR: "old"}
        assert env == {"EXTRA": "1", WORKSPACE_VAR: "acme", ENV_VAR: "deployed"}
