"""
Project configuration stored under ``<project>/.app-spine/``.

Layout::

    .app-spine/
        config.json      {"project_id": "...", "manifest": {"source": "local"}, "icon": "assets/icon.png"}
        apps.json        {"apps": {"<team_id>": {"app_id": "...", ...}}}
        apps.dev.json    {"apps": {"<team_id>": {"app_id": "...", ...}}}
    manifest.json

Missing ``apps*.json`` files mean no app has been saved yet.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError

from app_spine.core.enums import ManifestSource
from app_spine.core.errors import ConfigError, ProjectNotFoundError
from app_spine.core.models import App, Manifest

PROJECT_DIR_NAME = ".app-spine"

M = TypeVar("M", bound=BaseModel)


class ManifestConfig(BaseModel):
    source: ManifestSource = ManifestSource.LOCAL


class ProjectConfigFile(BaseModel):
    """Schema of ``.app-spine/config.json``."""

    project_id: str = ""
    manifest: ManifestConfig = Field(default_factory=ManifestConfig)
    icon: str | None = None


class AppsFile(BaseModel):
    """Schema of ``apps.json`` / ``apps.dev.json``, keyed by team ID."""

    apps: dict[str, dict[str, Any]] = Field(default_factory=dict)


class ProjectConfig:
    """Access to one project's configuration files."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = Path(project_dir)
        self.config_dir = self.project_dir / PROJECT_DIR_NAME

    def is_valid_project(self) -> bool:
        return self.config_dir.is_dir()

    def require_valid_project(self) -> None:
        if not self.is_valid_project():
            raise ProjectNotFoundError(str(self.project_dir))

    def read_config(self) -> ProjectConfigFile:
        path = self.config_dir / "config.json"
        if not path.exists():
            return ProjectConfigFile()
        return self._parse(path, ProjectConfigFile)

    def get_manifest_source(self) -> ManifestSource:
        return self.read_config().manifest.source

    def get_icon_path(self) -> Path | None:
        icon = self.read_config().icon
        if not icon:
            return None
        return self.project_dir / icon

    def read_manifest(self) -> Manifest:
        path = self.project_dir / "manifest.json"
        if not path.exists():
            raise ConfigError(
                f"Manifest not found: {path}",
                code="manifest_not_found",
                remediation="Create manifest.json in the project root",
            )
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}", code="manifest_invalid", cause=e) from e

    def get_apps(self, *, dev: bool) -> dict[str, App]:
        """Saved apps by team ID, for dev or deployed installs."""
        path = self._apps_path(dev)
        if not path.exists():
            return {}
        apps_file = self._parse(path, AppsFile)
        return {
            team_id: App.from_dict({"team_id": team_id, **data}, is_dev=dev)
            for team_id, data in apps_file.apps.items()
        }

    def save_app(self, team_id: str, app: App, *, dev: bool) -> None:
        """Record ``app`` for ``team_id``, keeping other teams' entries."""
        path = self._apps_path(dev)
        apps_file = self._parse(path, AppsFile) if path.exists() else AppsFile()
        apps_file.apps[team_id] = app.to_dict()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(apps_file.model_dump_json(indent=2) + "\n", encoding="utf-8")

    def _apps_path(self, dev: bool) -> Path:
        return self.config_dir / ("apps.dev.json" if dev else "apps.json")

    @staticmethod
    def _parse(path: Path, model: type[M]) -> M:
        try:
            return model.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise ConfigError(f"Invalid project file {path}", code="project_config_invalid", cause=e) from e
