"""
Configuration for app-spine.

- :mod:`.settings` — process settings from ``APP_SPINE_*`` env vars
- :mod:`.project` — per-project files under ``.app-spine/``
- :mod:`.credentials` — saved login sessions
- :mod:`.environment` — manifest hook environment variables
"""

from app_spine.core.config.credentials import CredentialStore
from app_spine.core.config.environment import set_manifest_env_team_vars
from app_spine.core.config.project import ProjectConfig
from app_spine.core.config.settings import AppSpineSettings, load_settings

__all__ = [
    "AppSpineSettings",
    "CredentialStore",
    "ProjectConfig",
    "load_settings",
    "set_manifest_env_team_vars",
]
