"""Environment variables exposed to manifest hooks."""

from __future__ import annotations

from app_spine.core.enums import ManifestEnv

WORKSPACE_VAR = "APP_SPINE_WORKSPACE"
ENV_VAR = "APP_SPINE_ENV"


def set_manifest_env_team_vars(
    manifest_env: dict[str, str] | None,
    team_domain: str,
    is_dev: bool,
) -> dict[str, str]:
    """Return ``manifest_env`` plus the target team and environment.

    The input mapping is not modified.
    """
    merged = dict(manifest_env or {})
    merged[WORKSPACE_VAR] = team_domain
    merged[ENV_VAR] = (ManifestEnv.LOCAL if is_dev else ManifestEnv.DEPLOYED).value
    return merged
