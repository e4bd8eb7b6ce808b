"""
Saved login sessions.

``credentials.json`` maps a team ID to the session recorded at login::

    {"T0123": {"token": "xoxp-...", "team_domain": "acme", "user_id": "U1"}}

Logging in is handled elsewhere; this module only reads what was saved.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, RootModel, ValidationError

from app_spine.core.errors import ConfigError
from app_spine.core.models import Auth


class CredentialEntry(BaseModel):
    """One saved session."""

    token: str = ""
    team_domain: str = ""
    team_id: str = ""
    user_id: str = ""
    enterprise_id: str = ""
    is_enterprise_install: bool = False


class CredentialsFile(RootModel[dict[str, CredentialEntry]]):
    """Schema of ``credentials.json``, keyed by team ID."""


class CredentialStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def list_auths(self) -> list[Auth]:
        """Saved sessions, sorted by team domain."""
        if not self.path.exists():
            return []
        try:
            saved = CredentialsFile.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise ConfigError(
                f"Invalid credentials file {self.path}",
                code="credentials_invalid",
                remediation="Log in again to rewrite the saved sessions",
                cause=e,
            ) from e

        auths = [
            Auth(
                token=entry.token,
                team_domain=entry.team_domain,
                team_id=entry.team_id or team_id,
                user_id=entry.user_id,
                enterprise_id=entry.enterprise_id,
                is_enterprise_install=entry.is_enterprise_install,
            )
            for team_id, entry in saved.root.items()
        ]
        return sorted(auths, key=lambda a: a.team_domain)
