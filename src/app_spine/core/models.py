"""
Domain records shared by the ops and CLI layers.

All records are frozen dataclasses: a :class:`Selection` is built once by the
prompt (or the caller) and consumed by exactly one install attempt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Manifest = dict[str, Any]


@dataclass(frozen=True)
class Auth:
    """Session credential for one team or organization.

    Attributes:
        token: Session token sent to the remote API.
        team_domain: Domain of the team the token belongs to; empty when the
            credential is unusable.
        team_id: Team (or organization) identifier.
        user_id: Identifier of the authenticated user.
        enterprise_id: Organization identifier for enterprise credentials.
        is_enterprise_install: ``True`` when the token is org-wide, which
            makes a workspace grant necessary for installs.
    """

    token: str
    team_domain: str = ""
    team_id: str = ""
    user_id: str = ""
    enterprise_id: str = ""
    is_enterprise_install: bool = False


@dataclass(frozen=True)
class App:
    """An application as known locally or as returned by the remote side."""

    app_id: str = ""
    app_name: str = ""
    team_domain: str = ""
    team_id: str = ""
    enterprise_id: str = ""
    is_dev: bool = False
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_new(self) -> bool:
        """No remote app has been created for this descriptor yet."""
        return not self.app_id

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, is_dev: bool = False) -> App:
        known = {"app_id", "app_name", "team_domain", "team_id", "enterprise_id", "is_dev"}
        return cls(
            app_id=data.get("app_id", ""),
            app_name=data.get("app_name", ""),
            team_domain=data.get("team_domain", ""),
            team_id=data.get("team_id", ""),
            enterprise_id=data.get("enterprise_id", ""),
            is_dev=bool(data.get("is_dev", is_dev)),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        """Fields as saved in the project apps files."""
        data = {
            "app_id": self.app_id,
            "app_name": self.app_name,
            "team_domain": self.team_domain,
            "team_id": self.team_id,
            "enterprise_id": self.enterprise_id,
        }
        return {**self.extra, **{k: v for k, v in data.items() if v}}


@dataclass(frozen=True)
class Selection:
    """Installation target: credential plus the app descriptor to install."""

    auth: Auth
    app: App

    @property
    def label(self) -> str:
        kind = "local" if self.app.is_dev else "deployed"
        name = self.app.app_id or "new app"
        return f"{self.auth.team_domain or self.auth.team_id} ({kind}: {name})"


@dataclass(frozen=True)
class Workspace:
    """A workspace inside an organization, offered as a grant target."""

    team_id: str
    team_domain: str = ""
    name: str = ""


@dataclass(frozen=True)
class DatastorePutRequest:
    """Request to write one item into an app datastore."""

    datastore: str
    app_id: str
    item: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"datastore": self.datastore, "app": self.app_id, "item": self.item}
