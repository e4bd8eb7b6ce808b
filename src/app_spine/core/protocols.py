"""
Protocol definitions for app-spine's external collaborators.

The install pipeline depends on shape, not implementation.  Anything that
matches these protocols can be wired into a :class:`~app_spine.ops.clients.ClientFactory`:
the httpx adapter, the questionary prompter, or a ``MagicMock`` in tests.

Architecture:
    ::

        protocols.py
        ├── ApiClient          — remote platform calls (pass-through)
        ├── LocalInstaller     — dev install: (App, Manifest, InstallState)
        ├── RemoteInstaller    — prod install: (InstallState, App)
        ├── Prompter           — interactive target/grant selection
        └── UpdateDependency   — one updatable component of the tool

    The two installer protocols keep their differing result orders; the
    dispatcher in :mod:`app_spine.ops.install` normalizes them.

Guardrails:
    ❌ DON'T: Add implementation logic to protocol classes
    ✅ DO: Keep protocols pure contracts — implementations live in ops/ and cli/

Tags:
    protocols, typing, structural-subtyping, app-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from app_spine.core.enums import InstallState
from app_spine.core.models import App, Auth, Manifest, Selection, Workspace

if TYPE_CHECKING:
    from app_spine.core.events import EventBus
    from app_spine.ops.context import OperationContext


@runtime_checkable
class ApiClient(Protocol):
    """Remote platform API.

    Every method raises :class:`~app_spine.core.errors.ApiError` when the
    platform rejects the call.
    """

    def create_manifest(self, token: str, manifest: Manifest) -> dict[str, Any]:
        """Create an app from a manifest; returns at least ``app_id``."""
        ...

    def update_manifest(self, token: str, app_id: str, manifest: Manifest) -> dict[str, Any]:
        ...

    def developer_install(self, token: str, app_id: str) -> dict[str, Any]:
        """Install a dev app; returns ``install_state`` and ``app``."""
        ...

    def install_app(self, token: str, app_id: str, org_grant_workspace_id: str) -> dict[str, Any]:
        """Install a deployed app; returns ``install_state`` and ``app``."""
        ...

    def upload_icon(self, token: str, app_id: str, icon_path: str) -> None:
        ...

    def list_org_workspaces(self, token: str, enterprise_id: str) -> list[Workspace]:
        ...

    def apps_datastore_put(self, token: str, request: dict[str, Any]) -> dict[str, Any]:
        ...


class LocalInstaller(Protocol):
    """Installs an app from the local project manifest."""

    def __call__(
        self,
        ctx: OperationContext,
        auth: Auth,
        app: App,
        log: EventBus,
    ) -> tuple[App, Manifest, InstallState | str]:
        ...


class RemoteInstaller(Protocol):
    """Installs a previously deployed app."""

    def __call__(
        self,
        ctx: OperationContext,
        auth: Auth,
        app: App,
        org_grant_workspace_id: str,
        log: EventBus,
    ) -> tuple[InstallState | str, App]:
        ...


@runtime_checkable
class Prompter(Protocol):
    """Interactive selection collaborator."""

    @property
    def interactive(self) -> bool:
        """``False`` when no user can answer prompts (CI, piped stdin)."""
        ...

    def select_install_target(self) -> Selection:
        ...

    def select_org_workspace(
        self,
        workspaces: list[Workspace],
        *,
        all_workspaces_first: bool,
    ) -> str:
        """Return a workspace ID, or ``"all"`` for every workspace."""
        ...


@runtime_checkable
class UpdateDependency(Protocol):
    """One component that can report and install its own updates."""

    name: str

    def check_for_update(self) -> None:
        ...

    def has_update(self) -> bool:
        ...

    def print_update_notification(self) -> bool:
        """Print a notice if an update exists; returns whether it printed."""
        ...

    def install_update(self) -> None:
        ...


__all__ = [
    "ApiClient",
    "LocalInstaller",
    "RemoteInstaller",
    "Prompter",
    "UpdateDependency",
]
