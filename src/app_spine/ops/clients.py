"""
Client factory — the collaborators one process works with.

The factory is built once at process start (by the CLI, or by a test) and
passed explicitly through :class:`~app_spine.ops.context.OperationContext`.
It owns the settings instance whose ``manifest_env`` an install run updates,
so concurrent installs must use separate factories.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from app_spine.core.config import AppSpineSettings, CredentialStore, ProjectConfig
from app_spine.core.events import EventObserver
from app_spine.core.protocols import ApiClient, LocalInstaller, Prompter, RemoteInstaller

ObserverFactory = Callable[[str], EventObserver]
"""Builds a run-scoped observer from the target team domain."""


def _default_local_installer() -> LocalInstaller:
    from app_spine.ops.apps import install_local_app

    return install_local_app


def _default_remote_installer() -> RemoteInstaller:
    from app_spine.ops.apps import add_app

    return add_app


@dataclass
class ClientFactory:
    """Collaborators and settings shared by operations.

    Attributes:
        settings: Process settings; ``settings.manifest_env`` is updated by
            each install run.
        api: Remote platform API client.
        prompter: Interactive selection collaborator.
        local_installer: Installs dev apps; defaults to
            :func:`app_spine.ops.apps.install_local_app`.
        remote_installer: Installs deployed apps; defaults to
            :func:`app_spine.ops.apps.add_app`.
        observer_factories: Called once per install run to build the run's
            event observers (renderer, telemetry).
    """

    settings: AppSpineSettings
    api: ApiClient
    prompter: Prompter
    local_installer: LocalInstaller = field(default_factory=_default_local_installer)
    remote_installer: RemoteInstaller = field(default_factory=_default_remote_installer)
    observer_factories: list[ObserverFactory] = field(default_factory=list)

    @property
    def project(self) -> ProjectConfig:
        return ProjectConfig(self.settings.project_dir)

    @property
    def credentials(self) -> CredentialStore:
        return CredentialStore(self.settings.credentials_path)

    def new_observers(self, team_domain: str) -> list[EventObserver]:
        return [factory(team_domain) for factory in self.observer_factories]
