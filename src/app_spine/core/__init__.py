"""
Core primitives for app-spine.

- :mod:`.errors` — SpineError hierarchy
- :mod:`.enums` — InstallState, InstallPhase, ManifestSource
- :mod:`.events` — LogEvent and the synchronous EventBus
- :mod:`.models` — Auth, App, Selection, Workspace
- :mod:`.protocols` — collaborator contracts
- :mod:`.config` — settings, project files, credentials
- :mod:`.logging` — structlog setup
"""

from app_spine.core.enums import InstallPhase, InstallState, ManifestSource
from app_spine.core.errors import (
    AuthorizationGrantRequiredError,
    ConfigurationConflictError,
    CredentialsNotFoundError,
    GrantResolutionError,
    InstallError,
    SpineError,
)
from app_spine.core.events import EventBus, LogEvent
from app_spine.core.models import App, Auth, Selection, Workspace

__all__ = [
    "App",
    "Auth",
    "AuthorizationGrantRequiredError",
    "ConfigurationConflictError",
    "CredentialsNotFoundError",
    "EventBus",
    "GrantResolutionError",
    "InstallError",
    "InstallPhase",
    "InstallState",
    "LogEvent",
    "ManifestSource",
    "Selection",
    "SpineError",
    "Workspace",
]
