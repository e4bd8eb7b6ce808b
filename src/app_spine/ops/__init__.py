"""
Operations layer for app-spine.

Every operation takes an :class:`~app_spine.ops.context.OperationContext`
first.  The CLI is a thin transport over these functions.

- :mod:`.install` — preflight, dispatcher and install orchestrator
- :mod:`.grants` — org workspace grant resolution
- :mod:`.apps` — default local/remote installers
- :mod:`.datastore` — datastore writes
- :mod:`.targets` — installation targets from credentials
- :mod:`.update` — update notifications
- :mod:`.telemetry` — lifecycle event logging
"""

from app_spine.ops.clients import ClientFactory
from app_spine.ops.context import (
    CONTEXT_TOKEN_KEY,
    OperationContext,
    get_context_token,
    set_context_token,
)
from app_spine.ops.install import (
    InstallOutcome,
    InstallResult,
    dispatch_install,
    preflight_install,
    run_install,
)

__all__ = [
    "CONTEXT_TOKEN_KEY",
    "ClientFactory",
    "InstallOutcome",
    "InstallResult",
    "OperationContext",
    "dispatch_install",
    "get_context_token",
    "preflight_install",
    "run_install",
    "set_context_token",
]
