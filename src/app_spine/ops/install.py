"""
App install operations.

:func:`run_install` drives one installation attempt::

    NO_SELECTION → SELECTING → GRANT_RESOLVING → INSTALLING → SUCCEEDED
                        └──────────────┴──────────────┴─────→ FAILED

:func:`dispatch_install` picks the dev (local manifest) or production
(deployed app) installer and normalizes their differing result shapes into
one :class:`InstallResult`.

Every error raised from here carries ``install_state``.  It is ``""`` when no
installer ran and the installer's own state otherwise, so callers can decide
whether a failed install left anything behind on the remote side.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field

from app_spine.core.config import set_manifest_env_team_vars
from app_spine.core.enums import InstallPhase, InstallState, ManifestSource
from app_spine.core.errors import (
    ConfigurationConflictError,
    CredentialsNotFoundError,
    InstallError,
    PromptUnavailableError,
    SpineError,
)
from app_spine.core.events import INSTALL_COMPLETE, INSTALL_START, EventBus
from app_spine.core.logging import LogContext, get_logger
from app_spine.core.models import App, Selection
from app_spine.ops.apps import manifest_app_name
from app_spine.ops.context import OperationContext, set_context_token
from app_spine.ops.grants import resolve_org_grant

logger = get_logger(__name__)

_TRANSITIONS: dict[InstallPhase, frozenset[InstallPhase]] = {
    InstallPhase.NO_SELECTION: frozenset(
        {InstallPhase.SELECTING, InstallPhase.GRANT_RESOLVING, InstallPhase.FAILED}
    ),
    InstallPhase.SELECTING: frozenset({InstallPhase.GRANT_RESOLVING, InstallPhase.FAILED}),
    InstallPhase.GRANT_RESOLVING: frozenset({InstallPhase.INSTALLING, InstallPhase.FAILED}),
    InstallPhase.INSTALLING: frozenset({InstallPhase.SUCCEEDED, InstallPhase.FAILED}),
    InstallPhase.SUCCEEDED: frozenset(),
    InstallPhase.FAILED: frozenset(),
}


@dataclass(frozen=True)
class InstallResult:
    """Normalized installer output: ``error`` is set when the install failed."""

    app: App
    install_state: InstallState | str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class InstallOutcome:
    """What a successful :func:`run_install` hands back.

    ``ctx`` carries the target's session token for follow-up operations.
    """

    ctx: OperationContext
    install_state: InstallState | str
    app: App


@dataclass
class InstallRun:
    """Phase tracker for one install attempt."""

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    phase: InstallPhase = InstallPhase.NO_SELECTION
    history: list[InstallPhase] = field(default_factory=lambda: [InstallPhase.NO_SELECTION])

    def transition(self, phase: InstallPhase) -> None:
        if phase not in _TRANSITIONS[self.phase]:
            raise SpineError(f"Invalid install phase transition: {self.phase.value} -> {phase.value}")
        logger.debug("install_phase_changed", previous=self.phase.value, phase=phase.value)
        self.phase = phase
        self.history.append(phase)


# ── Pre-check ────────────────────────────────────────────────────────────


def preflight_install(ctx: OperationContext) -> None:
    """Confirm the current project allows installing apps.

    Raises:
        ProjectNotFoundError: Not inside a project directory.
        ConfigurationConflictError: The manifest is maintained in app
            settings, so the CLI must not install from the project.
    """
    project = ctx.clients.project
    project.require_valid_project()

    if project.get_manifest_source() == ManifestSource.REMOTE:
        raise ConfigurationConflictError(
            "Apps cannot be installed due to project configurations",
            remediation=(
                "Install the app from its app settings page\n"
                "Link an existing app to this project with `app-spine app link`"
            ),
            details=[
                {
                    "code": "project_config_manifest_source",
                    "message": "Cannot install apps with manifests sourced from app settings",
                }
            ],
        )


# ── Dispatcher ───────────────────────────────────────────────────────────


def dispatch_install(
    ctx: OperationContext,
    selection: Selection,
    org_grant_workspace_id: str,
    log: EventBus,
) -> InstallResult:
    """Install ``selection`` with exactly one of the two installers.

    Installer exceptions are returned in :attr:`InstallResult.error` together
    with the ``install_state`` attribute the installer attached, if any.  A dev project manifest that cannot be read is
    reported the same way.  No retries are made here.
    """
    team_name = selection.auth.team_domain
    started = time.perf_counter()

    try:
        log.log(
            "info",
            INSTALL_START,
            app_name=_display_name(ctx, selection),
            team_name=team_name,
            is_dev=selection.app.is_dev,
        )
        if selection.app.is_dev:
            app, _manifest, state = ctx.clients.local_installer(
                ctx, selection.auth, selection.app, log
            )
        else:
            state, app = ctx.clients.remote_installer(
                ctx, selection.auth, selection.app, org_grant_workspace_id, log
            )
    except Exception as e:
        state = InstallState.coerce(getattr(e, "install_state", None))
        logger.info("install_failed", install_state=str(state), error=str(e))
        return InstallResult(app=App(), install_state=state, error=e)

    elapsed = time.perf_counter() - started
    log.log("info", INSTALL_COMPLETE, install_time=f"{elapsed:.2f}s")
    return InstallResult(app=app, install_state=InstallState.coerce(state))


def _display_name(ctx: OperationContext, selection: Selection) -> str:
    """Name announced for the install; dev installs use the project manifest's."""
    app = selection.app
    name = manifest_app_name(ctx.clients.project.read_manifest()) if app.is_dev else ""
    return name or app.app_name or app.app_id


# ── Orchestrator ─────────────────────────────────────────────────────────


def run_install(
    ctx: OperationContext,
    selection: Selection | None = None,
    org_grant_workspace_id: str = "",
) -> InstallOutcome:
    """Install an app to a team.

    Args:
        ctx: Operation context.
        selection: Target to install.  ``None`` prompts for one.
        org_grant_workspace_id: Workspace grant for org-wide installs; empty
            resolves it interactively when needed.

    Returns:
        :class:`InstallOutcome` whose context holds the session token.

    Raises:
        SpineError: Any failure, with ``install_state`` set.  Prompt errors
            are re-raised unchanged.
    """
    run = InstallRun()
    with LogContext(install_run_id=run.run_id):
        if selection is None:
            selection = _select_target(ctx, run)

        if not selection.auth.team_domain:
            run.transition(InstallPhase.FAILED)
            raise CredentialsNotFoundError()

        with LogContext(team=selection.auth.team_domain, is_dev=selection.app.is_dev):
            run.transition(InstallPhase.GRANT_RESOLVING)
            try:
                grant = resolve_org_grant(ctx, selection, org_grant_workspace_id, True)
            except SpineError:
                run.transition(InstallPhase.FAILED)
                raise

            settings = ctx.clients.settings
            settings.manifest_env = set_manifest_env_team_vars(
                settings.manifest_env,
                selection.app.team_domain or selection.auth.team_domain,
                selection.app.is_dev,
            )

            log = EventBus(*ctx.clients.new_observers(selection.auth.team_domain))
            run.transition(InstallPhase.INSTALLING)
            try:
                result = dispatch_install(ctx, selection, grant, log)
            finally:
                log.close()

            if not result.ok:
                run.transition(InstallPhase.FAILED)
                raise _install_error(result, selection)

            run.transition(InstallPhase.SUCCEEDED)
            logger.info("install_succeeded", install_state=str(result.install_state), app_id=result.app.app_id)
            return InstallOutcome(
                ctx=set_context_token(ctx, selection.auth.token),
                install_state=result.install_state,
                app=result.app,
            )


def _select_target(ctx: OperationContext, run: InstallRun) -> Selection:
    run.transition(InstallPhase.SELECTING)
    prompter = ctx.clients.prompter
    if ctx.clients.settings.non_interactive or not prompter.interactive:
        run.transition(InstallPhase.FAILED)
        raise PromptUnavailableError(
            "No team was selected and prompts are unavailable",
            remediation="Pass --team to choose the installation target",
        )
    try:
        return prompter.select_install_target()
    except Exception:
        run.transition(InstallPhase.FAILED)
        raise


def _install_error(result: InstallResult, selection: Selection) -> SpineError:
    """The error to raise for a failed dispatch, carrying its state."""
    error = result.error
    if isinstance(error, SpineError):
        error.install_state = result.install_state
        return error
    return InstallError(
        f"Failed to install the app: {error}",
        cause=error,
        install_state=result.install_state,
    ).with_context(team_domain=selection.auth.team_domain, app_id=selection.app.app_id or None)
