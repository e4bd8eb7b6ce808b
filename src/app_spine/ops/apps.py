"""
Default installers built on the :class:`~app_spine.core.protocols.ApiClient`.

- :func:`install_local_app` pushes the project manifest (create or update),
  uploads the icon and performs a developer install.
- :func:`add_app` installs an app that was already deployed.

They keep the two result orders of the installer protocols; the dispatcher in
:mod:`app_spine.ops.install` is the one place that normalizes them.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from app_spine.core.enums import InstallState
from app_spine.core.errors import InstallError, SpineError
from app_spine.core.events import (
    INSTALL_ICON_ERROR,
    INSTALL_ICON_SUCCESS,
    INSTALL_MANIFEST,
    INSTALL_MANIFEST_CREATE,
    INSTALL_MANIFEST_UPDATE,
    EventBus,
)
from app_spine.core.logging import get_logger
from app_spine.core.models import App, Auth, Manifest
from app_spine.ops.context import OperationContext

logger = get_logger(__name__)


def install_local_app(
    ctx: OperationContext,
    auth: Auth,
    app: App,
    log: EventBus,
) -> tuple[App, Manifest, InstallState | str]:
    """Install ``app`` from the local project manifest.

    Once the manifest has been created or updated remotely, any later failure
    is raised with ``install_state`` :attr:`InstallState.FAILED_PARTIAL`.
    """
    api = ctx.clients.api
    project = ctx.clients.project
    manifest = project.read_manifest()
    app_name = manifest_app_name(manifest) or app.app_name

    log.log("debug", INSTALL_MANIFEST)
    if app.is_new:
        created = api.create_manifest(auth.token, manifest)
        app_id = created.get("app_id", "")
        log.log("info", INSTALL_MANIFEST_CREATE, app_name=app_name, team_name=auth.team_domain)
    else:
        api.update_manifest(auth.token, app.app_id, manifest)
        app_id = app.app_id
        log.log("info", INSTALL_MANIFEST_UPDATE, app_name=app_name, team_name=auth.team_domain)

    installed = replace(
        app,
        app_id=app_id,
        app_name=app_name,
        team_domain=app.team_domain or auth.team_domain,
        team_id=app.team_id or auth.team_id,
        is_dev=True,
    )

    try:
        if app.is_new:
            project.save_app(installed.team_id, installed, dev=True)
        _upload_icon(ctx, auth, installed, log)
        response = api.developer_install(auth.token, app_id)
    except SpineError as e:
        e.install_state = InstallState.FAILED_PARTIAL
        raise
    except Exception as e:
        raise InstallError(
            f"Developer install failed: {e}",
            cause=e,
            install_state=InstallState.FAILED_PARTIAL,
        ) from e

    state = response.get("install_state", InstallState.SUCCEEDED)
    return _merge_app(installed, response), manifest, state


def add_app(
    ctx: OperationContext,
    auth: Auth,
    app: App,
    org_grant_workspace_id: str,
    log: EventBus,
) -> tuple[InstallState | str, App]:
    """Install a deployed app to the team of ``auth``."""
    if app.is_new:
        raise InstallError(
            "No deployed app was found for this team",
            remediation="Deploy the app first, then install it",
        ).with_context(team_domain=auth.team_domain)

    response = ctx.clients.api.install_app(auth.token, app.app_id, org_grant_workspace_id)
    state = response.get("install_state", InstallState.SUCCEEDED)
    return state, _merge_app(app, response)


def manifest_app_name(manifest: Manifest) -> str:
    """The display name declared in ``manifest``, or ``""``."""
    display = manifest.get("display_information") or {}
    return display.get("name", "")


def _upload_icon(ctx: OperationContext, auth: Auth, app: App, log: EventBus) -> None:
    icon_path = ctx.clients.project.get_icon_path()
    if icon_path is None:
        return
    try:
        ctx.clients.api.upload_icon(auth.token, app.app_id, str(icon_path))
    except SpineError as e:
        logger.warning("icon_upload_failed", icon_path=str(icon_path), error=e.message)
        log.log("warn", INSTALL_ICON_ERROR, icon_error=e.message)
        return
    log.log("info", INSTALL_ICON_SUCCESS, icon_path=str(icon_path))


def _merge_app(app: App, response: dict[str, Any]) -> App:
    """Overlay the remote ``app`` payload on the local descriptor."""
    remote = response.get("app") or {}
    if not remote:
        return app
    merged = {
        "app_id": app.app_id,
        "app_name": app.app_name,
        "team_domain": app.team_domain,
        "team_id": app.team_id,
        "enterprise_id": app.enterprise_id,
        **app.extra,
        **remote,
    }
    return App.from_dict(merged, is_dev=app.is_dev)
