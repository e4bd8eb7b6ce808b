"""
Installation targets built from saved credentials and project apps.

Each logged-in team yields up to two targets: its deployed app and its local
(dev) app.  A team with no saved app still yields targets whose app is new.
"""

from __future__ import annotations

from app_spine.core.errors import CredentialsNotFoundError
from app_spine.core.models import App, Auth, Selection
from app_spine.ops.context import OperationContext


def list_install_targets(ctx: OperationContext, *, include_dev: bool = True) -> list[Selection]:
    """All targets the user could install to, ordered by team domain."""
    project = ctx.clients.project
    deployed = project.get_apps(dev=False)
    dev = project.get_apps(dev=True) if include_dev else {}

    targets: list[Selection] = []
    for auth in ctx.clients.credentials.list_auths():
        targets.append(Selection(auth=auth, app=_app_for(auth, deployed, is_dev=False)))
        if include_dev:
            targets.append(Selection(auth=auth, app=_app_for(auth, dev, is_dev=True)))
    return targets


def select_target_for_team(ctx: OperationContext, team: str, *, dev: bool) -> Selection:
    """Target for ``team`` (an ID or domain) without prompting.

    Raises:
        CredentialsNotFoundError: No saved session matches ``team``.
    """
    for target in list_install_targets(ctx):
        auth = target.auth
        if target.app.is_dev == dev and team in (auth.team_id, auth.team_domain):
            return target
    raise CredentialsNotFoundError(f"No credentials found for team {team!r}").with_context(
        team_domain=team
    )


def _app_for(auth: Auth, apps: dict[str, App], *, is_dev: bool) -> App:
    saved = apps.get(auth.team_id)
    if saved is not None:
        return saved
    return App(team_domain=auth.team_domain, team_id=auth.team_id, enterprise_id=auth.enterprise_id, is_dev=is_dev)
