"""
Organization workspace grants.

An app installed with an org-wide (enterprise) credential must be granted to
one workspace of the organization, or to all of them.  Credentials scoped to a
single team need no grant.
"""

from __future__ import annotations

from app_spine.core.errors import (
    AuthorizationGrantRequiredError,
    GrantResolutionError,
    SpineError,
)
from app_spine.core.logging import get_logger
from app_spine.core.models import Selection
from app_spine.ops.context import OperationContext

logger = get_logger(__name__)

ALL_WORKSPACES = "all"


def requires_org_grant(selection: Selection) -> bool:
    """Whether installing ``selection`` needs a workspace grant."""
    return selection.auth.is_enterprise_install


def resolve_org_grant(
    ctx: OperationContext,
    selection: Selection,
    org_grant_workspace_id: str,
    all_workspaces_first: bool,
) -> str:
    """Resolve the workspace grant for one install run.

    Args:
        ctx: Operation context.
        selection: Target being installed.
        org_grant_workspace_id: Grant supplied by the caller; used as-is when
            non-empty.
        all_workspaces_first: Offer "all workspaces" as the first prompt
            choice.

    Returns:
        The workspace ID, :data:`ALL_WORKSPACES`, or ``""`` when the target
        needs no grant.

    Raises:
        AuthorizationGrantRequiredError: A grant is needed and no user can be
            asked for one.
        GrantResolutionError: The workspace list or the prompt failed.
    """
    if org_grant_workspace_id:
        logger.debug("org_grant_supplied", grant=org_grant_workspace_id)
        return org_grant_workspace_id

    if not requires_org_grant(selection):
        return ""

    prompter = ctx.clients.prompter
    if ctx.clients.settings.non_interactive or not prompter.interactive:
        raise AuthorizationGrantRequiredError().with_context(team_domain=selection.auth.team_domain)

    try:
        workspaces = ctx.clients.api.list_org_workspaces(
            selection.auth.token, selection.auth.enterprise_id
        )
        grant = prompter.select_org_workspace(workspaces, all_workspaces_first=all_workspaces_first)
    except SpineError as e:
        raise GrantResolutionError(
            f"Could not resolve a workspace grant: {e.message}",
            cause=e,
        ).with_context(team_domain=selection.auth.team_domain) from e

    if not grant:
        raise GrantResolutionError("No workspace was selected for the grant").with_context(
            team_domain=selection.auth.team_domain
        )

    logger.debug("org_grant_resolved", grant=grant)
    return grant
