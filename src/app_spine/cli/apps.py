"""
CLI: ``app-spine app`` — app installation commands.
"""

from __future__ import annotations

import typer

from app_spine.cli.utils import console, exit_with_error, make_context, print_json
from app_spine.core.errors import SpineError

app = typer.Typer(no_args_is_help=True)


@app.command("install")
def install(
    typer_ctx: typer.Context,
    org_workspace_grant: str = typer.Option(
        "",
        "--org-workspace-grant",
        help="Workspace ID to grant an org-wide install to, or 'all'",
    ),
    team: str | None = typer.Option(
        None, "--team", "-t", help="Team ID or domain to install to (skips the prompt)"
    ),
    local: bool = typer.Option(False, "--local", help="With --team, install the local dev app"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Install the app to a team."""
    from app_spine.ops.install import preflight_install, run_install
    from app_spine.ops.targets import select_target_for_team

    ctx = make_context(typer_ctx)
    try:
        preflight_install(ctx)
        selection = select_target_for_team(ctx, team, dev=local) if team else None
        outcome = run_install(ctx, selection, org_workspace_grant)
    except SpineError as e:
        exit_with_error(e)

    installed = outcome.app
    summary = {
        "app_id": installed.app_id,
        "app_name": installed.app_name,
        "team": installed.team_domain,
        "environment": "local" if installed.is_dev else "deployed",
        "install_state": str(getattr(outcome.install_state, "value", outcome.install_state)),
    }
    if json_out:
        print_json(summary)
        return

    console.print(f"\n[bold green]✓[/bold green] Installed [bold]{installed.app_name or installed.app_id}[/bold]")
    for key, value in summary.items():
        console.print(f"  [cyan]{key}[/cyan]: {value}")
