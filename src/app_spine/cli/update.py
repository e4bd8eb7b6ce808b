"""
CLI: ``app-spine update`` — self-update commands.
"""

from __future__ import annotations

import typer

from app_spine.cli.utils import console, get_state

app = typer.Typer(no_args_is_help=True)


@app.command("check")
def check(typer_ctx: typer.Context) -> None:
    """Check whether a newer release is available."""
    state = get_state(typer_ctx)
    state.updates_handled = True
    updates = state.updates
    updates.enabled = True
    updates.check_for_update()
    if not updates.print_update_notification():
        console.print("[green]app-spine is up to date[/green]")


@app.command("install")
def install(typer_ctx: typer.Context) -> None:
    """Install available updates."""
    state = get_state(typer_ctx)
    state.updates_handled = True
    updates = state.updates
    updates.enabled = True
    updates.check_for_update()
    if not updates.has_update():
        console.print("[green]app-spine is up to date[/green]")
        return
    updates.install_update()
