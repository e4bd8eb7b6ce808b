"""
CLI: ``app-spine config`` — configuration inspection.
"""

from __future__ import annotations

import typer

from app_spine.cli.utils import console, get_state

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    typer_ctx: typer.Context,
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    state = get_state(typer_ctx)
    settings = state.settings

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump().items()):
            console.print(f"APP_SPINE_{key.upper()}={value}")
        return

    from rich.table import Table

    project = state.clients.project
    console.print(f"[bold]Project:[/bold] {project.project_dir}")
    if project.is_valid_project():
        console.print(f"[bold]Manifest Source:[/bold] {project.get_manifest_source().value}")
    else:
        console.print("[dim]Not a project directory[/dim]")

    table = Table()
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)
