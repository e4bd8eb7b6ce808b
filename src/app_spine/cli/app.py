"""
Root Typer application for the app-spine CLI.

The root callback builds the process state once (settings, logging, clients,
update notification) and stores it on the Typer context; sub-commands read it
through :func:`app_spine.cli.utils.get_state`.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError
from typer import Typer

from app_spine.cli.utils import CliState, build_state, err_console

app = Typer(
    name="app-spine",
    help="app-spine — install and manage apps on your team.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError, version as pkg_version

        from app_spine import __version__

        try:
            v = pkg_version("app-spine")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"app-spine {v}")
        raise typer.Exit()


@app.callback()
def main(
    typer_ctx: typer.Context,
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
    non_interactive: bool = typer.Option(
        False, "--no-prompt", help="Fail instead of prompting for input."
    ),
) -> None:
    """app-spine CLI — install apps and manage their data."""
    from app_spine.core.config import load_settings
    from app_spine.core.logging import configure_logging

    overrides: dict[str, object] = {}
    if non_interactive:
        overrides["non_interactive"] = True
    if verbose:
        overrides["log_level"] = "DEBUG"

    try:
        settings = load_settings(**overrides)
    except ValidationError as e:
        err_console.print(f"[bold red]Error[/bold red] (config_error): Invalid settings\n{e}")
        raise typer.Exit(code=1) from e

    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")

    if not isinstance(typer_ctx.obj, CliState):
        typer_ctx.obj = build_state(settings)
    state: CliState = typer_ctx.obj
    typer_ctx.call_on_close(lambda: _notify_updates(state))


def _notify_updates(state: CliState) -> None:
    if state.updates_handled or not state.updates.enabled:
        return
    state.updates.check_for_update()
    state.updates.print_update_notification()


# ── Sub-command registration ─────────────────────────────────────────────

from app_spine.cli.apps import app as apps_app  # noqa: E402
from app_spine.cli.config import app as config_app  # noqa: E402
from app_spine.cli.datastore import app as datastore_app  # noqa: E402
from app_spine.cli.update import app as update_app  # noqa: E402

app.add_typer(apps_app, name="app", help="App installation.")
app.add_typer(datastore_app, name="datastore", help="Datastore records.")
app.add_typer(update_app, name="update", help="Self-update checks.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
