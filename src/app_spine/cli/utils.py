"""
CLI utility helpers — consoles, client wiring and error output.
"""

from __future__ import annotations

import json
import sys
import uuid
from dataclasses import dataclass, field
from functools import partial
from typing import Any, NoReturn

import typer
from rich.console import Console

from app_spine.core.config import AppSpineSettings, load_settings
from app_spine.core.errors import SpineError
from app_spine.core.transports.http import HttpApiClient
from app_spine.ops.clients import ClientFactory
from app_spine.ops.context import OperationContext
from app_spine.ops.targets import list_install_targets
from app_spine.ops.telemetry import new_telemetry_observer
from app_spine.ops.update import CliDependency, UpdateNotification

console = Console()
err_console = Console(stderr=True)


# ── Process state ────────────────────────────────────────────────────────


@dataclass
class CliState:
    """Everything one CLI process builds at startup, kept on ``ctx.obj``."""

    settings: AppSpineSettings
    clients: ClientFactory
    updates: UpdateNotification
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    # set by commands that already reported updates
    updates_handled: bool = False


def build_clients(settings: AppSpineSettings, session_id: str) -> ClientFactory:
    """Wire the default collaborators for a CLI process."""
    from app_spine.cli.prompts import QuestionaryPrompter
    from app_spine.cli.render import new_install_renderer

    prompter = QuestionaryPrompter(
        targets=lambda: list_install_targets(OperationContext(clients=clients, caller="cli")),
        interactive=not settings.non_interactive and sys.stdin.isatty(),
    )
    clients = ClientFactory(
        settings=settings,
        api=HttpApiClient(settings.api_host, timeout=settings.api_timeout_seconds),
        prompter=prompter,
        observer_factories=[
            partial(new_install_renderer, console),
            partial(new_telemetry_observer, session_id=session_id),
        ],
    )
    return clients


def build_state(settings: AppSpineSettings | None = None) -> CliState:
    settings = settings or load_settings()
    session_id = uuid.uuid4().hex
    updates = UpdateNotification(
        [CliDependency(settings.update_metadata_url, console=err_console)],
        enabled=not settings.skip_update_check,
    )
    return CliState(
        settings=settings,
        clients=build_clients(settings, session_id),
        updates=updates,
        session_id=session_id,
    )


def get_state(typer_ctx: typer.Context) -> CliState:
    """The process state built by the root callback (built here if missing)."""
    root = typer_ctx.find_root()
    if not isinstance(root.obj, CliState):
        root.obj = build_state()
    return root.obj


def make_context(typer_ctx: typer.Context) -> OperationContext:
    """Create an ``OperationContext`` for a CLI command."""
    state = get_state(typer_ctx)
    return OperationContext(clients=state.clients, caller="cli")


# ── Output helpers ───────────────────────────────────────────────────────


def exit_with_error(error: SpineError) -> NoReturn:
    """Render ``error`` with its remediation and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.code}): {error.message}")
    for detail in error.details:
        err_console.print(f"  [dim]•[/dim] {detail.get('message', '')} [dim]({detail.get('code', '')})[/dim]")
    if error.remediation:
        err_console.print("\n[bold]Suggestion[/bold]")
        for line in error.remediation.splitlines():
            err_console.print(f"  {line}")
    raise typer.Exit(code=1)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))
