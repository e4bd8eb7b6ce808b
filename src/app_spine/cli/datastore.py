"""
CLI: ``app-spine datastore`` — datastore record commands.
"""

from __future__ import annotations

import json

import typer

from app_spine.cli.utils import console, exit_with_error, get_state, make_context, print_json
from app_spine.core.errors import ConfigError, PromptUnavailableError, SpineError

app = typer.Typer(no_args_is_help=True)


@app.command("put")
def put(
    typer_ctx: typer.Context,
    payload: str = typer.Argument(..., help='JSON like {"datastore": "tasks", "item": {"id": "1"}}'),
    app_id: str | None = typer.Option(None, "--app", "-a", help="App ID (defaults to the selected team's app)"),
    team: str | None = typer.Option(None, "--team", "-t", help="Team ID or domain"),
    local: bool = typer.Option(False, "--local", help="Use the local dev app"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Create or replace an item in a datastore."""
    from app_spine.cli.render import new_datastore_renderer
    from app_spine.core.events import EventBus
    from app_spine.core.models import DatastorePutRequest
    from app_spine.ops.context import set_context_token
    from app_spine.ops.datastore import put_record
    from app_spine.ops.targets import select_target_for_team

    ctx = make_context(typer_ctx)
    try:
        parsed = _parse_payload(payload)
        if team:
            selection = select_target_for_team(ctx, team, dev=local)
        else:
            prompter = get_state(typer_ctx).clients.prompter
            if not prompter.interactive:
                raise PromptUnavailableError(
                    "No team was selected and prompts are unavailable",
                    remediation="Pass --team to choose the team",
                )
            selection = prompter.select_install_target()
        ctx = set_context_token(ctx, selection.auth.token)

        request = DatastorePutRequest(
            datastore=parsed.get("datastore", ""),
            app_id=app_id or parsed.get("app", "") or selection.app.app_id,
            item=parsed.get("item", {}),
        )
        if not request.datastore or not request.app_id:
            raise ConfigError(
                "A datastore name and an app ID are required",
                code="datastore_request_invalid",
                remediation="Include \"datastore\" in the JSON payload and pass --app if no app is saved",
            )

        observers = [] if json_out else [new_datastore_renderer(console)]
        log = EventBus(*observers)
        try:
            event = put_record(ctx, request, log)
        finally:
            log.close()
    except SpineError as e:
        exit_with_error(e)

    if json_out:
        print_json(dict(event.data).get("put_result", {}))


def _parse_payload(payload: str) -> dict:
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON payload: {e}", code="datastore_request_invalid", cause=e) from e
    if not isinstance(parsed, dict):
        raise ConfigError("The JSON payload must be an object", code="datastore_request_invalid")
    return parsed
