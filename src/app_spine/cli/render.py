"""
Terminal rendering of lifecycle events.

Observers here only print; they never raise into the install pipeline and
skip event names they do not know.
"""

from __future__ import annotations

from rich.console import Console

from app_spine.core.events import (
    INSTALL_COMPLETE,
    INSTALL_ICON_ERROR,
    INSTALL_ICON_SUCCESS,
    INSTALL_MANIFEST_CREATE,
    INSTALL_MANIFEST_UPDATE,
    INSTALL_START,
    ON_PUT_RESULT,
    EventObserver,
    LogEvent,
)


def _section(console: Console, emoji: str, title: str, *lines: str) -> None:
    console.print(f"\n:{emoji}: [bold]{title}[/bold]")
    for line in lines:
        console.print(f"   [dim]{line}[/dim]")


def new_install_renderer(console: Console, team_domain: str) -> EventObserver:
    """Observer printing install progress for ``team_domain``.

    A dev ``install_start`` is held until the manifest section has printed,
    so the manifest section always comes first.
    """
    held: list[LogEvent] = []

    def install_section(event: LogEvent) -> None:
        team_name = event.data_to_string("team_name") or team_domain
        app_name = event.data_to_string("app_name")
        _section(console, "house", "App Install", f'Installing "{app_name}" app to "{team_name}"')

    def flush() -> None:
        while held:
            install_section(held.pop(0))

    def render(event: LogEvent) -> None:
        team_name = event.data_to_string("team_name") or team_domain
        app_name = event.data_to_string("app_name")

        if event.name == INSTALL_START and event.data.get("is_dev"):
            held.append(event)
            return
        if event.name in (INSTALL_ICON_SUCCESS, INSTALL_ICON_ERROR, INSTALL_COMPLETE):
            flush()

        if event.name == INSTALL_MANIFEST_CREATE:
            _section(console, "books", "App Manifest", f'Creating app manifest for "{app_name}" in "{team_name}"')
            flush()
        elif event.name == INSTALL_MANIFEST_UPDATE:
            _section(console, "books", "App Manifest", f'Updated app manifest for "{app_name}" in "{team_name}"')
            flush()
        elif event.name == INSTALL_START:
            install_section(event)
        elif event.name == INSTALL_ICON_SUCCESS:
            console.print(f"   [dim]Updated app icon: {event.data_to_string('icon_path')}[/dim]")
        elif event.name == INSTALL_ICON_ERROR:
            console.print(f"   [dim]Error updating app icon: {event.data_to_string('icon_error')}[/dim]")
        elif event.name == INSTALL_COMPLETE:
            console.print(f"   [dim]Finished in {event.data_to_string('install_time')}[/dim]")
        # install_manifest and unknown events print nothing

    return render


def new_datastore_renderer(console: Console) -> EventObserver:
    """Observer printing the record stored by ``datastore put``."""

    def render(event: LogEvent) -> None:
        if event.name != ON_PUT_RESULT:
            return
        result = event.data.get("put_result") or {}
        datastore = result.get("datastore", "")
        _section(console, "card_file_box", "Datastore", f'Stored below record in the datastore "{datastore}"')
        console.print_json(data=result.get("item", {}))

    return render
