"""Tests for terminal rendering of lifecycle events."""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from app_spine.cli.render import new_datastore_renderer, new_install_renderer
from app_spine.core.events import (
    INSTALL_COMPLETE,
    INSTALL_ICON_ERROR,
    INSTALL_ICON_SUCCESS,
    INSTALL_MANIFEST,
    INSTALL_MANIFEST_CREATE,
    INSTALL_MANIFEST_UPDATE,
    INSTALL_START,
    ON_PUT_RESULT,
    LogEvent,
)


@pytest.fixture()
def out() -> StringIO:
    return StringIO()


@pytest.fixture()
def console(out) -> Console:
    return Console(file=out, width=200)


class TestInstallRenderer:
    @pytest.mark.parametrize(
        "name,data,expected",
        [
            (INSTALL_MANIFEST_CREATE, {"app_name": "Tasks", "team_name": "acme"}, 'Creating app manifest for "Tasks" in "acme"'),
            (INSTALL_MANIFEST_UPDATE, {"app_name": "Tasks", "team_name": "acme"}, 'Updated app manifest for "Tasks" in "acme"'),
            (INSTALL_START, {"app_name": "Tasks", "team_name": "acme"}, 'Installing "Tasks" app to "acme"'),
            (INSTALL_ICON_SUCCESS, {"icon_path": "assets/icon.png"}, "Updated app icon: assets/icon.png"),
            (INSTALL_ICON_ERROR, {"icon_error": "too_large"}, "Error updating app icon: too_large"),
            (INSTALL_COMPLETE, {"install_time": "1.25s"}, "Finished in 1.25s"),
        ],
    )
    def test_known_events(self, console, out, name, data, expected):
        render = new_install_renderer(console, "acme")

        render(LogEvent(name=name, data=data))

        assert expected in out.getvalue()

    def test_team_domain_used_when_event_has_none(self, console, out):
        render = new_install_renderer(console, "acme")

        render(LogEvent(name=INSTALL_START, data={"app_name": "Tasks"}))

        assert 'to "acme"' in out.getvalue()

    def test_dev_manifest_section_prints_before_install_section(self, console, out):
        render = new_install_renderer(console, "acme")

        render(LogEvent(name=INSTALL_START, data={"app_name": "Tasks", "team_name": "acme", "is_dev": True}))
        assert out.getvalue() == ""
        render(LogEvent(name=INSTALL_MANIFEST, data={"is_dev": True}))
        render(LogEvent(name=INSTALL_MANIFEST_CREATE, data={"app_name": "Tasks", "team_name": "acme"}))
        render(LogEvent(name=INSTALL_COMPLETE, data={"install_time": "0.50s"}))

        text = out.getvalue()
        assert text.index("App Manifest") < text.index("App Install") < text.index("Finished in 0.50s")
        assert text.count("App Install") == 1

    def test_held_install_section_prints_before_completion(self, console, out):
        render = new_install_renderer(console, "acme")

        render(LogEvent(name=INSTALL_START, data={"app_name": "Tasks", "is_dev": True}))
        render(LogEvent(name=INSTALL_COMPLETE, data={"install_time": "0.50s"}))

        text = out.getvalue()
        assert text.index('Installing "Tasks" app to "acme"') < text.index("Finished in 0.50s")

    @pytest.mark.parametrize("name", [INSTALL_MANIFEST, "something_new"])
    def test_other_events_print_nothing(self, console, out, name):
        new_install_renderer(console, "acme")(LogEvent(name=name))

        assert out.getvalue() == ""


class TestDatastoreRenderer:
    def test_prints_stored_record(self, console, out):
        render = new_datastore_renderer(console)

        render(LogEvent(name=ON_PUT_RESULT, data={"put_result": {"datastore": "tasks", "item": {"id": "1"}}}))

        text = out.getvalue()
        assert 'Stored below record in the datastore "tasks"' in text
        assert '"id": "1"' in text

    def test_ignores_other_events(self, console, out):
        new_datastore_renderer(console)(LogEvent(name=INSTALL_START))

        assert out.getvalue() == ""
