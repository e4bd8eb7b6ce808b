"""Tests for update notifications."""

from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock

import httpx
import pytest
from rich.console import Console

from app_spine.core.errors import UpdateError
from app_spine.ops.update import CliDependency, UpdateNotification, _parse_version

METADATA_URL = "https://downloads.example.com/app-spine/metadata.json"


def _dependency(has_update=False, name="dep"):
    dep = MagicMock()
    dep.name = name
    dep.has_update.return_value = has_update
    dep.print_update_notification.return_value = has_update
    return dep


def _cli_dependency(handler, current="1.0.0"):
    out = StringIO()
    client = httpx.Client(transport=httpx.MockTransport(handler))
    dep = CliDependency(
        METADATA_URL,
        console=Console(file=out, width=200),
        current_version=current,
        http_client=client,
    )
    return dep, out


class TestUpdateNotification:
    def test_checks_every_dependency(self):
        deps = [_dependency(), _dependency()]

        UpdateNotification(deps).check_for_update()

        for dep in deps:
            dep.check_for_update.assert_called_once()

    def test_failing_check_does_not_stop_others(self):
        broken = _dependency(name="broken")
        broken.check_for_update.side_effect = UpdateError("offline")
        healthy = _dependency()

        UpdateNotification([broken, healthy]).check_for_update()

        healthy.check_for_update.assert_called_once()

    def test_disabled_does_nothing(self):
        dep = _dependency(has_update=True)
        updates = UpdateNotification([dep], enabled=False)

        updates.check_for_update()

        dep.check_for_update.assert_not_called()
        assert not updates.has_update()
        assert not updates.print_update_notification()

    def test_prints_only_dependencies_with_updates(self):
        stale, fresh = _dependency(has_update=True), _dependency(has_update=False)

        printed = UpdateNotification([stale, fresh]).print_update_notification()

        assert printed
        stale.print_update_notification.assert_called_once()
        fresh.print_update_notification.assert_not_called()

    def test_install_update_skips_current_dependencies(self):
        stale, fresh = _dependency(has_update=True), _dependency(has_update=False)

        UpdateNotification([stale, fresh]).install_update()

        stale.install_update.assert_called_once()
        fresh.install_update.assert_not_called()


class TestCliDependency:
    def test_newer_release_is_reported(self):
        dep, out = _cli_dependency(
            lambda request: httpx.Response(200, json={"version": "1.2.0", "release_notes": "https://notes"})
        )

        dep.check_for_update()

        assert dep.has_update()
        assert dep.print_update_notification()
        text = out.getvalue()
        assert "1.0.0" in text and "1.2.0" in text
        assert "https://notes" in text

    def test_same_release_is_current(self):
        dep, out = _cli_dependency(lambda request: httpx.Response(200, json={"version": "1.0.0"}))

        dep.check_for_update()

        assert not dep.has_update()
        assert not dep.print_update_notification()
        assert out.getvalue() == ""

    def test_http_error_raises_update_error(self):
        dep, _ = _cli_dependency(lambda request: httpx.Response(503))

        with pytest.raises(UpdateError):
            dep.check_for_update()

    def test_invalid_json_raises_update_error(self):
        dep, _ = _cli_dependency(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(UpdateError):
            dep.check_for_update()

    def test_no_check_means_no_update(self):
        dep, _ = _cli_dependency(lambda request: httpx.Response(200, json={}))

        assert not dep.has_update()

    def test_install_prints_upgrade_command(self):
        dep, out = _cli_dependency(lambda request: httpx.Response(200, json={"version": "2.0.0"}))
        dep.check_for_update()

        dep.install_update()

        assert "pip install --upgrade app-spine==2.0.0" in out.getvalue()


class TestParseVersion:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1.2.3", (1, 2, 3)),
            ("v2.0", (2, 0)),
            ("1.4.0rc1", (1, 4, 0)),
        ],
    )
    def test_parse(self, value, expected):
        assert _parse_version(value) == expected

    def test_ordering(self):
        assert _parse_version("1.10.0") > _parse_version("1.9.9")
