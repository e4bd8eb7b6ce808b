"""
Update notifications.

:class:`UpdateNotification` aggregates the components that can update
themselves (currently the CLI itself).  The CLI builds one instance at startup
and keeps it on the Typer context object; nothing here is global.

How often checks run is decided by the caller.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version as pkg_version

import httpx
from rich.console import Console

from app_spine.core.errors import UpdateError
from app_spine.core.logging import get_logger
from app_spine.core.protocols import UpdateDependency

logger = get_logger(__name__)

PACKAGE_NAME = "app-spine"


class UpdateNotification:
    """Update state across a list of dependencies."""

    def __init__(self, dependencies: list[UpdateDependency], *, enabled: bool = True) -> None:
        self.dependencies = dependencies
        self.enabled = enabled

    def check_for_update(self) -> None:
        """Ask every dependency to refresh its update state.

        A failing dependency is logged and skipped so the others still report.
        """
        if not self.enabled:
            return
        for dependency in self.dependencies:
            try:
                dependency.check_for_update()
            except UpdateError as e:
                logger.debug("update_check_failed", dependency=dependency.name, error=e.message)

    def has_update(self) -> bool:
        if not self.enabled:
            return False
        return any(dependency.has_update() for dependency in self.dependencies)

    def print_update_notification(self) -> bool:
        """Print notices for dependencies with updates; returns whether any printed."""
        if not self.enabled:
            return False
        printed = False
        for dependency in self.dependencies:
            if dependency.has_update():
                printed = dependency.print_update_notification() or printed
        return printed

    def install_update(self) -> None:
        """Install every available update, stopping at the first failure."""
        for dependency in self.dependencies:
            if dependency.has_update():
                dependency.install_update()


def _parse_version(value: str) -> tuple[int, ...]:
    """Numeric release parts; pre-release suffixes are ignored."""
    parts = []
    for piece in value.lstrip("v").split("."):
        match = re.match(r"\d+", piece)
        parts.append(int(match.group()) if match else 0)
    return tuple(parts)


class CliDependency:
    """The installed app-spine package, checked against a release document.

    The document at ``metadata_url`` looks like
    ``{"version": "1.4.0", "release_notes": "https://..."}``.
    """

    name = "app-spine"

    def __init__(
        self,
        metadata_url: str,
        *,
        console: Console | None = None,
        current_version: str | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = 5.0,
    ) -> None:
        self.metadata_url = metadata_url
        self.console = console or Console(stderr=True)
        self.current_version = current_version or _installed_version()
        self.latest_version: str | None = None
        self.release_notes: str | None = None
        self._client = http_client
        self._timeout = timeout

    def check_for_update(self) -> None:
        try:
            if self._client is not None:
                response = self._client.get(self.metadata_url, timeout=self._timeout)
            else:
                response = httpx.get(self.metadata_url, timeout=self._timeout)
            response.raise_for_status()
            metadata = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpdateError(f"Could not fetch release metadata: {e}", cause=e) from e

        self.latest_version = metadata.get("version")
        self.release_notes = metadata.get("release_notes")

    def has_update(self) -> bool:
        if not self.latest_version:
            return False
        return _parse_version(self.latest_version) > _parse_version(self.current_version)

    def print_update_notification(self) -> bool:
        if not self.has_update():
            return False
        self.console.print(
            f"\n[bold yellow]Update available:[/bold yellow] "
            f"{self.name} {self.current_version} → {self.latest_version}"
        )
        if self.release_notes:
            self.console.print(f"  Release notes: {self.release_notes}")
        self.console.print("  Run [cyan]app-spine update install[/cyan] to upgrade")
        return True

    def install_update(self) -> None:
        """Print the upgrade command for the package manager."""
        self.console.print(f"Upgrade with:  pip install --upgrade {PACKAGE_NAME}=={self.latest_version}")


def _installed_version() -> str:
    try:
        return pkg_version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0"
