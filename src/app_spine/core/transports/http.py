"""HTTP adapter for the platform API.

Each API method is a JSON ``POST`` to ``{api_host}/api/{method}`` with a
bearer token.  Responses are JSON objects with an ``ok`` flag; ``ok: false``
or a transport failure raises :class:`~app_spine.core.errors.ApiError`.

Usage::

    from app_spine.core.transports.http import HttpApiClient

    with HttpApiClient("https://api.example.com") as api:
        api.install_app(token, "A0123", "")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from app_spine.core.errors import ApiError
from app_spine.core.logging import get_logger
from app_spine.core.models import Manifest, Workspace

logger = get_logger(__name__)


class HttpApiClient:
    """httpx implementation of :class:`~app_spine.core.protocols.ApiClient`."""

    def __init__(
        self,
        api_host: str,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_host = api_host.rstrip("/")
        self._client = client or httpx.Client(base_url=self.api_host, timeout=timeout)

    def __enter__(self) -> HttpApiClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ── Transport ────────────────────────────────────────────────────────

    def _call(
        self,
        method: str,
        token: str,
        payload: dict[str, Any] | None = None,
        *,
        files: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"}
        logger.debug("api_request", method=method)
        try:
            if files is not None:
                response = self._client.post(f"/api/{method}", data=payload or {}, files=files, headers=headers)
            else:
                response = self._client.post(f"/api/{method}", json=payload or {}, headers=headers)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise ApiError(
                f"{method} returned HTTP {e.response.status_code}",
                method=method,
                retryable=e.response.status_code >= 500,
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise ApiError(f"{method} request failed: {e}", method=method, retryable=True, cause=e) from e
        except ValueError as e:
            raise ApiError(f"{method} returned invalid JSON", method=method, cause=e) from e

        if not body.get("ok", False):
            error_code = body.get("error", "unknown_error")
            raise ApiError(f"{method} failed: {error_code}", method=method, code=error_code)
        return body

    # ── ApiClient ────────────────────────────────────────────────────────

    def create_manifest(self, token: str, manifest: Manifest) -> dict[str, Any]:
        return self._call("apps.manifest.create", token, {"manifest": manifest})

    def update_manifest(self, token: str, app_id: str, manifest: Manifest) -> dict[str, Any]:
        return self._call("apps.manifest.update", token, {"app_id": app_id, "manifest": manifest})

    def developer_install(self, token: str, app_id: str) -> dict[str, Any]:
        return self._call("apps.developerInstall", token, {"app_id": app_id})

    def install_app(self, token: str, app_id: str, org_grant_workspace_id: str) -> dict[str, Any]:
        payload: dict[str, Any] = {"app_id": app_id}
        if org_grant_workspace_id:
            payload["org_grant_workspace_id"] = org_grant_workspace_id
        return self._call("apps.install", token, payload)

    def upload_icon(self, token: str, app_id: str, icon_path: str) -> None:
        path = Path(icon_path)
        if not path.is_file():
            raise ApiError(f"Icon file not found: {icon_path}", method="apps.icon.set")
        with path.open("rb") as fh:
            self._call("apps.icon.set", token, {"app_id": app_id}, files={"image": (path.name, fh)})

    def list_org_workspaces(self, token: str, enterprise_id: str) -> list[Workspace]:
        body = self._call("auth.teams.list", token, {"enterprise_id": enterprise_id})
        return [
            Workspace(
                team_id=team.get("id", ""),
                team_domain=team.get("domain", ""),
                name=team.get("name", ""),
            )
            for team in body.get("teams", [])
        ]

    def apps_datastore_put(self, token: str, request: dict[str, Any]) -> dict[str, Any]:
        return self._call("apps.datastore.put", token, request)
