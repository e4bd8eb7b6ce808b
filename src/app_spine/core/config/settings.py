"""
Process settings for app-spine.

Manifesto:
    One validated settings object is built at process start and handed to the
    :class:`~app_spine.ops.clients.ClientFactory`.  There is no module-level
    cache: two factories never share a settings instance, so two installs in
    one process never race on ``manifest_env``.

All fields can be set via ``APP_SPINE_*`` environment variables (e.g.
``APP_SPINE_NON_INTERACTIVE=true``) or a ``.env`` file.

Tags:
    app-spine, configuration, settings, pydantic

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSpineSettings(BaseSettings):
    """app-spine process configuration."""

    model_config = SettingsConfigDict(
        env_prefix="APP_SPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Remote API ───────────────────────────────────────────────
    api_host: str = Field(default="https://api.example.com", description="Base URL of the platform API")
    api_timeout_seconds: float = Field(default=30.0)

    # ── Paths ────────────────────────────────────────────────────
    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".app-spine",
        description="Directory holding credentials.json",
    )
    project_dir: Path = Field(default_factory=Path.cwd)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console", description="console or json")

    # ── Behaviour ────────────────────────────────────────────────
    non_interactive: bool = Field(
        default=False,
        description="Fail instead of prompting (CI mode)",
    )
    skip_update_check: bool = Field(default=False)
    update_metadata_url: str = Field(default="https://downloads.example.com/app-spine/metadata.json")

    # ── Manifest hook environment ────────────────────────────────
    manifest_env: dict[str, str] = Field(default_factory=dict)

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("console", "json"):
            raise ValueError(f"log_format must be 'console' or 'json', got {value!r}")
        return value

    @property
    def credentials_path(self) -> Path:
        return self.config_dir / "credentials.json"


def load_settings(**overrides: object) -> AppSpineSettings:
    """Build a fresh settings instance.

    Keyword arguments take precedence over environment variables.
    """
    return AppSpineSettings(**overrides)
