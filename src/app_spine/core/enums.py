"""
Shared enums for the install pipeline.

STDLIB ONLY - NO PYDANTIC.
"""

from enum import Enum


class InstallState(str, Enum):
    """
    Progress/outcome tag of one installation attempt.

    Returned alongside errors so callers can tell an install that never began
    from one that failed after changing remote state (e.g. a created manifest).
    """

    NOT_STARTED = ""
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED_PARTIAL = "failed-partial"

    # Approval workflows on admin-managed organizations
    REQUEST_PENDING = "request_pending"
    REQUEST_CANCELLED = "request_cancelled"
    REQUEST_NOT_SENT = "request_not_sent"

    @classmethod
    def coerce(cls, value: "InstallState | str | None") -> "InstallState | str":
        """Map installer output onto a known state, keeping unknown tags as-is."""
        if value is None:
            return cls.NOT_STARTED
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


class InstallPhase(str, Enum):
    """Orchestrator phase of an install run."""

    NO_SELECTION = "no_selection"
    SELECTING = "selecting"
    GRANT_RESOLVING = "grant_resolving"
    INSTALLING = "installing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (InstallPhase.SUCCEEDED, InstallPhase.FAILED)


class ManifestSource(str, Enum):
    """Where the project's app manifest is maintained."""

    LOCAL = "local"
    REMOTE = "remote"


class ManifestEnv(str, Enum):
    """Value written to ``APP_SPINE_ENV`` for manifest hooks."""

    LOCAL = "local"
    DEPLOYED = "deployed"
