"""
Structured error types for app-spine.

Every failure the install pipeline can surface is a :class:`SpineError`
subclass.  Errors carry a machine-readable ``code``, an :class:`ErrorCategory`
for routing, optional ``remediation`` text for the CLI, and the
``install_state`` reached before the failure.

Manifesto:
    - **Typed Error Hierarchy:** One class per failure kind, not free-form text
    - **State Travels With Errors:** ``install_state`` is set on every error so
      callers can tell "never started" from "failed after a partial effect"
    - **Rendering Is Elsewhere:** Errors hold kind and context; the CLI decides
      how to present them
    - **Error Chaining:** Original exceptions are kept as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       SpineError                                 │
        │  (code, category, context, cause, remediation, install_state)   │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  AuthError                 ConfigError           InstallError   │
        │  (AUTH)                    (CONFIG)              (INSTALL)      │
        │     │                          │                                 │
        │  CredentialsNotFoundError  ConfigurationConflictError           │
        │  AuthorizationGrant-       ProjectNotFoundError                 │
        │    RequiredError                                                │
        │  GrantResolutionError      PromptUnavailableError   ApiError    │
        │                                                  (NETWORK)      │
        │                            UpdateError                          │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = CredentialsNotFoundError()
    >>> error.code
    'credentials_not_found'
    >>> error.install_state
    <InstallState.NOT_STARTED: ''>

    >>> error = InstallError("Install failed", install_state=InstallState.FAILED_PARTIAL)
    >>> error.to_dict()["install_state"]
    'failed-partial'

Guardrails:
    ❌ DON'T: Raise plain Exception from the install pipeline
    ✅ DO: Use the SpineError subclass matching the failure

    ❌ DON'T: Reset ``install_state`` to NOT_STARTED after an installer ran
    ✅ DO: Carry the installer's state through to the caller

Tags:
    error-handling, exception-hierarchy, install-state, app-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from app_spine.core.enums import InstallState


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    NETWORK = "NETWORK"       # Remote API unreachable or returned an error
    CONFIG = "CONFIG"         # Project or settings forbid the operation
    AUTH = "AUTH"             # Missing credentials or grants
    INSTALL = "INSTALL"       # Installer reported a failure
    PROMPT = "PROMPT"         # Interactive input unavailable or cancelled
    INTERNAL = "INTERNAL"     # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Where an error happened.

    Attributes:
        team_domain: Team the operation targeted
        app_id: App being installed or written to
        method: Remote API method, for ``ApiError``
        run_id: Install run the error belongs to
        metadata: Anything else worth logging
    """

    team_domain: str | None = None
    app_id: str | None = None
    method: str | None = None
    run_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Set fields only, with ``metadata`` flattened in."""
        known = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "metadata"}
        return {**{k: v for k, v in known.items() if v is not None}, **self.metadata}


class SpineError(Exception):
    """
    Base class of every app-spine error.

    Subclasses pick ``default_code`` and ``default_category``; both can be
    overridden per raise.  ``install_state`` starts at
    :attr:`InstallState.NOT_STARTED` and is moved forward by the
    orchestrator once an installer has run.

    Examples:
        >>> SpineError("Something went wrong").code
        'internal_error'

        >>> SpineError("Lookup failed").with_context(team_domain="acme").context.team_domain
        'acme'
    """

    default_code: str = "internal_error"
    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        remediation: str | None = None,
        details: list[dict[str, str]] | None = None,
        install_state: InstallState | str = InstallState.NOT_STARTED,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.category = category or self.default_category
        self.retryable = self.default_retryable if retryable is None else retryable
        self.context = context if context is not None else ErrorContext()
        self.remediation = remediation
        self.details = list(details or [])
        self.install_state = install_state
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **values: Any) -> SpineError:
        """Fill context fields; unknown keys land in ``context.metadata``.

        Returns ``self`` so it chains onto a raise::

            raise InstallError("No deployed app").with_context(team_domain="acme")
        """
        known = {f.name for f in fields(self.context)} - {"metadata"}
        for key, value in values.items():
            if key in known:
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def with_remediation(self, remediation: str) -> SpineError:
        self.remediation = remediation
        return self

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view for structured logs and ``--json`` output."""
        data: dict[str, Any] = {
            "error_type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
            "install_state": str(getattr(self.install_state, "value", self.install_state)),
        }
        optional = {
            "context": self.context.to_dict(),
            "remediation": self.remediation,
            "details": self.details,
            "cause": None if self.cause is None else str(self.cause),
        }
        data.update({k: v for k, v in optional.items() if v})
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code})"


# =============================================================================
# AUTHENTICATION/AUTHORIZATION ERRORS
# =============================================================================


class AuthError(SpineError):
    """Authentication or authorization error."""

    default_code = "auth_error"
    default_category = ErrorCategory.AUTH


class CredentialsNotFoundError(AuthError):
    """No usable session exists for the chosen target."""

    default_code = "credentials_not_found"

    def __init__(self, message: str = "No credentials found for the selected team", **kwargs: Any):
        kwargs.setdefault("remediation", "Log in to the team, then run the command again")
        super().__init__(message, **kwargs)


class AuthorizationGrantRequiredError(AuthError):
    """An org-wide install needs a workspace grant and none can be resolved."""

    default_code = "org_grant_required"

    def __init__(
        self,
        message: str = "A workspace grant is required to install an app to an organization",
        **kwargs: Any,
    ):
        kwargs.setdefault(
            "remediation",
            "Pass --org-workspace-grant with a workspace ID, or 'all' for every workspace",
        )
        super().__init__(message, **kwargs)


class GrantResolutionError(AuthError):
    """The org workspace grant could not be resolved."""

    default_code = "org_grant_resolution_failed"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(SpineError):
    """Configuration error. Never retryable."""

    default_code = "config_error"
    default_category = ErrorCategory.CONFIG


class ConfigurationConflictError(ConfigError):
    """Project configuration forbids the requested operation."""

    default_code = "app_install_forbidden"


class ProjectNotFoundError(ConfigError):
    """The working directory is not an app-spine project."""

    default_code = "invalid_app_directory"

    def __init__(self, path: str, message: str | None = None, **kwargs: Any):
        self.path = path
        kwargs.setdefault("remediation", "Change to a project directory containing .app-spine/")
        super().__init__(message or f"Not a valid project directory: {path}", **kwargs)


class PromptUnavailableError(SpineError):
    """An interactive prompt was needed but no terminal is attached."""

    default_code = "prompt_unavailable"
    default_category = ErrorCategory.PROMPT


# =============================================================================
# INSTALL / REMOTE ERRORS
# =============================================================================


class InstallError(SpineError):
    """An installer reported a failure."""

    default_code = "app_install_failed"
    default_category = ErrorCategory.INSTALL


class ApiError(SpineError):
    """The remote API rejected a request or could not be reached."""

    default_code = "api_error"
    default_category = ErrorCategory.NETWORK

    def __init__(self, message: str, *, method: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        if method:
            self.context.method = method


class UpdateError(SpineError):
    """Checking for or installing an update failed."""

    default_code = "update_failed"
    default_category = ErrorCategory.NETWORK


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SpineError",
    "AuthError",
    "CredentialsNotFoundError",
    "AuthorizationGrantRequiredError",
    "GrantResolutionError",
    "ConfigError",
    "ConfigurationConflictError",
    "ProjectNotFoundError",
    "PromptUnavailableError",
    "InstallError",
    "ApiError",
    "UpdateError",
]
