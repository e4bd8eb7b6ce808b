"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the client factory, caller identity and
arbitrary metadata.  A successful install returns a *new* context holding the
session token under :data:`CONTEXT_TOKEN_KEY`, so later operations in the same
process (``datastore put`` after ``app install``) reuse it without prompting.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app_spine.ops.clients import ClientFactory

CONTEXT_TOKEN_KEY = "app_spine.token"


@dataclass(frozen=True)
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        clients: Collaborators and settings for this process.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request — ``"cli"`` or ``"sdk"``.
        metadata: Arbitrary key/value pairs, including the session token.
    """

    clients: ClientFactory
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_metadata(self, **values: Any) -> OperationContext:
        return replace(self, metadata={**self.metadata, **values})


def set_context_token(ctx: OperationContext, token: str) -> OperationContext:
    """Return a copy of ``ctx`` carrying ``token``."""
    return ctx.with_metadata(**{CONTEXT_TOKEN_KEY: token})


def get_context_token(ctx: OperationContext) -> str:
    """Session token stored in ``ctx``, or ``""``."""
    return ctx.metadata.get(CONTEXT_TOKEN_KEY, "")
