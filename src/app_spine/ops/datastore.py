"""
Datastore operations.

The session token comes from the operation context, which is how a command
that ran :func:`~app_spine.ops.install.run_install` first can write records
without selecting a team again.
"""

from __future__ import annotations

from app_spine.core.errors import CredentialsNotFoundError
from app_spine.core.events import ON_PUT_RESULT, EventBus, LogEvent
from app_spine.core.logging import get_logger
from app_spine.core.models import DatastorePutRequest
from app_spine.ops.context import OperationContext, get_context_token

logger = get_logger(__name__)


def put_record(ctx: OperationContext, request: DatastorePutRequest, log: EventBus) -> LogEvent:
    """Write one item to an app datastore.

    Observers of ``log`` receive ``on_put_result`` with the API response under
    ``put_result``; the same payload is returned as the success event.

    Raises:
        CredentialsNotFoundError: The context carries no session token.
        ApiError: The platform rejected the write.
    """
    token = get_context_token(ctx)
    if not token:
        raise CredentialsNotFoundError("No session token available for the datastore request")

    put_result = ctx.clients.api.apps_datastore_put(token, request.to_dict())
    logger.debug("datastore_put", datastore=request.datastore, app_id=request.app_id)

    log.data["put_result"] = put_result
    log.log("info", ON_PUT_RESULT)

    return log.success_event()
