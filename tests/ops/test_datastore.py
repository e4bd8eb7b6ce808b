"""Tests for datastore operations."""

from __future__ import annotations

import pytest

from app_spine.core.errors import ApiError, CredentialsNotFoundError
from app_spine.core.events import ON_PUT_RESULT, SUCCESS, EventBus
from app_spine.core.models import DatastorePutRequest
from app_spine.ops.context import set_context_token
from app_spine.ops.datastore import put_record

REQUEST = DatastorePutRequest(datastore="tasks", app_id="A1", item={"id": "1", "title": "Ship"})


class TestPutRecord:
    def test_writes_with_context_token(self, ctx, api, recorder):
        api.apps_datastore_put.return_value = {"ok": True, "datastore": "tasks", "item": {"id": "1"}}
        ctx = set_context_token(ctx, "xoxp-token")

        event = put_record(ctx, REQUEST, EventBus(recorder))

        api.apps_datastore_put.assert_called_once_with(
            "xoxp-token",
            {"datastore": "tasks", "app": "A1", "item": {"id": "1", "title": "Ship"}},
        )
        assert event.name == SUCCESS
        assert event.data["put_result"]["datastore"] == "tasks"

    def test_observers_receive_put_result(self, ctx, api, recorder):
        api.apps_datastore_put.return_value = {"ok": True, "datastore": "tasks"}

        put_record(set_context_token(ctx, "xoxp-token"), REQUEST, EventBus(recorder))

        assert recorder.names == [ON_PUT_RESULT]
        assert recorder.events[0].data["put_result"] == {"ok": True, "datastore": "tasks"}

    def test_missing_token_raises(self, ctx, api, recorder):
        with pytest.raises(CredentialsNotFoundError):
            put_record(ctx, REQUEST, EventBus(recorder))

        api.apps_datastore_put.assert_not_called()
        assert recorder.events == []

    def test_api_error_propagates(self, ctx, api, recorder):
        api.apps_datastore_put.side_effect = ApiError("apps.datastore.put failed: datastore_error")

        with pytest.raises(ApiError):
            put_record(set_context_token(ctx, "xoxp-token"), REQUEST, EventBus(recorder))

        assert recorder.events == []
