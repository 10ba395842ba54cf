"""Tests for the httpx-backed client facade, using httpx.MockTransport."""

import json
from uuid import UUID

import httpx
import pytest
from pydantic import ValidationError

from conftest import ACCOUNT_ID, WORKSPACE_ID, run
from terraform_prefect.api import (
    ClientConstructionError,
    ObjectAlreadyExists,
    ObjectNotFound,
    PrefectAPIError,
    PrefectClient,
    ProviderConfig,
)
from terraform_prefect.api.http import HTTPPrefectClient
from terraform_prefect.api.models import (
    AccessorType,
    WorkPoolUpdate,
    WorkspaceAccessUpsert,
    WorkspaceCreate,
)

WORKSPACE = {
    "id": "11111111-1111-1111-1111-111111111111",
    "name": "prod",
    "handle": "prod-handle",
    "description": None,
    "created": "2023-01-01T00:00:00Z",
    "updated": None,
}

OTHER_ACCOUNT = "cccccccc-cccc-cccc-cccc-cccccccccccc"


class Recorder:
    """MockTransport handler that records requests and replies with a fixed response."""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _facade(handler, account_id=ACCOUNT_ID, workspace_id=WORKSPACE_ID) -> HTTPPrefectClient:
    config = ProviderConfig(api_key="pnu_test", account_id=account_id, workspace_id=workspace_id)
    http = httpx.AsyncClient(base_url=config.endpoint, transport=httpx.MockTransport(handler))
    return HTTPPrefectClient(config, http=http)


class TestFacade:
    def test_is_prefect_client(self):
        assert isinstance(_facade(Recorder()), PrefectClient)

    def test_default_http_client_headers(self):
        config = ProviderConfig(api_key="pnu_test")
        client = HTTPPrefectClient(config)
        assert client._http.headers["Authorization"] == "Bearer pnu_test"
        assert client._http.headers["Content-Type"] == "application/json"
        run(client.aclose())

    def test_no_auth_header_without_key(self):
        client = HTTPPrefectClient(ProviderConfig(endpoint="http://localhost:4200/api"))
        assert "Authorization" not in client._http.headers
        run(client.aclose())

    def test_default_scope(self):
        client = _facade(Recorder())
        assert client.default_account_id == UUID(ACCOUNT_ID)
        assert client.default_workspace_id == UUID(WORKSPACE_ID)


class TestScopeResolution:
    def test_workspace_get_path(self):
        recorder = Recorder(payload=WORKSPACE)
        workspace = run(_facade(recorder).workspaces(None).get(UUID(WORKSPACE["id"])))

        assert recorder.last.method == "GET"
        assert recorder.last.url.path == (
            f"/api/accounts/{ACCOUNT_ID}/workspaces/{WORKSPACE['id']}"
        )
        assert workspace.name == "prod"
        assert workspace.updated is None

    def test_explicit_account_overrides_default(self):
        recorder = Recorder(payload=WORKSPACE)
        run(_facade(recorder).workspaces(UUID(OTHER_ACCOUNT)).get(UUID(WORKSPACE["id"])))
        assert f"/accounts/{OTHER_ACCOUNT}/" in recorder.last.url.path

    def test_nil_account_uses_default(self):
        recorder = Recorder(payload=WORKSPACE)
        run(_facade(recorder).workspaces(UUID(int=0)).get(UUID(WORKSPACE["id"])))
        assert f"/accounts/{ACCOUNT_ID}/" in recorder.last.url.path

    def test_missing_account_raises(self):
        client = _facade(Recorder(), account_id=None)
        with pytest.raises(ClientConstructionError, match="account_id"):
            client.workspaces(None)

    def test_missing_workspace_raises(self):
        client = _facade(Recorder(), workspace_id=None)
        with pytest.raises(ClientConstructionError, match="workspace_id"):
            client.variables(None, None)

    def test_construction_does_no_io(self):
        recorder = Recorder()
        client = _facade(recorder)
        client.work_pools(None, None)
        client.service_accounts(None)
        assert recorder.requests == []

    def test_work_queue_requires_pool_name(self):
        with pytest.raises(ClientConstructionError, match="work_pool_name"):
            _facade(Recorder()).work_queues(None, None, "")

    def test_work_queue_path_quotes_pool_name(self):
        recorder = Recorder(payload={"id": WORKSPACE["id"], "name": "default"})
        run(_facade(recorder).work_queues(None, None, "my pool").get("default"))
        assert recorder.last.url.raw_path.decode().endswith(
            f"/workspaces/{WORKSPACE_ID}/work_pools/my%20pool/queues/default"
        )

    def test_collections_are_unscoped(self):
        recorder = Recorder(payload={})
        run(_facade(recorder, account_id=None).collections().get_worker_metadata_views())
        assert recorder.last.url.path == "/api/collections/views/aggregate-worker-metadata"


class TestStatusMapping:
    def test_not_found(self):
        with pytest.raises(ObjectNotFound) as exc_info:
            run(_facade(Recorder(404, {"detail": "nope"})).workspaces(None).get(UUID(int=1)))
        assert exc_info.value.status_code == 404
        assert "nope" in exc_info.value.body

    def test_conflict(self):
        client = _facade(Recorder(409, {"detail": "exists"})).workspaces(None)
        with pytest.raises(ObjectAlreadyExists):
            run(client.create(WorkspaceCreate(name="prod", handle="prod")))

    def test_server_error(self):
        with pytest.raises(PrefectAPIError) as exc_info:
            run(_facade(Recorder(500, {"detail": "boom"})).accounts(None).get())
        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, ObjectNotFound)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PrefectAPIError, match="connection refused") as exc_info:
            run(_facade(handler).accounts(None).get())
        assert exc_info.value.status_code is None


class TestPayloads:
    def test_membership_filter_body(self):
        recorder = Recorder(payload=[])
        run(_facade(recorder).account_memberships(None).list(emails=["a@example.com"]))
        assert recorder.last.method == "POST"
        assert recorder.last.url.path.endswith("/account_memberships/filter")
        assert json.loads(recorder.last.content) == {
            "account_memberships": {"email": {"any_": ["a@example.com"]}}
        }

    def test_service_account_access_upsert(self):
        access = {
            "id": "22222222-2222-2222-2222-222222222222",
            "workspace_role_id": "33333333-3333-3333-3333-333333333333",
            "bot_id": "44444444-4444-4444-4444-444444444444",
        }
        recorder = Recorder(payload=access)
        result = run(
            _facade(recorder)
            .workspace_access(None, None)
            .upsert(
                WorkspaceAccessUpsert(
                    accessor_type=AccessorType.SERVICE_ACCOUNT,
                    accessor_id=UUID(access["bot_id"]),
                    workspace_role_id=UUID(access["workspace_role_id"]),
                )
            )
        )
        assert recorder.last.url.path.endswith(f"/workspaces/{WORKSPACE_ID}/bot_access/")
        assert json.loads(recorder.last.content) == {
            "bot_id": access["bot_id"],
            "workspace_role_id": access["workspace_role_id"],
        }
        assert result.accessor_id == UUID(access["bot_id"])

    def test_variable_by_name_path(self):
        recorder = Recorder(payload={"id": WORKSPACE["id"], "name": "env", "value": "prod"})
        variable = run(_facade(recorder).variables(None, None).get_by_name("env"))
        assert recorder.last.url.path.endswith("/variables/name/env")
        assert variable.value == "prod"

    def test_update_sends_only_set_fields(self):
        recorder = Recorder(status_code=204)
        run(_facade(recorder).work_pools(None, None).update("k8s", WorkPoolUpdate(is_paused=True)))
        assert recorder.last.method == "PATCH"
        assert json.loads(recorder.last.content) == {"is_paused": True}

    def test_worker_metadata_shape_is_validated(self):
        recorder = Recorder(payload={"prefect": ["process"]})
        with pytest.raises(ValidationError):
            run(_facade(recorder).collections().get_worker_metadata_views())

    def test_workspace_list_posts_empty_filter(self):
        recorder = Recorder(payload=[WORKSPACE])
        workspaces = run(_facade(recorder).workspaces(None).list())
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == f"/api/accounts/{ACCOUNT_ID}/workspaces/filter"
        assert json.loads(recorder.last.content) == {}
        assert [w.name for w in workspaces] == ["prod"]
