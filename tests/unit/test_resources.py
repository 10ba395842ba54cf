"""Tests for the resource adapters."""

from datetime import datetime, timezone
from uuid import UUID

import pytest

from conftest import ACCOUNT_ID, WORKSPACE_ID, make_prefect_client, run, sub_client
from terraform_prefect import models
from terraform_prefect.api import ObjectAlreadyExists, ObjectNotFound, PrefectAPIError
from terraform_prefect.api.models import (
    AccessorType,
    AccountRole,
    ServiceAccount,
    ServiceAccountAPIKey,
    Variable,
    WorkPool,
    WorkQueue,
    Workspace,
    WorkspaceAccess,
    WorkspaceRole,
)
from terraform_prefect.framework import (
    ConfigureRequest,
    ConfigureResponse,
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    DeleteResponse,
    ImportStateRequest,
    ImportStateResponse,
    MetadataRequest,
    MetadataResponse,
    Plan,
    ReadResourceRequest,
    ReadResourceResponse,
    Resource,
    ResourceWithImportState,
    SchemaRequest,
    SchemaResponse,
    State,
    UpdateRequest,
    UpdateResponse,
)
from terraform_prefect.resources import (
    RESOURCES,
    ServiceAccountResource,
    VariableResource,
    WorkPoolResource,
    WorkQueueResource,
    WorkspaceAccessResource,
    WorkspaceResource,
    WorkspaceRoleResource,
)

ID = "11111111-1111-1111-1111-111111111111"
ROLE_ID = "22222222-2222-2222-2222-222222222222"
TEAM_ID = "44444444-4444-4444-4444-444444444444"


def configured(resource_cls, client):
    resource = resource_cls()
    resource.configure(ConfigureRequest(provider_data=client), ConfigureResponse())
    return resource


def create(resource, **plan) -> CreateResponse:
    resp = CreateResponse()
    run(resource.create(CreateRequest(plan=Plan(plan)), resp))
    return resp


def read(resource, **state) -> ReadResourceResponse:
    resp = ReadResourceResponse(state=State(state))
    run(resource.read(ReadResourceRequest(state=State(state)), resp))
    return resp


def update(resource, state: dict, **plan) -> UpdateResponse:
    resp = UpdateResponse(state=State(state))
    run(resource.update(UpdateRequest(plan=Plan({**state, **plan}), state=State(state)), resp))
    return resp


def delete(resource, **state) -> DeleteResponse:
    resp = DeleteResponse(state=State(state))
    run(resource.delete(DeleteRequest(state=State(state)), resp))
    return resp


def import_state(resource, import_id: str) -> ImportStateResponse:
    resp = ImportStateResponse()
    run(resource.import_state(ImportStateRequest(id=import_id), resp))
    return resp


MODELS = {
    ServiceAccountResource: models.ServiceAccountModel,
    VariableResource: models.VariableModel,
    WorkPoolResource: models.WorkPoolModel,
    WorkQueueResource: models.WorkQueueModel,
    WorkspaceAccessResource: models.WorkspaceAccessModel,
    WorkspaceResource: models.WorkspaceModel,
    WorkspaceRoleResource: models.WorkspaceRoleModel,
}


@pytest.mark.parametrize("resource_cls", RESOURCES, ids=lambda cls: cls.__name__)
class TestEveryResource:
    def test_satisfies_protocol(self, resource_cls):
        assert isinstance(resource_cls(), Resource)

    def test_type_name_is_prefixed(self, resource_cls):
        resp = MetadataResponse()
        resource_cls().metadata(MetadataRequest(provider_type_name="prefect"), resp)
        assert resp.type_name.startswith("prefect_")

    def test_schema_matches_model(self, resource_cls):
        resp = SchemaResponse()
        resource_cls().schema(SchemaRequest(), resp)
        assert set(resp.schema.attributes) == set(MODELS[resource_cls].model_fields)

    def test_configure_wrong_type(self, resource_cls):
        resp = ConfigureResponse()
        resource_cls().configure(ConfigureRequest(provider_data=object()), resp)
        assert resp.diagnostics.errors()[0].summary == "Unexpected Resource Configure Type"


def test_workspace_access_has_no_import():
    assert not isinstance(WorkspaceAccessResource(), ResourceWithImportState)
    assert isinstance(WorkspaceResource(), ResourceWithImportState)


PROD = Workspace(
    id=UUID(ID),
    name="prod",
    handle="prod",
    created=datetime(2023, 1, 1, tzinfo=timezone.utc),
)
PROD_STATE = {"id": ID, "name": "prod", "handle": "prod", "account_id": ACCOUNT_ID}


class TestWorkspaceResource:
    def test_create(self):
        client = make_prefect_client()
        workspaces = sub_client(create=PROD)
        client.workspaces.return_value = workspaces

        resp = create(configured(WorkspaceResource, client), name="prod", handle="prod")

        assert not resp.diagnostics
        payload = workspaces.create.await_args.args[0]
        assert (payload.name, payload.handle, payload.description) == ("prod", "prod", None)
        assert resp.state.raw["id"] == ID
        assert resp.state.raw["created"] == "2023-01-01T00:00:00Z"

    def test_create_conflict(self):
        client = make_prefect_client()
        client.workspaces.return_value = sub_client(
            create=ObjectAlreadyExists("HTTP 409: handle taken", 409)
        )

        resp = create(configured(WorkspaceResource, client), name="prod", handle="prod")

        [diag] = resp.diagnostics.errors()
        assert diag.summary == "Error creating workspace"
        assert "handle taken" in diag.detail
        assert resp.state.is_null()

    def test_read_refreshes(self):
        client = make_prefect_client()
        client.workspaces.return_value = sub_client(
            get=PROD.model_copy(update={"description": "changed"})
        )

        resp = read(configured(WorkspaceResource, client), **PROD_STATE)

        client.workspaces.assert_called_once_with(UUID(ACCOUNT_ID))
        assert resp.state.raw["description"] == "changed"

    def test_read_not_found_removes_state(self):
        client = make_prefect_client()
        client.workspaces.return_value = sub_client(get=ObjectNotFound("HTTP 404", 404))

        resp = read(configured(WorkspaceResource, client), **PROD_STATE)

        assert not resp.diagnostics
        assert resp.state.is_null()

    def test_read_error_keeps_state(self):
        client = make_prefect_client()
        client.workspaces.return_value = sub_client(get=PrefectAPIError("HTTP 500", 500))

        resp = read(configured(WorkspaceResource, client), **PROD_STATE)

        assert resp.diagnostics.has_error()
        assert resp.state.raw == PROD_STATE

    def test_update_uses_prior_id(self):
        client = make_prefect_client()
        workspaces = sub_client(update=None, get=PROD.model_copy(update={"name": "production"}))
        client.workspaces.return_value = workspaces

        resp = update(configured(WorkspaceResource, client), PROD_STATE, name="production")

        assert not resp.diagnostics
        workspace_id, payload = workspaces.update.await_args.args
        assert workspace_id == UUID(ID)
        assert payload.name == "production"
        assert resp.state.raw["name"] == "production"

    def test_delete(self):
        client = make_prefect_client()
        workspaces = sub_client(delete=None)
        client.workspaces.return_value = workspaces

        resp = delete(configured(WorkspaceResource, client), **PROD_STATE)

        workspaces.delete.assert_awaited_once_with(UUID(ID))
        assert resp.state.is_null()

    def test_delete_error_keeps_state(self):
        client = make_prefect_client()
        client.workspaces.return_value = sub_client(delete=PrefectAPIError("HTTP 500", 500))

        resp = delete(configured(WorkspaceResource, client), **PROD_STATE)

        assert resp.diagnostics.errors()[0].summary == "Error deleting workspace"
        assert resp.state.raw == PROD_STATE

    def test_import(self):
        resp = import_state(WorkspaceResource(), ID)
        assert resp.state.raw == {"id": ID}


class TestWorkspaceRoleResource:
    def test_create_with_inherited_role(self):
        client = make_prefect_client()
        roles = sub_client(
            create=WorkspaceRole(
                id=UUID(ID), name="Runner", scopes=["run_flows"], inherited_role_id=UUID(ROLE_ID)
            )
        )
        client.workspace_roles.return_value = roles

        resp = create(
            configured(WorkspaceRoleResource, client),
            name="Runner",
            scopes=["run_flows"],
            inherited_role_id=ROLE_ID,
        )

        assert not resp.diagnostics
        assert roles.create.await_args.args[0].inherited_role_id == UUID(ROLE_ID)
        assert resp.state.raw["inherited_role_id"] == ROLE_ID

    def test_malformed_inherited_role(self):
        client = make_prefect_client()

        resp = create(
            configured(WorkspaceRoleResource, client), name="Runner", inherited_role_id="x"
        )

        assert str(resp.diagnostics.errors()[0].attribute) == "inherited_role_id"
        client.workspace_roles.assert_not_called()


ACCESS_STATE = {
    "id": ID,
    "accessor_type": "TEAM",
    "accessor_id": TEAM_ID,
    "workspace_role_id": ROLE_ID,
    "account_id": ACCOUNT_ID,
    "workspace_id": WORKSPACE_ID,
}

ACCESS = WorkspaceAccess(
    id=UUID(ID),
    workspace_id=UUID(WORKSPACE_ID),
    workspace_role_id=UUID(ROLE_ID),
    team_id=UUID(TEAM_ID),
)


class TestWorkspaceAccessResource:
    def test_create_upserts(self):
        client = make_prefect_client()
        access = sub_client(upsert=ACCESS)
        client.workspace_access.return_value = access
        plan = {k: v for k, v in ACCESS_STATE.items() if k != "id"}

        resp = create(configured(WorkspaceAccessResource, client), **plan)

        assert not resp.diagnostics
        payload = access.upsert.await_args.args[0]
        assert payload.accessor_type == AccessorType.TEAM
        assert payload.accessor_id == UUID(TEAM_ID)
        assert resp.state.raw == ACCESS_STATE

    def test_invalid_accessor_type(self):
        client = make_prefect_client()

        resp = create(
            configured(WorkspaceAccessResource, client),
            accessor_type="ROBOT",
            accessor_id=TEAM_ID,
            workspace_role_id=ROLE_ID,
        )

        [diag] = resp.diagnostics.errors()
        assert diag.summary == "Invalid accessor type"
        assert client.mock_calls == []

    def test_read_uses_accessor_type(self):
        client = make_prefect_client()
        access = sub_client(get=ACCESS)
        client.workspace_access.return_value = access

        read(configured(WorkspaceAccessResource, client), **ACCESS_STATE)

        access.get.assert_awaited_once_with(AccessorType.TEAM, UUID(ID))
        client.workspace_access.assert_called_once_with(UUID(ACCOUNT_ID), UUID(WORKSPACE_ID))

    def test_read_not_found(self):
        client = make_prefect_client()
        client.workspace_access.return_value = sub_client(get=ObjectNotFound("gone", 404))

        resp = read(configured(WorkspaceAccessResource, client), **ACCESS_STATE)

        assert resp.state.is_null()

    def test_delete(self):
        client = make_prefect_client()
        access = sub_client(delete=None)
        client.workspace_access.return_value = access

        resp = delete(configured(WorkspaceAccessResource, client), **ACCESS_STATE)

        access.delete.assert_awaited_once_with(AccessorType.TEAM, UUID(ID))
        assert resp.state.is_null()


CI = ServiceAccount(
    id=UUID(ID),
    name="ci",
    account_role_name="Member",
    api_key=ServiceAccountAPIKey(id=UUID(ROLE_ID), name="ci-key", key="pnu_created"),
)


class TestServiceAccountResource:
    def test_create_resolves_role_and_keeps_key(self):
        client = make_prefect_client()
        client.account_roles.return_value = sub_client(
            list=[AccountRole(id=UUID(ROLE_ID), name="Member")]
        )
        service_accounts = sub_client(create=CI)
        client.service_accounts.return_value = service_accounts

        resp = create(
            configured(ServiceAccountResource, client),
            name="ci",
            account_role_name="Member",
            api_key_expiration="2030-01-01T00:00:00Z",
        )

        assert not resp.diagnostics
        payload = service_accounts.create.await_args.args[0]
        assert payload.account_role_id == UUID(ROLE_ID)
        assert payload.api_key_expiration == datetime(2030, 1, 1, tzinfo=timezone.utc)
        assert resp.state.raw["api_key"] == "pnu_created"

    def test_unknown_role(self):
        client = make_prefect_client()
        client.account_roles.return_value = sub_client(list=[])

        resp = create(
            configured(ServiceAccountResource, client), name="ci", account_role_name="Nope"
        )

        assert str(resp.diagnostics.errors()[0].attribute) == "account_role_name"
        client.service_accounts.assert_not_called()

    def test_malformed_expiration(self):
        client = make_prefect_client()

        resp = create(
            configured(ServiceAccountResource, client), name="ci", api_key_expiration="soon"
        )

        assert str(resp.diagnostics.errors()[0].attribute) == "api_key_expiration"
        assert client.mock_calls == []

    def test_update_keeps_prior_key(self):
        client = make_prefect_client()
        refreshed = CI.model_copy(
            update={"name": "ci-renamed", "api_key": ServiceAccountAPIKey(name="ci-key")}
        )
        service_accounts = sub_client(update=None, get=refreshed)
        client.service_accounts.return_value = service_accounts
        state = {"id": ID, "name": "ci", "api_key": "pnu_created"}

        resp = update(configured(ServiceAccountResource, client), state, name="ci-renamed")

        assert not resp.diagnostics
        service_account_id, payload = service_accounts.update.await_args.args
        assert service_account_id == UUID(ID)
        assert payload.model_dump(exclude_unset=True) == {"name": "ci-renamed"}
        assert resp.state.raw["api_key"] == "pnu_created"
        assert resp.state.raw["name"] == "ci-renamed"

    def test_read_not_found(self):
        client = make_prefect_client()
        client.service_accounts.return_value = sub_client(get=ObjectNotFound("gone", 404))

        resp = read(configured(ServiceAccountResource, client), id=ID, name="ci")

        assert resp.state.is_null()


K8S = WorkPool(id=UUID(ID), name="k8s", type="kubernetes", base_job_template={"a": 1})


class TestWorkPoolResource:
    def test_create_defaults_type(self):
        client = make_prefect_client()
        pools = sub_client(create=K8S.model_copy(update={"type": "prefect-agent"}))
        client.work_pools.return_value = pools

        resp = create(configured(WorkPoolResource, client), name="k8s")

        assert not resp.diagnostics
        payload = pools.create.await_args.args[0]
        assert payload.type == "prefect-agent"
        assert payload.base_job_template == {}
        assert payload.is_paused is False

    def test_create_keeps_template_text(self):
        client = make_prefect_client()
        client.work_pools.return_value = sub_client(create=K8S)
        template = '{ "a": 1 }'

        resp = create(
            configured(WorkPoolResource, client),
            name="k8s",
            type="kubernetes",
            base_job_template=template,
        )

        assert resp.state.raw["base_job_template"] == template

    @pytest.mark.parametrize("template", ["[1, 2]", "{broken"])
    def test_invalid_template(self, template):
        client = make_prefect_client()

        resp = create(configured(WorkPoolResource, client), name="k8s", base_job_template=template)

        assert str(resp.diagnostics.errors()[0].attribute) == "base_job_template"
        assert client.mock_calls == []

    def test_update_by_prior_name(self):
        client = make_prefect_client()
        pools = sub_client(update=None, get=K8S.model_copy(update={"is_paused": True}))
        client.work_pools.return_value = pools
        state = {"id": ID, "name": "k8s", "type": "kubernetes", "paused": False}

        resp = update(configured(WorkPoolResource, client), state, paused=True)

        name, payload = pools.update.await_args.args
        assert name == "k8s"
        assert payload.is_paused is True
        assert "base_job_template" not in payload.model_dump(exclude_unset=True)
        assert resp.state.raw["paused"] is True

    def test_import_by_name(self):
        resp = import_state(WorkPoolResource(), "k8s")
        assert resp.state.raw == {"name": "k8s"}


class TestWorkQueueResource:
    def test_create_scoped_to_pool(self):
        client = make_prefect_client()
        queues = sub_client(create=WorkQueue(id=UUID(ID), name="high", priority=1))
        client.work_queues.return_value = queues

        resp = create(
            configured(WorkQueueResource, client),
            name="high",
            work_pool_name="k8s",
            priority=1,
            workspace_id=WORKSPACE_ID,
        )

        assert not resp.diagnostics
        client.work_queues.assert_called_once_with(None, UUID(WORKSPACE_ID), "k8s")
        assert resp.state.raw["work_pool_name"] == "k8s"

    def test_rename_updates_old_name(self):
        client = make_prefect_client()
        queues = sub_client(update=None, get=WorkQueue(id=UUID(ID), name="urgent"))
        client.work_queues.return_value = queues
        state = {"id": ID, "name": "high", "work_pool_name": "k8s"}

        resp = update(configured(WorkQueueResource, client), state, name="urgent")

        assert not resp.diagnostics
        assert queues.update.await_args.args[0] == "high"
        queues.get.assert_awaited_once_with("urgent")

    def test_import(self):
        resp = import_state(WorkQueueResource(), "k8s,high")
        assert resp.state.raw == {"work_pool_name": "k8s", "name": "high"}

    @pytest.mark.parametrize("import_id", ["high", ",high", "k8s,"])
    def test_import_malformed(self, import_id):
        resp = import_state(WorkQueueResource(), import_id)

        [diag] = resp.diagnostics.errors()
        assert diag.summary == "Unexpected Import Identifier"
        assert resp.state.is_null()


class TestVariableResource:
    def test_create_decodes_value(self):
        client = make_prefect_client()
        variables = sub_client(
            create=Variable(id=UUID(ID), name="env", value={"stage": "prod"})
        )
        client.variables.return_value = variables

        resp = create(
            configured(VariableResource, client), name="env", value='{"stage": "prod"}'
        )

        assert not resp.diagnostics
        payload = variables.create.await_args.args[0]
        assert payload.value == {"stage": "prod"}
        assert payload.tags == []
        assert resp.state.raw["value"] == '{"stage": "prod"}'

    def test_create_malformed_value(self):
        client = make_prefect_client()

        resp = create(configured(VariableResource, client), name="env", value="{nope")

        assert str(resp.diagnostics.errors()[0].attribute) == "value"
        assert client.mock_calls == []

    def test_update(self):
        client = make_prefect_client()
        variables = sub_client(
            update=None, get=Variable(id=UUID(ID), name="env", value=2, tags=["a"])
        )
        client.variables.return_value = variables
        state = {"id": ID, "name": "env", "value": "1", "tags": []}

        resp = update(configured(VariableResource, client), state, value="2", tags=["a"])

        variable_id, payload = variables.update.await_args.args
        assert variable_id == UUID(ID)
        assert payload.value == 2
        assert resp.state.raw["value"] == "2"
        assert resp.state.raw["tags"] == ["a"]
