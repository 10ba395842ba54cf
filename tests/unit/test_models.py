"""Tests for mapping remote entities onto attribute models."""

from datetime import datetime, timezone
from uuid import UUID

from terraform_prefect.api.models import (
    AccountRole,
    ServiceAccount,
    Variable,
    WorkPool,
    WorkQueue,
    Workspace,
    WorkspaceAccess,
)
from terraform_prefect.models import (
    AccountRoleModel,
    ServiceAccountModel,
    VariableModel,
    WorkPoolModel,
    WorkQueueModel,
    WorkspaceAccessModel,
    WorkspaceModel,
)

ID = "11111111-1111-1111-1111-111111111111"


class TestWorkspaceModel:
    def test_refresh_maps_every_field(self):
        workspace = Workspace(
            id=UUID(ID),
            name="prod",
            handle="prod-handle",
            description=None,
            created=datetime(2023, 1, 1, tzinfo=timezone.utc),
            updated=None,
        )
        model = WorkspaceModel()
        model.refresh(workspace)

        assert model.id == ID
        assert model.name == "prod"
        assert model.handle == "prod-handle"
        assert model.created == "2023-01-01T00:00:00Z"
        assert model.description is None
        assert model.updated is None

    def test_refresh_overwrites_prior_values(self):
        model = WorkspaceModel(description="old", updated="2022-01-01T00:00:00Z")
        model.refresh(Workspace(id=UUID(ID), name="prod", handle="prod"))
        assert model.description is None
        assert model.updated is None

    def test_refresh_keeps_account_scope(self):
        model = WorkspaceModel(account_id="")
        model.refresh(Workspace(id=UUID(ID), name="prod", handle="prod"))
        assert model.account_id == ""


class TestServiceAccountModel:
    def test_api_key_flattened(self):
        service_account = ServiceAccount.model_validate(
            {
                "id": ID,
                "name": "ci",
                "api_key": {
                    "id": "22222222-2222-2222-2222-222222222222",
                    "name": "ci-key",
                    "created": "2024-01-01T00:00:00Z",
                    "expiration": None,
                    "key": "pnu_created",
                },
            }
        )
        model = ServiceAccountModel()
        model.refresh(service_account)
        assert model.api_key_name == "ci-key"
        assert model.api_key_created == "2024-01-01T00:00:00Z"
        assert model.api_key_expiration is None
        assert model.api_key == "pnu_created"

    def test_missing_key_keeps_prior_key(self):
        model = ServiceAccountModel(api_key="pnu_prior")
        model.refresh(ServiceAccount(id=UUID(ID), name="ci"))
        assert model.api_key == "pnu_prior"
        assert model.api_key_id is None


class TestJSONAttributes:
    def test_work_pool_template_encoded(self):
        pool = WorkPool(
            id=UUID(ID), name="k8s", type="kubernetes", base_job_template={"b": 1, "a": 2}
        )
        model = WorkPoolModel()
        model.refresh(pool)
        assert model.base_job_template == '{"a":2,"b":1}'
        assert model.paused is False

    def test_work_pool_template_text_preserved(self):
        prior = '{\n  "a": 2,\n  "b": 1\n}'
        model = WorkPoolModel(base_job_template=prior)
        model.refresh(
            WorkPool(id=UUID(ID), name="k8s", type="kubernetes", base_job_template={"a": 2, "b": 1})
        )
        assert model.base_job_template == prior

    def test_variable_value(self):
        model = VariableModel()
        model.refresh(Variable(id=UUID(ID), name="env", value={"stage": "prod"}, tags=["x"]))
        assert model.value == '{"stage":"prod"}'
        assert model.tags == ["x"]


class TestScopedModels:
    def test_work_queue_keeps_pool_name_when_absent(self):
        model = WorkQueueModel(work_pool_name="k8s")
        model.refresh(WorkQueue(id=UUID(ID), name="default", priority=1))
        assert model.work_pool_name == "k8s"
        assert model.priority == 1

    def test_workspace_access_accessor(self):
        access = WorkspaceAccess(
            id=UUID(ID),
            workspace_role_id=UUID("33333333-3333-3333-3333-333333333333"),
            team_id=UUID("44444444-4444-4444-4444-444444444444"),
        )
        model = WorkspaceAccessModel(accessor_type="TEAM")
        model.refresh(access)
        assert model.accessor_id == "44444444-4444-4444-4444-444444444444"
        assert model.accessor_type == "TEAM"

    def test_account_role_takes_remote_account(self):
        owner = "55555555-5555-5555-5555-555555555555"
        model = AccountRoleModel(account_id="")
        model.refresh(AccountRole(id=UUID(ID), name="Owner", account_id=UUID(owner)))
        assert model.account_id == owner

    def test_system_role_keeps_configured_account(self):
        model = AccountRoleModel(account_id="")
        model.refresh(AccountRole(id=UUID(ID), name="Admin", is_system_role=True))
        assert model.account_id == ""
        assert model.is_system_role is True
