"""Typed attribute models shared by data sources and resources.

Every attribute is a nullable string, bool, number or list. ``None`` is the
null value; remote fields that are absent stay ``None`` and never collapse
to an empty string. Each model has a ``refresh`` method that copies a remote
entity onto it, overwriting every field the entity carries.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .api.models import (
    Account,
    AccountMembership,
    AccountRole,
    ServiceAccount,
    Team,
    Variable,
    WorkPool,
    WorkQueue,
    Workspace,
    WorkspaceAccess,
    WorkspaceRole,
)
from .helpers import format_rfc3339, json_preserving, uuid_to_str


class AttributeModel(BaseModel):
    """Base for attribute models: unknown keys are rejected, assignments are validated."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class AccountModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    handle: str | None = None
    location: str | None = None
    link: str | None = None
    allow_public_workspaces: bool | None = None
    billing_email: str | None = None
    domain_names: list[str] | None = None

    def refresh(self, account: Account) -> None:
        self.id = str(account.id)
        self.created = format_rfc3339(account.created)
        self.updated = format_rfc3339(account.updated)
        self.name = account.name
        self.handle = account.handle
        self.location = account.location
        self.link = account.link
        self.allow_public_workspaces = account.allow_public_workspaces
        self.billing_email = account.billing_email
        self.domain_names = list(account.domain_names)


class AccountMemberModel(AttributeModel):
    email: str | None = None
    account_id: str | None = None
    id: str | None = None
    actor_id: str | None = None
    user_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    handle: str | None = None
    account_role_id: str | None = None
    account_role_name: str | None = None

    def refresh(self, member: AccountMembership) -> None:
        self.id = str(member.id)
        self.actor_id = str(member.actor_id)
        self.user_id = str(member.user_id)
        self.first_name = member.first_name
        self.last_name = member.last_name
        self.handle = member.handle
        self.email = member.email
        self.account_role_id = uuid_to_str(member.account_role_id)
        self.account_role_name = member.account_role_name


class AccountRoleModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    account_id: str | None = None
    permissions: list[str] | None = None
    is_system_role: bool | None = None

    def refresh(self, role: AccountRole) -> None:
        self.id = str(role.id)
        self.created = format_rfc3339(role.created)
        self.updated = format_rfc3339(role.updated)
        self.name = role.name
        if role.account_id is not None:
            self.account_id = str(role.account_id)
        self.permissions = list(role.permissions)
        self.is_system_role = role.is_system_role


class TeamModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    description: str | None = None
    account_id: str | None = None

    def refresh(self, team: Team) -> None:
        self.id = str(team.id)
        self.created = format_rfc3339(team.created)
        self.updated = format_rfc3339(team.updated)
        self.name = team.name
        self.description = team.description


class WorkspaceModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    account_id: str | None = None
    name: str | None = None
    handle: str | None = None
    description: str | None = None

    def refresh(self, workspace: Workspace) -> None:
        self.id = str(workspace.id)
        self.created = format_rfc3339(workspace.created)
        self.updated = format_rfc3339(workspace.updated)
        self.name = workspace.name
        self.handle = workspace.handle
        self.description = workspace.description


class WorkspaceRoleModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    description: str | None = None
    scopes: list[str] | None = None
    inherited_role_id: str | None = None
    account_id: str | None = None

    def refresh(self, role: WorkspaceRole) -> None:
        self.id = str(role.id)
        self.created = format_rfc3339(role.created)
        self.updated = format_rfc3339(role.updated)
        self.name = role.name
        self.description = role.description
        self.scopes = list(role.scopes)
        self.inherited_role_id = uuid_to_str(role.inherited_role_id)


class WorkspaceAccessModel(AttributeModel):
    id: str | None = None
    accessor_type: str | None = None
    accessor_id: str | None = None
    workspace_role_id: str | None = None
    account_id: str | None = None
    workspace_id: str | None = None

    def refresh(self, access: WorkspaceAccess) -> None:
        self.id = str(access.id)
        self.workspace_role_id = str(access.workspace_role_id)
        if access.accessor_id is not None:
            self.accessor_id = str(access.accessor_id)
        if access.workspace_id is not None:
            self.workspace_id = str(access.workspace_id)


class ServiceAccountModel(AttributeModel):
    id: str | None = None
    actor_id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    account_id: str | None = None
    account_role_name: str | None = None
    api_key_id: str | None = None
    api_key_name: str | None = None
    api_key_created: str | None = None
    api_key_expiration: str | None = None
    api_key: str | None = None

    def refresh(self, service_account: ServiceAccount) -> None:
        """Copy the remote fields. The key itself is only returned on create, so a
        missing key leaves ``api_key`` as it was."""
        self.id = str(service_account.id)
        self.actor_id = uuid_to_str(service_account.actor_id)
        self.created = format_rfc3339(service_account.created)
        self.updated = format_rfc3339(service_account.updated)
        self.name = service_account.name
        self.account_role_name = service_account.account_role_name
        self.api_key_id = uuid_to_str(service_account.api_key.id)
        self.api_key_name = service_account.api_key.name
        self.api_key_created = format_rfc3339(service_account.api_key.created)
        self.api_key_expiration = format_rfc3339(service_account.api_key.expiration)
        if service_account.api_key.key is not None:
            self.api_key = service_account.api_key.key


class WorkPoolModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    description: str | None = None
    type: str | None = None
    paused: bool | None = None
    concurrency_limit: int | None = None
    default_queue_id: str | None = None
    base_job_template: str | None = None
    account_id: str | None = None
    workspace_id: str | None = None

    def refresh(self, pool: WorkPool) -> None:
        self.id = str(pool.id)
        self.created = format_rfc3339(pool.created)
        self.updated = format_rfc3339(pool.updated)
        self.name = pool.name
        self.description = pool.description
        self.type = pool.type
        self.paused = pool.is_paused
        self.concurrency_limit = pool.concurrency_limit
        self.default_queue_id = uuid_to_str(pool.default_queue_id)
        self.base_job_template = json_preserving(self.base_job_template, pool.base_job_template)


class WorkQueueModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    work_pool_name: str | None = None
    description: str | None = None
    is_paused: bool | None = None
    concurrency_limit: int | None = None
    priority: int | None = None
    account_id: str | None = None
    workspace_id: str | None = None

    def refresh(self, queue: WorkQueue) -> None:
        self.id = str(queue.id)
        self.created = format_rfc3339(queue.created)
        self.updated = format_rfc3339(queue.updated)
        self.name = queue.name
        if queue.work_pool_name is not None:
            self.work_pool_name = queue.work_pool_name
        self.description = queue.description
        self.is_paused = queue.is_paused
        self.concurrency_limit = queue.concurrency_limit
        self.priority = queue.priority


class VariableModel(AttributeModel):
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    name: str | None = None
    value: str | None = None
    tags: list[str] | None = None
    account_id: str | None = None
    workspace_id: str | None = None

    def refresh(self, variable: Variable) -> None:
        self.id = str(variable.id)
        self.created = format_rfc3339(variable.created)
        self.updated = format_rfc3339(variable.updated)
        self.name = variable.name
        self.value = json_preserving(self.value, variable.value)
        self.tags = list(variable.tags)


class WorkerMetadataModel(AttributeModel):
    base_job_configs: dict[str, str] | None = None


__all__ = [
    "AttributeModel",
    "AccountModel",
    "AccountMemberModel",
    "AccountRoleModel",
    "TeamModel",
    "WorkspaceModel",
    "WorkspaceRoleModel",
    "WorkspaceAccessModel",
    "ServiceAccountModel",
    "WorkPoolModel",
    "WorkQueueModel",
    "VariableModel",
    "WorkerMetadataModel",
]
