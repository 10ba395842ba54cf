"""Client facade protocol and the scoped sub-client protocols it returns.

Public API (the "studs"):
    PrefectClient: Facade returning one sub-client per entity type
    AccountsClient, AccountMembershipsClient, AccountRolesClient,
    CollectionsClient, TeamsClient, WorkspacesClient, WorkspaceAccessClient,
    WorkspaceRolesClient, WorkPoolsClient, WorkQueuesClient, VariablesClient,
    ServiceAccountsClient: Entity-scoped sub-clients

Accessors on the facade never perform I/O. They validate and bind scope
identifiers and raise ClientConstructionError when the scope is unusable.
Passing ``None`` for an account or workspace ID selects the default the
facade was configured with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable
from uuid import UUID

if TYPE_CHECKING:
    from .models import (
        AccessorType,
        Account,
        AccountMembership,
        AccountRole,
        ServiceAccount,
        ServiceAccountCreate,
        ServiceAccountUpdate,
        Team,
        Variable,
        VariableCreate,
        VariableUpdate,
        WorkerMetadata,
        WorkPool,
        WorkPoolCreate,
        WorkPoolUpdate,
        WorkQueue,
        WorkQueueCreate,
        WorkQueueUpdate,
        Workspace,
        WorkspaceAccess,
        WorkspaceAccessUpsert,
        WorkspaceCreate,
        WorkspaceRole,
        WorkspaceRoleUpsert,
        WorkspaceUpdate,
    )


class AccountsClient(Protocol):
    async def get(self) -> Account: ...


class AccountMembershipsClient(Protocol):
    async def list(self, emails: list[str] | None = None) -> list[AccountMembership]: ...


class AccountRolesClient(Protocol):
    async def list(self, names: list[str] | None = None) -> list[AccountRole]: ...

    async def get(self, role_id: UUID) -> AccountRole: ...


class CollectionsClient(Protocol):
    async def get_worker_metadata_views(self) -> WorkerMetadata: ...


class TeamsClient(Protocol):
    async def list(self, names: list[str] | None = None) -> list[Team]: ...


class WorkspacesClient(Protocol):
    async def create(self, data: WorkspaceCreate) -> Workspace: ...

    async def list(self) -> list[Workspace]: ...

    async def get(self, workspace_id: UUID) -> Workspace: ...

    async def update(self, workspace_id: UUID, data: WorkspaceUpdate) -> None: ...

    async def delete(self, workspace_id: UUID) -> None: ...


class WorkspaceAccessClient(Protocol):
    async def upsert(self, data: WorkspaceAccessUpsert) -> WorkspaceAccess: ...

    async def get(self, accessor_type: AccessorType, access_id: UUID) -> WorkspaceAccess: ...

    async def delete(self, accessor_type: AccessorType, access_id: UUID) -> None: ...


class WorkspaceRolesClient(Protocol):
    async def list(self, names: list[str] | None = None) -> list[WorkspaceRole]: ...

    async def create(self, data: WorkspaceRoleUpsert) -> WorkspaceRole: ...

    async def get(self, role_id: UUID) -> WorkspaceRole: ...

    async def update(self, role_id: UUID, data: WorkspaceRoleUpsert) -> None: ...

    async def delete(self, role_id: UUID) -> None: ...


class WorkPoolsClient(Protocol):
    async def create(self, data: WorkPoolCreate) -> WorkPool: ...

    async def get(self, name: str) -> WorkPool: ...

    async def update(self, name: str, data: WorkPoolUpdate) -> None: ...

    async def delete(self, name: str) -> None: ...


class WorkQueuesClient(Protocol):
    async def create(self, data: WorkQueueCreate) -> WorkQueue: ...

    async def get(self, name: str) -> WorkQueue: ...

    async def update(self, name: str, data: WorkQueueUpdate) -> None: ...

    async def delete(self, name: str) -> None: ...


class VariablesClient(Protocol):
    async def create(self, data: VariableCreate) -> Variable: ...

    async def get(self, variable_id: UUID) -> Variable: ...

    async def get_by_name(self, name: str) -> Variable: ...

    async def update(self, variable_id: UUID, data: VariableUpdate) -> None: ...

    async def delete(self, variable_id: UUID) -> None: ...


class ServiceAccountsClient(Protocol):
    async def create(self, data: ServiceAccountCreate) -> ServiceAccount: ...

    async def list(self, names: list[str] | None = None) -> list[ServiceAccount]: ...

    async def get(self, service_account_id: UUID) -> ServiceAccount: ...

    async def update(self, service_account_id: UUID, data: ServiceAccountUpdate) -> None: ...

    async def delete(self, service_account_id: UUID) -> None: ...


@runtime_checkable
class PrefectClient(Protocol):
    """Facade returning scoped clients for different parts of the Prefect API."""

    def accounts(self, account_id: UUID | None) -> AccountsClient: ...

    def account_memberships(self, account_id: UUID | None) -> AccountMembershipsClient: ...

    def account_roles(self, account_id: UUID | None) -> AccountRolesClient: ...

    def collections(self) -> CollectionsClient: ...

    def teams(self, account_id: UUID | None) -> TeamsClient: ...

    def workspaces(self, account_id: UUID | None) -> WorkspacesClient: ...

    def workspace_access(
        self, account_id: UUID | None, workspace_id: UUID | None
    ) -> WorkspaceAccessClient: ...

    def workspace_roles(self, account_id: UUID | None) -> WorkspaceRolesClient: ...

    def work_pools(self, account_id: UUID | None, workspace_id: UUID | None) -> WorkPoolsClient: ...

    def work_queues(
        self, account_id: UUID | None, workspace_id: UUID | None, work_pool_name: str
    ) -> WorkQueuesClient: ...

    def variables(self, account_id: UUID | None, workspace_id: UUID | None) -> VariablesClient: ...

    def service_accounts(self, account_id: UUID | None) -> ServiceAccountsClient: ...


__all__ = [
    "PrefectClient",
    "AccountsClient",
    "AccountMembershipsClient",
    "AccountRolesClient",
    "CollectionsClient",
    "TeamsClient",
    "WorkspacesClient",
    "WorkspaceAccessClient",
    "WorkspaceRolesClient",
    "WorkPoolsClient",
    "WorkQueuesClient",
    "VariablesClient",
    "ServiceAccountsClient",
]
