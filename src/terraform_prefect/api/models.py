"""Prefect Cloud API data transfer objects.

Response models mirror the JSON the API returns. Optional fields are
``None`` when the API sends null or omits them. Create/update payloads are
sent with ``exclude_unset`` so an explicit ``None`` clears a field while an
untouched one is left alone.
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class Account(BaseModel):
    """A Prefect Cloud account."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    handle: str
    location: str | None = None
    link: str | None = None
    allow_public_workspaces: bool | None = None
    billing_email: str | None = None
    domain_names: list[str] = Field(default_factory=list)


class AccountMembership(BaseModel):
    """A user's membership in an account."""

    id: UUID
    actor_id: UUID
    user_id: UUID
    first_name: str = ""
    last_name: str = ""
    handle: str
    email: str
    account_role_id: UUID | None = None
    account_role_name: str = ""


class AccountRole(BaseModel):
    """A role granting account-level permissions."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    permissions: list[str] = Field(default_factory=list)
    account_id: UUID | None = None
    is_system_role: bool = False


class Team(BaseModel):
    """A group of account members."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    description: str | None = None


class Workspace(BaseModel):
    """A workspace inside an account."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    account_id: UUID | None = None
    name: str
    handle: str
    description: str | None = None


class WorkspaceCreate(BaseModel):
    name: str
    handle: str
    description: str | None = None


class WorkspaceUpdate(BaseModel):
    name: str | None = None
    handle: str | None = None
    description: str | None = None


class WorkspaceRole(BaseModel):
    """A role granting workspace-level scopes."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    description: str | None = None
    scopes: list[str] = Field(default_factory=list)
    account_id: UUID | None = None
    inherited_role_id: UUID | None = None


class WorkspaceRoleUpsert(BaseModel):
    name: str
    description: str | None = None
    scopes: list[str] = Field(default_factory=list)
    inherited_role_id: UUID | None = None


class AccessorType(str, Enum):
    """Kinds of actors that can be granted workspace access."""

    USER = "USER"
    SERVICE_ACCOUNT = "SERVICE_ACCOUNT"
    TEAM = "TEAM"


class WorkspaceAccess(BaseModel):
    """A grant of a workspace role to a user, service account or team.

    Exactly one of ``user_id``, ``bot_id`` or ``team_id`` is set, depending
    on the accessor type the grant was made for.
    """

    id: UUID
    workspace_id: UUID | None = None
    workspace_role_id: UUID
    user_id: UUID | None = None
    bot_id: UUID | None = None
    team_id: UUID | None = None

    @property
    def accessor_id(self) -> UUID | None:
        return self.user_id or self.bot_id or self.team_id


class WorkspaceAccessUpsert(BaseModel):
    accessor_type: AccessorType
    accessor_id: UUID
    workspace_role_id: UUID


class ServiceAccountAPIKey(BaseModel):
    id: UUID | None = None
    name: str | None = None
    created: datetime | None = None
    expiration: datetime | None = None
    key: str | None = None


class ServiceAccount(BaseModel):
    """A non-human account ("bot") with its own API key."""

    id: UUID
    actor_id: UUID | None = None
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    account_id: UUID | None = None
    account_role_name: str | None = None
    api_key: ServiceAccountAPIKey = Field(default_factory=ServiceAccountAPIKey)


class ServiceAccountCreate(BaseModel):
    name: str
    account_role_id: UUID | None = None
    api_key_expiration: datetime | None = None


class ServiceAccountUpdate(BaseModel):
    name: str | None = None
    account_role_id: UUID | None = None


class WorkPool(BaseModel):
    """A work pool inside a workspace."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    description: str | None = None
    type: str
    is_paused: bool = False
    concurrency_limit: int | None = None
    default_queue_id: UUID | None = None
    base_job_template: dict[str, Any] = Field(default_factory=dict)


class WorkPoolCreate(BaseModel):
    name: str
    description: str | None = None
    type: str
    is_paused: bool = False
    concurrency_limit: int | None = None
    base_job_template: dict[str, Any] = Field(default_factory=dict)


class WorkPoolUpdate(BaseModel):
    description: str | None = None
    is_paused: bool | None = None
    concurrency_limit: int | None = None
    base_job_template: dict[str, Any] | None = None


class WorkQueue(BaseModel):
    """A work queue inside a work pool."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    description: str | None = None
    is_paused: bool = False
    concurrency_limit: int | None = None
    priority: int | None = None
    work_pool_id: UUID | None = None
    work_pool_name: str | None = None


class WorkQueueCreate(BaseModel):
    name: str
    description: str | None = None
    is_paused: bool = False
    concurrency_limit: int | None = None
    priority: int | None = None


class WorkQueueUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    is_paused: bool | None = None
    concurrency_limit: int | None = None
    priority: int | None = None


class Variable(BaseModel):
    """A named JSON value stored in a workspace."""

    id: UUID
    created: datetime | None = None
    updated: datetime | None = None
    name: str
    value: Any = None
    tags: list[str] = Field(default_factory=list)


class VariableCreate(BaseModel):
    name: str
    value: Any = None
    tags: list[str] = Field(default_factory=list)


class VariableUpdate(BaseModel):
    name: str | None = None
    value: Any = None
    tags: list[str] | None = None


# Aggregate worker metadata: collection name -> worker type -> metadata
WorkerMetadata = dict[str, dict[str, dict[str, Any]]]


__all__ = [
    "Account",
    "AccountMembership",
    "AccountRole",
    "Team",
    "Workspace",
    "WorkspaceCreate",
    "WorkspaceUpdate",
    "WorkspaceRole",
    "WorkspaceRoleUpsert",
    "AccessorType",
    "WorkspaceAccess",
    "WorkspaceAccessUpsert",
    "ServiceAccountAPIKey",
    "ServiceAccount",
    "ServiceAccountCreate",
    "ServiceAccountUpdate",
    "WorkPool",
    "WorkPoolCreate",
    "WorkPoolUpdate",
    "WorkQueue",
    "WorkQueueCreate",
    "WorkQueueUpdate",
    "Variable",
    "VariableCreate",
    "VariableUpdate",
    "WorkerMetadata",
]
