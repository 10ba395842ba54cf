"""Workspace sub-clients: workspaces, workspace roles and workspace access grants."""

from __future__ import annotations

from uuid import UUID

from ..models import (
    AccessorType,
    Workspace,
    WorkspaceAccess,
    WorkspaceAccessUpsert,
    WorkspaceCreate,
    WorkspaceRole,
    WorkspaceRoleUpsert,
    WorkspaceUpdate,
)
from .base import SubClient, any_filter

# Accessor type -> (path segment, payload key)
_ACCESS_ROUTES: dict[AccessorType, tuple[str, str]] = {
    AccessorType.USER: ("user_access", "user_id"),
    AccessorType.SERVICE_ACCOUNT: ("bot_access", "bot_id"),
    AccessorType.TEAM: ("team_access", "team_id"),
}


class WorkspacesHTTPClient(SubClient):
    async def create(self, data: WorkspaceCreate) -> Workspace:
        response = await self._request("POST", "/", json=data.model_dump(mode="json"))
        return Workspace.model_validate(response.json())

    async def list(self) -> list[Workspace]:
        response = await self._request("POST", "filter", json={})
        return [Workspace.model_validate(item) for item in response.json()]

    async def get(self, workspace_id: UUID) -> Workspace:
        response = await self._request("GET", str(workspace_id))
        return Workspace.model_validate(response.json())

    async def update(self, workspace_id: UUID, data: WorkspaceUpdate) -> None:
        await self._request(
            "PATCH", str(workspace_id), json=data.model_dump(mode="json", exclude_unset=True)
        )

    async def delete(self, workspace_id: UUID) -> None:
        await self._request("DELETE", str(workspace_id))


class WorkspaceRolesHTTPClient(SubClient):
    async def list(self, names: list[str] | None = None) -> list[WorkspaceRole]:
        response = await self._request(
            "POST", "filter", json=any_filter("workspace_roles", "name", names)
        )
        return [WorkspaceRole.model_validate(item) for item in response.json()]

    async def create(self, data: WorkspaceRoleUpsert) -> WorkspaceRole:
        response = await self._request("POST", "/", json=data.model_dump(mode="json"))
        return WorkspaceRole.model_validate(response.json())

    async def get(self, role_id: UUID) -> WorkspaceRole:
        response = await self._request("GET", str(role_id))
        return WorkspaceRole.model_validate(response.json())

    async def update(self, role_id: UUID, data: WorkspaceRoleUpsert) -> None:
        await self._request("PATCH", str(role_id), json=data.model_dump(mode="json"))

    async def delete(self, role_id: UUID) -> None:
        await self._request("DELETE", str(role_id))


class WorkspaceAccessHTTPClient(SubClient):
    """Grants workspace roles to users, service accounts and teams.

    Bound to ``/accounts/{account_id}/workspaces/{workspace_id}``; each
    accessor type has its own collection below that prefix.
    """

    async def upsert(self, data: WorkspaceAccessUpsert) -> WorkspaceAccess:
        segment, key = _ACCESS_ROUTES[data.accessor_type]
        payload = {key: str(data.accessor_id), "workspace_role_id": str(data.workspace_role_id)}
        response = await self._request("POST", f"{segment}/", json=payload)
        return WorkspaceAccess.model_validate(response.json())

    async def get(self, accessor_type: AccessorType, access_id: UUID) -> WorkspaceAccess:
        segment, _ = _ACCESS_ROUTES[accessor_type]
        response = await self._request("GET", f"{segment}/{access_id}")
        return WorkspaceAccess.model_validate(response.json())

    async def delete(self, accessor_type: AccessorType, access_id: UUID) -> None:
        segment, _ = _ACCESS_ROUTES[accessor_type]
        await self._request("DELETE", f"{segment}/{access_id}")


__all__ = ["WorkspacesHTTPClient", "WorkspaceRolesHTTPClient", "WorkspaceAccessHTTPClient"]
