"""Account-scoped sub-clients: accounts, memberships, roles, teams and service accounts."""

from __future__ import annotations

from uuid import UUID

from ..models import (
    Account,
    AccountMembership,
    AccountRole,
    ServiceAccount,
    ServiceAccountCreate,
    ServiceAccountUpdate,
    Team,
)
from .base import SubClient, any_filter


class AccountsHTTPClient(SubClient):
    """Reads the account the client is bound to."""

    async def get(self) -> Account:
        response = await self._request("GET")
        return Account.model_validate(response.json())


class AccountMembershipsHTTPClient(SubClient):
    async def list(self, emails: list[str] | None = None) -> list[AccountMembership]:
        response = await self._request(
            "POST", "filter", json=any_filter("account_memberships", "email", emails)
        )
        return [AccountMembership.model_validate(item) for item in response.json()]


class AccountRolesHTTPClient(SubClient):
    async def list(self, names: list[str] | None = None) -> list[AccountRole]:
        response = await self._request(
            "POST", "filter", json=any_filter("account_roles", "name", names)
        )
        return [AccountRole.model_validate(item) for item in response.json()]

    async def get(self, role_id: UUID) -> AccountRole:
        response = await self._request("GET", str(role_id))
        return AccountRole.model_validate(response.json())


class TeamsHTTPClient(SubClient):
    async def list(self, names: list[str] | None = None) -> list[Team]:
        response = await self._request("POST", "filter", json=any_filter("teams", "name", names))
        return [Team.model_validate(item) for item in response.json()]


class ServiceAccountsHTTPClient(SubClient):
    """Service accounts live under the ``bots`` path of the API."""

    async def create(self, data: ServiceAccountCreate) -> ServiceAccount:
        response = await self._request(
            "POST", "/", json=data.model_dump(mode="json", exclude_none=True)
        )
        return ServiceAccount.model_validate(response.json())

    async def list(self, names: list[str] | None = None) -> list[ServiceAccount]:
        response = await self._request("POST", "filter", json=any_filter("bots", "name", names))
        return [ServiceAccount.model_validate(item) for item in response.json()]

    async def get(self, service_account_id: UUID) -> ServiceAccount:
        response = await self._request("GET", str(service_account_id))
        return ServiceAccount.model_validate(response.json())

    async def update(self, service_account_id: UUID, data: ServiceAccountUpdate) -> None:
        await self._request(
            "PATCH",
            str(service_account_id),
            json=data.model_dump(mode="json", exclude_unset=True),
        )

    async def delete(self, service_account_id: UUID) -> None:
        await self._request("DELETE", str(service_account_id))


__all__ = [
    "AccountsHTTPClient",
    "AccountMembershipsHTTPClient",
    "AccountRolesHTTPClient",
    "TeamsHTTPClient",
    "ServiceAccountsHTTPClient",
]
