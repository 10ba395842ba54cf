"""httpx-backed implementation of the PrefectClient facade.

Public API (the "studs"):
    HTTPPrefectClient: Facade over one shared httpx.AsyncClient
"""

from __future__ import annotations

import logging
from urllib.parse import quote
from uuid import UUID

import httpx

from ..config import ProviderConfig
from ..exceptions import ClientConstructionError
from .accounts import (
    AccountMembershipsHTTPClient,
    AccountRolesHTTPClient,
    AccountsHTTPClient,
    ServiceAccountsHTTPClient,
    TeamsHTTPClient,
)
from .collections import CollectionsHTTPClient
from .variables import VariablesHTTPClient
from .work_pools import WorkPoolsHTTPClient, WorkQueuesHTTPClient
from .workspaces import (
    WorkspaceAccessHTTPClient,
    WorkspaceRolesHTTPClient,
    WorkspacesHTTPClient,
)

_logger = logging.getLogger(__name__)

_NIL_UUID = UUID(int=0)


class HTTPPrefectClient:
    """Returns sub-clients scoped to an account, workspace or work pool.

    All sub-clients share one ``httpx.AsyncClient``; it pools connections
    and is safe to use from concurrent tasks. Building a sub-client does no
    I/O.
    """

    def __init__(self, config: ProviderConfig, http: httpx.AsyncClient | None = None) -> None:
        """Initialize the facade.

        Args:
            config: Endpoint, credentials and default scope
            http: Pre-built async client (tests pass one with a mock transport)
        """
        self._config = config
        if http is None:
            headers = {"Content-Type": "application/json"}
            if config.api_key is not None:
                headers["Authorization"] = f"Bearer {config.api_key.get_secret_value()}"
            http = httpx.AsyncClient(
                base_url=config.endpoint,
                headers=headers,
                timeout=httpx.Timeout(config.timeout_seconds),
            )
        self._http = http
        _logger.debug("Prefect client configured for %s", config.endpoint)

    @property
    def default_account_id(self) -> UUID | None:
        return self._config.account_id

    @property
    def default_workspace_id(self) -> UUID | None:
        return self._config.workspace_id

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> HTTPPrefectClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # =========================================================================
    # Scope resolution
    # =========================================================================

    def _account_id(self, account_id: UUID | None) -> UUID:
        if account_id is None or account_id == _NIL_UUID:
            account_id = self._config.account_id
        if account_id is None:
            raise ClientConstructionError(
                "account_id is not set and no default account_id is available"
            )
        return account_id

    def _workspace_id(self, workspace_id: UUID | None) -> UUID:
        if workspace_id is None or workspace_id == _NIL_UUID:
            workspace_id = self._config.workspace_id
        if workspace_id is None:
            raise ClientConstructionError(
                "workspace_id is not set and no default workspace_id is available"
            )
        return workspace_id

    def _account_path(self, account_id: UUID | None) -> str:
        return f"/accounts/{self._account_id(account_id)}"

    def _workspace_path(self, account_id: UUID | None, workspace_id: UUID | None) -> str:
        return f"{self._account_path(account_id)}/workspaces/{self._workspace_id(workspace_id)}"

    # =========================================================================
    # Sub-client accessors
    # =========================================================================

    def accounts(self, account_id: UUID | None) -> AccountsHTTPClient:
        return AccountsHTTPClient(self._http, self._account_path(account_id))

    def account_memberships(self, account_id: UUID | None) -> AccountMembershipsHTTPClient:
        return AccountMembershipsHTTPClient(
            self._http, f"{self._account_path(account_id)}/account_memberships"
        )

    def account_roles(self, account_id: UUID | None) -> AccountRolesHTTPClient:
        return AccountRolesHTTPClient(self._http, f"{self._account_path(account_id)}/account_roles")

    def collections(self) -> CollectionsHTTPClient:
        return CollectionsHTTPClient(self._http, "/collections")

    def teams(self, account_id: UUID | None) -> TeamsHTTPClient:
        return TeamsHTTPClient(self._http, f"{self._account_path(account_id)}/teams")

    def workspaces(self, account_id: UUID | None) -> WorkspacesHTTPClient:
        return WorkspacesHTTPClient(self._http, f"{self._account_path(account_id)}/workspaces")

    def workspace_access(
        self, account_id: UUID | None, workspace_id: UUID | None
    ) -> WorkspaceAccessHTTPClient:
        return WorkspaceAccessHTTPClient(self._http, self._workspace_path(account_id, workspace_id))

    def workspace_roles(self, account_id: UUID | None) -> WorkspaceRolesHTTPClient:
        return WorkspaceRolesHTTPClient(
            self._http, f"{self._account_path(account_id)}/workspace_roles"
        )

    def work_pools(self, account_id: UUID | None, workspace_id: UUID | None) -> WorkPoolsHTTPClient:
        return WorkPoolsHTTPClient(
            self._http, f"{self._workspace_path(account_id, workspace_id)}/work_pools"
        )

    def work_queues(
        self, account_id: UUID | None, workspace_id: UUID | None, work_pool_name: str
    ) -> WorkQueuesHTTPClient:
        if not work_pool_name:
            raise ClientConstructionError("work_pool_name must not be empty")
        base = self._workspace_path(account_id, workspace_id)
        pool = quote(work_pool_name, safe="")
        return WorkQueuesHTTPClient(self._http, f"{base}/work_pools/{pool}/queues")

    def variables(self, account_id: UUID | None, workspace_id: UUID | None) -> VariablesHTTPClient:
        return VariablesHTTPClient(
            self._http, f"{self._workspace_path(account_id, workspace_id)}/variables"
        )

    def service_accounts(self, account_id: UUID | None) -> ServiceAccountsHTTPClient:
        return ServiceAccountsHTTPClient(self._http, f"{self._account_path(account_id)}/bots")


__all__ = ["HTTPPrefectClient"]
