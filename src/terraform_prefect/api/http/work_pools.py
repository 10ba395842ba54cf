"""Workspace-scoped work pool and work queue sub-clients.

Both address objects by name rather than ID, as the Prefect API does.
"""

from __future__ import annotations

from urllib.parse import quote

from ..models import (
    WorkPool,
    WorkPoolCreate,
    WorkPoolUpdate,
    WorkQueue,
    WorkQueueCreate,
    WorkQueueUpdate,
)
from .base import SubClient


class WorkPoolsHTTPClient(SubClient):
    async def create(self, data: WorkPoolCreate) -> WorkPool:
        response = await self._request("POST", "/", json=data.model_dump(mode="json"))
        return WorkPool.model_validate(response.json())

    async def get(self, name: str) -> WorkPool:
        response = await self._request("GET", quote(name, safe=""))
        return WorkPool.model_validate(response.json())

    async def update(self, name: str, data: WorkPoolUpdate) -> None:
        await self._request(
            "PATCH", quote(name, safe=""), json=data.model_dump(mode="json", exclude_unset=True)
        )

    async def delete(self, name: str) -> None:
        await self._request("DELETE", quote(name, safe=""))


class WorkQueuesHTTPClient(SubClient):
    """Bound to ``.../work_pools/{work_pool_name}/queues``."""

    async def create(self, data: WorkQueueCreate) -> WorkQueue:
        response = await self._request("POST", "/", json=data.model_dump(mode="json"))
        return WorkQueue.model_validate(response.json())

    async def get(self, name: str) -> WorkQueue:
        response = await self._request("GET", quote(name, safe=""))
        return WorkQueue.model_validate(response.json())

    async def update(self, name: str, data: WorkQueueUpdate) -> None:
        await self._request(
            "PATCH", quote(name, safe=""), json=data.model_dump(mode="json", exclude_unset=True)
        )

    async def delete(self, name: str) -> None:
        await self._request("DELETE", quote(name, safe=""))


__all__ = ["WorkPoolsHTTPClient", "WorkQueuesHTTPClient"]
