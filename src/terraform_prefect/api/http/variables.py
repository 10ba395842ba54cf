"""Workspace-scoped variables sub-client."""

from __future__ import annotations

from urllib.parse import quote
from uuid import UUID

from ..models import Variable, VariableCreate, VariableUpdate
from .base import SubClient


class VariablesHTTPClient(SubClient):
    async def create(self, data: VariableCreate) -> Variable:
        response = await self._request("POST", "/", json=data.model_dump(mode="json"))
        return Variable.model_validate(response.json())

    async def get(self, variable_id: UUID) -> Variable:
        response = await self._request("GET", str(variable_id))
        return Variable.model_validate(response.json())

    async def get_by_name(self, name: str) -> Variable:
        response = await self._request("GET", f"name/{quote(name, safe='')}")
        return Variable.model_validate(response.json())

    async def update(self, variable_id: UUID, data: VariableUpdate) -> None:
        await self._request(
            "PATCH", str(variable_id), json=data.model_dump(mode="json", exclude_unset=True)
        )

    async def delete(self, variable_id: UUID) -> None:
        await self._request("DELETE", str(variable_id))


__all__ = ["VariablesHTTPClient"]
