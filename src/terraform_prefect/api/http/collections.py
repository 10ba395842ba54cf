"""Collections sub-client: aggregate metadata about available worker types."""

from __future__ import annotations

from pydantic import TypeAdapter

from ..models import WorkerMetadata
from .base import SubClient

_WORKER_METADATA = TypeAdapter(WorkerMetadata)


class CollectionsHTTPClient(SubClient):
    async def get_worker_metadata_views(self) -> WorkerMetadata:
        response = await self._request("GET", "views/aggregate-worker-metadata")
        return _WORKER_METADATA.validate_python(response.json())


__all__ = ["CollectionsHTTPClient"]
