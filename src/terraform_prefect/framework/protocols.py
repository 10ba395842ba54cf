"""Protocols defining the contract the runtime expects from adapters.

Public API (the "studs"):
    DataSource: Read-only adapter for one entity type
    Resource: Full lifecycle adapter for one entity type
    ResourceWithImportState: Resource that can adopt an existing remote object

Adapters do not share a base class; they only need to provide these methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .requests import (
        ConfigureRequest,
        ConfigureResponse,
        CreateRequest,
        CreateResponse,
        DeleteRequest,
        DeleteResponse,
        ImportStateRequest,
        ImportStateResponse,
        MetadataRequest,
        MetadataResponse,
        ReadDataSourceRequest,
        ReadDataSourceResponse,
        ReadResourceRequest,
        ReadResourceResponse,
        SchemaRequest,
        SchemaResponse,
        UpdateRequest,
        UpdateResponse,
    )


@runtime_checkable
class DataSource(Protocol):
    """A data source: looks up one remote entity and exposes it as state."""

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        """Set the type name, ``<provider_type_name>_<entity>``."""
        ...

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        """Declare the attributes."""
        ...

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        """Receive the client facade from the provider."""
        ...

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        """Fetch the entity and write it into ``resp.state``."""
        ...


@runtime_checkable
class Resource(Protocol):
    """A managed resource: creates, refreshes, updates and deletes one remote entity."""

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None: ...

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None: ...

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None: ...

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None: ...

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None: ...

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None: ...

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None: ...


@runtime_checkable
class ResourceWithImportState(Resource, Protocol):
    """A resource that can be adopted from an existing remote object."""

    async def import_state(self, req: ImportStateRequest, resp: ImportStateResponse) -> None: ...


__all__ = ["DataSource", "Resource", "ResourceWithImportState"]
