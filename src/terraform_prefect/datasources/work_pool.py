"""Data source for a work pool in a Prefect Cloud workspace."""

from __future__ import annotations

from ..api.client import PrefectClient
from ..framework import (
    Attribute,
    AttributeType,
    ConfigureRequest,
    ConfigureResponse,
    MetadataRequest,
    MetadataResponse,
    ReadDataSourceRequest,
    ReadDataSourceResponse,
    Schema,
    SchemaRequest,
    SchemaResponse,
)
from ..helpers import (
    add_api_error,
    build_client,
    client_from_provider_data,
    parse_optional_uuid,
    require_configured,
)
from ..models import WorkPoolModel

WORK_POOL_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Work pool UUID"),
    "created": Attribute(
        computed=True,
        description="Date and time of the work pool creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the work pool was last updated in RFC 3339 format",
    ),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "workspace_id": Attribute(
        optional=True,
        description="Workspace UUID, defaults to the workspace set in the provider",
    ),
    "name": Attribute(required=True, description="Name of the work pool"),
    "description": Attribute(computed=True, description="Description of the work pool"),
    "type": Attribute(computed=True, description="Type of the work pool"),
    "paused": Attribute(
        type=AttributeType.BOOL,
        computed=True,
        description="Whether this work pool is paused",
    ),
    "concurrency_limit": Attribute(
        type=AttributeType.INT64,
        computed=True,
        description="The concurrency limit applied to this work pool",
    ),
    "default_queue_id": Attribute(
        computed=True, description="The UUID of the default queue associated with this work pool"
    ),
    "base_job_template": Attribute(
        computed=True, description="The base job template for the work pool, as a JSON string"
    ),
}


class WorkPoolDataSource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_work_pool"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect work pool",
            attributes=WORK_POOL_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        model, diags = req.config.get(WorkPoolModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        workspace_id = parse_optional_uuid(
            model.workspace_id, "workspace_id", "Workspace", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(
            self._client.work_pools, "work pool", resp.diagnostics, account_id, workspace_id
        )
        if client is None:
            return

        try:
            pool = await client.get(model.name)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error refreshing work pool state", "read work pool", e)
            return

        model.refresh(pool)

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["WorkPoolDataSource", "WORK_POOL_ATTRIBUTES"]
