"""Data source exposing the default base job configuration of each worker type.

The aggregate worker metadata view is grouped by collection; this flattens it
into a single map of worker type to its default base job configuration, JSON
encoded, suitable as a work pool ``base_job_template``.
"""

from __future__ import annotations

from ..api.client import PrefectClient
from ..api.models import WorkerMetadata
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
    json_dumps,
    require_configured,
)
from ..models import WorkerMetadataModel

WORKER_METADATA_ATTRIBUTES: dict[str, Attribute] = {
    "base_job_configs": Attribute(
        type=AttributeType.MAP_STRING,
        computed=True,
        description="Map of worker type to its default base job configuration, as JSON strings",
    ),
}


def flatten_base_job_configs(metadata: WorkerMetadata) -> dict[str, str]:
    """Collect ``default_base_job_configuration`` for every worker type across collections.

    Worker types without a default configuration are skipped.
    """
    configs: dict[str, str] = {}
    for workers in metadata.values():
        for worker_type, worker in workers.items():
            config = worker.get("default_base_job_configuration")
            if config is not None:
                configs[worker_type] = json_dumps(config)
    return configs


class WorkerMetadataDataSource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_worker_metadata"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing the default job configurations of worker types",
            attributes=WORKER_METADATA_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        model, diags = req.config.get(WorkerMetadataModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        if not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(self._client.collections, "collections", resp.diagnostics)
        if client is None:
            return

        try:
            metadata = await client.get_worker_metadata_views()
        except Exception as e:
            add_api_error(
                resp.diagnostics,
                "Error refreshing worker metadata state",
                "read worker metadata",
                e,
            )
            return

        model.base_job_configs = flatten_base_job_configs(metadata)

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["WorkerMetadataDataSource", "WORKER_METADATA_ATTRIBUTES", "flatten_base_job_configs"]
