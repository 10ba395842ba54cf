"""Resource managing a work pool in a Prefect Cloud workspace.

Work pools are addressed by name, so the name is also the import identifier.
"""

from __future__ import annotations

from typing import Any

from ..api.client import PrefectClient, WorkPoolsClient
from ..api.exceptions import ObjectNotFound
from ..api.models import WorkPoolCreate, WorkPoolUpdate
from ..framework import (
    Attribute,
    AttributePath,
    AttributeType,
    ConfigureRequest,
    ConfigureResponse,
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    DeleteResponse,
    Diagnostics,
    ImportStateRequest,
    ImportStateResponse,
    MetadataRequest,
    MetadataResponse,
    ReadResourceRequest,
    ReadResourceResponse,
    Schema,
    SchemaRequest,
    SchemaResponse,
    UpdateRequest,
    UpdateResponse,
)
from ..helpers import (
    add_api_error,
    build_client,
    client_from_provider_data,
    json_loads,
    parse_optional_uuid,
    require_configured,
)
from ..models import WorkPoolModel

DEFAULT_WORK_POOL_TYPE = "prefect-agent"

WORK_POOL_RESOURCE_ATTRIBUTES: dict[str, Attribute] = {
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
    "description": Attribute(optional=True, description="Description of the work pool"),
    "type": Attribute(
        optional=True,
        computed=True,
        description=f"Type of the work pool, defaults to {DEFAULT_WORK_POOL_TYPE!r}",
    ),
    "paused": Attribute(
        type=AttributeType.BOOL,
        optional=True,
        computed=True,
        description="Whether this work pool is paused",
    ),
    "concurrency_limit": Attribute(
        type=AttributeType.INT64,
        optional=True,
        description="The concurrency limit applied to this work pool",
    ),
    "default_queue_id": Attribute(
        computed=True, description="The UUID of the default queue associated with this work pool"
    ),
    "base_job_template": Attribute(
        optional=True,
        computed=True,
        description="The base job template for the work pool, as a JSON string",
    ),
}


def _base_job_template(model: WorkPoolModel, diags: Diagnostics) -> dict[str, Any] | None:
    """Decode the JSON template attribute. A null template decodes to None."""
    template = json_loads(model.base_job_template, "base_job_template", diags)
    if template is not None and not isinstance(template, dict):
        diags.add_attribute_error(
            AttributePath.root("base_job_template"),
            "Invalid base job template",
            "The base job template must be a JSON object",
        )
        return None
    return template


class WorkPoolResource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_work_pool"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Resource representing a Prefect work pool",
            attributes=WORK_POOL_RESOURCE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Resource", resp.diagnostics)
        if client is not None:
            self._client = client

    def _pools(self, model: WorkPoolModel, diags: Diagnostics) -> WorkPoolsClient | None:
        account_id = parse_optional_uuid(model.account_id, "account_id", "Account", diags)
        workspace_id = parse_optional_uuid(model.workspace_id, "workspace_id", "Workspace", diags)
        if diags.has_error() or not require_configured(self._client, diags):
            return None
        return build_client(self._client.work_pools, "work pool", diags, account_id, workspace_id)

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        model, diags = req.plan.get(WorkPoolModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        template = _base_job_template(model, resp.diagnostics)
        if resp.diagnostics.has_error():
            return

        client = self._pools(model, resp.diagnostics)
        if client is None:
            return

        try:
            pool = await client.create(
                WorkPoolCreate(
                    name=model.name,
                    description=model.description,
                    type=model.type or DEFAULT_WORK_POOL_TYPE,
                    is_paused=bool(model.paused),
                    concurrency_limit=model.concurrency_limit,
                    base_job_template=template or {},
                )
            )
        except Exception as e:
            add_api_error(resp.diagnostics, "Error creating work pool", "create work pool", e)
            return

        model.refresh(pool)

        resp.diagnostics.append(resp.state.set(model))

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None:
        model, diags = req.state.get(WorkPoolModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._pools(model, resp.diagnostics)
        if client is None:
            return

        try:
            pool = await client.get(model.name)
        except ObjectNotFound:
            resp.state.remove_resource()
            return
        except Exception as e:
            add_api_error(resp.diagnostics, "Error refreshing work pool state", "read work pool", e)
            return

        model.refresh(pool)

        resp.diagnostics.append(resp.state.set(model))

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        model, diags = req.plan.get(WorkPoolModel)
        resp.diagnostics.append(diags)
        prior, diags = req.state.get(WorkPoolModel)
        resp.diagnostics.append(diags)
        if model is None or prior is None or resp.diagnostics.has_error():
            return

        template = _base_job_template(model, resp.diagnostics)
        if resp.diagnostics.has_error():
            return

        client = self._pools(model, resp.diagnostics)
        if client is None:
            return

        changes: dict[str, Any] = {
            "description": model.description,
            "concurrency_limit": model.concurrency_limit,
        }
        if model.paused is not None:
            changes["is_paused"] = model.paused
        if template is not None:
            changes["base_job_template"] = template

        try:
            await client.update(prior.name, WorkPoolUpdate(**changes))
            pool = await client.get(prior.name)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error updating work pool", "update work pool", e)
            return

        model.refresh(pool)

        resp.diagnostics.append(resp.state.set(model))

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        model, diags = req.state.get(WorkPoolModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._pools(model, resp.diagnostics)
        if client is None:
            return

        try:
            await client.delete(model.name)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error deleting work pool", "delete work pool", e)
            return

        resp.state.remove_resource()

    async def import_state(self, req: ImportStateRequest, resp: ImportStateResponse) -> None:
        resp.state.set_attribute("name", req.id)


__all__ = ["WorkPoolResource", "WORK_POOL_RESOURCE_ATTRIBUTES", "DEFAULT_WORK_POOL_TYPE"]
