"""Resource managing a work queue inside a work pool.

Import identifiers have the form ``<work_pool_name>,<name>``.
"""

from __future__ import annotations

from typing import Any

from ..api.client import PrefectClient, WorkQueuesClient
from ..api.exceptions import ObjectNotFound
from ..api.models import WorkQueueCreate, WorkQueueUpdate
from ..framework import (
    Attribute,
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
    parse_optional_uuid,
    require_configured,
)
from ..models import WorkQueueModel

WORK_QUEUE_RESOURCE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Work queue UUID"),
    "created": Attribute(
        computed=True,
        description="Date and time of the work queue creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the work queue was last updated in RFC 3339 format",
    ),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "workspace_id": Attribute(
        optional=True,
        description="Workspace UUID, defaults to the workspace set in the provider",
    ),
    "name": Attribute(required=True, description="Name of the work queue"),
    "work_pool_name": Attribute(
        required=True, description="The name of the work pool the work queue belongs to"
    ),
    "description": Attribute(optional=True, description="Description of the work queue"),
    "is_paused": Attribute(
        type=AttributeType.BOOL,
        optional=True,
        computed=True,
        description="Whether this work queue is paused",
    ),
    "concurrency_limit": Attribute(
        type=AttributeType.INT64,
        optional=True,
        description="The concurrency limit applied to this work queue",
    ),
    "priority": Attribute(
        type=AttributeType.INT64,
        optional=True,
        computed=True,
        description="Priority of the work queue relative to others in the pool",
    ),
}


class WorkQueueResource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_work_queue"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Resource representing a Prefect work queue",
            attributes=WORK_QUEUE_RESOURCE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Resource", resp.diagnostics)
        if client is not None:
            self._client = client

    def _queues(self, model: WorkQueueModel, diags: Diagnostics) -> WorkQueuesClient | None:
        account_id = parse_optional_uuid(model.account_id, "account_id", "Account", diags)
        workspace_id = parse_optional_uuid(model.workspace_id, "workspace_id", "Workspace", diags)
        if diags.has_error() or not require_configured(self._client, diags):
            return None
        return build_client(
            self._client.work_queues,
            "work queue",
            diags,
            account_id,
            workspace_id,
            model.work_pool_name,
        )

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        model, diags = req.plan.get(WorkQueueModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._queues(model, resp.diagnostics)
        if client is None:
            return

        try:
            queue = await client.create(
                WorkQueueCreate(
                    name=model.name,
                    description=model.description,
                    is_paused=bool(model.is_paused),
                    concurrency_limit=model.concurrency_limit,
                    priority=model.priority,
                )
            )
        except Exception as e:
            add_api_error(resp.diagnostics, "Error creating work queue", "create work queue", e)
            return

        model.refresh(queue)

        resp.diagnostics.append(resp.state.set(model))

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None:
        model, diags = req.state.get(WorkQueueModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._queues(model, resp.diagnostics)
        if client is None:
            return

        try:
            queue = await client.get(model.name)
        except ObjectNotFound:
            resp.state.remove_resource()
            return
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error refreshing work queue state", "read work queue", e
            )
            return

        model.refresh(queue)

        resp.diagnostics.append(resp.state.set(model))

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        model, diags = req.plan.get(WorkQueueModel)
        resp.diagnostics.append(diags)
        prior, diags = req.state.get(WorkQueueModel)
        resp.diagnostics.append(diags)
        if model is None or prior is None or resp.diagnostics.has_error():
            return

        client = self._queues(model, resp.diagnostics)
        if client is None:
            return

        changes: dict[str, Any] = {
            "name": model.name,
            "description": model.description,
            "concurrency_limit": model.concurrency_limit,
        }
        if model.is_paused is not None:
            changes["is_paused"] = model.is_paused
        if model.priority is not None:
            changes["priority"] = model.priority

        try:
            await client.update(prior.name, WorkQueueUpdate(**changes))
            queue = await client.get(model.name)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error updating work queue", "update work queue", e)
            return

        model.refresh(queue)

        resp.diagnostics.append(resp.state.set(model))

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        model, diags = req.state.get(WorkQueueModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._queues(model, resp.diagnostics)
        if client is None:
            return

        try:
            await client.delete(model.name)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error deleting work queue", "delete work queue", e)
            return

        resp.state.remove_resource()

    async def import_state(self, req: ImportStateRequest, resp: ImportStateResponse) -> None:
        work_pool_name, sep, name = req.id.partition(",")
        if not sep or not work_pool_name or not name:
            resp.diagnostics.add_error(
                "Unexpected Import Identifier",
                f"Expected import identifier with format: work_pool_name,name. Got: {req.id!r}",
            )
            return

        resp.state.set_attribute("work_pool_name", work_pool_name)
        resp.state.set_attribute("name", name)


__all__ = ["WorkQueueResource", "WORK_QUEUE_RESOURCE_ATTRIBUTES"]
