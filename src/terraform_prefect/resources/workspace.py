"""Resource managing a Prefect Cloud workspace."""

from __future__ import annotations

from ..api.client import PrefectClient, WorkspacesClient
from ..api.exceptions import ObjectNotFound
from ..api.models import WorkspaceCreate, WorkspaceUpdate
from ..framework import (
    Attribute,
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
    parse_uuid,
    require_configured,
)
from ..models import WorkspaceModel

WORKSPACE_RESOURCE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Workspace UUID"),
    "created": Attribute(
        computed=True,
        description="Date and time of the workspace creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the workspace was last updated in RFC 3339 format",
    ),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "name": Attribute(required=True, description="Name of the workspace"),
    "handle": Attribute(required=True, description="Unique handle for the workspace"),
    "description": Attribute(optional=True, description="Description for the workspace"),
}


class WorkspaceResource:
    """Creates, updates and deletes a workspace."""

    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_workspace"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Resource representing a Prefect Cloud workspace",
            attributes=WORKSPACE_RESOURCE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Resource", resp.diagnostics)
        if client is not None:
            self._client = client

    def _workspaces(self, model: WorkspaceModel, diags: Diagnostics) -> WorkspacesClient | None:
        account_id = parse_optional_uuid(model.account_id, "account_id", "Account", diags)
        if diags.has_error() or not require_configured(self._client, diags):
            return None
        return build_client(self._client.workspaces, "workspace", diags, account_id)

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        model, diags = req.plan.get(WorkspaceModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._workspaces(model, resp.diagnostics)
        if client is None:
            return

        try:
            workspace = await client.create(
                WorkspaceCreate(
                    name=model.name, handle=model.handle, description=model.description
                )
            )
        except Exception as e:
            add_api_error(resp.diagnostics, "Error creating workspace", "create workspace", e)
            return

        model.refresh(workspace)

        resp.diagnostics.append(resp.state.set(model))

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None:
        model, diags = req.state.get(WorkspaceModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._workspaces(model, resp.diagnostics)
        if client is None:
            return

        workspace_id = parse_uuid(model.id, "id", "Workspace", resp.diagnostics)
        if workspace_id is None:
            return

        try:
            workspace = await client.get(workspace_id)
        except ObjectNotFound:
            resp.state.remove_resource()
            return
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error refreshing workspace state", "read workspace", e
            )
            return

        model.refresh(workspace)

        resp.diagnostics.append(resp.state.set(model))

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        model, diags = req.plan.get(WorkspaceModel)
        resp.diagnostics.append(diags)
        prior, diags = req.state.get(WorkspaceModel)
        resp.diagnostics.append(diags)
        if model is None or prior is None or resp.diagnostics.has_error():
            return

        client = self._workspaces(model, resp.diagnostics)
        if client is None:
            return

        workspace_id = parse_uuid(prior.id, "id", "Workspace", resp.diagnostics)
        if workspace_id is None:
            return

        try:
            await client.update(
                workspace_id,
                WorkspaceUpdate(
                    name=model.name, handle=model.handle, description=model.description
                ),
            )
            workspace = await client.get(workspace_id)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error updating workspace", "update workspace", e)
            return

        model.refresh(workspace)

        resp.diagnostics.append(resp.state.set(model))

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        model, diags = req.state.get(WorkspaceModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._workspaces(model, resp.diagnostics)
        if client is None:
            return

        workspace_id = parse_uuid(model.id, "id", "Workspace", resp.diagnostics)
        if workspace_id is None:
            return

        try:
            await client.delete(workspace_id)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error deleting workspace", "delete workspace", e)
            return

        resp.state.remove_resource()

    async def import_state(self, req: ImportStateRequest, resp: ImportStateResponse) -> None:
        resp.state.set_attribute("id", req.id)


__all__ = ["WorkspaceResource", "WORKSPACE_RESOURCE_ATTRIBUTES"]
