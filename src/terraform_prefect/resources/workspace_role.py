"""Resource managing a custom Prefect Cloud workspace role."""

from __future__ import annotations

from ..api.client import PrefectClient, WorkspaceRolesClient
from ..api.exceptions import ObjectNotFound
from ..api.models import WorkspaceRoleUpsert
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
    parse_uuid,
    require_configured,
)
from ..models import WorkspaceRoleModel

WORKSPACE_ROLE_RESOURCE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Workspace Role UUID"),
    "created": Attribute(
        computed=True,
        description="Date and time of the workspace role creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the workspace role was last updated in RFC 3339 format",
    ),
    "name": Attribute(required=True, description="Name of the Workspace Role"),
    "description": Attribute(optional=True, description="Description of the Workspace Role"),
    "scopes": Attribute(
        type=AttributeType.LIST_STRING,
        optional=True,
        computed=True,
        description="List of scopes linked to the Workspace Role",
    ),
    "inherited_role_id": Attribute(
        optional=True,
        description="Workspace Role UUID, whose permissions are inherited by this Workspace Role",
    ),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
}


def _upsert_payload(model: WorkspaceRoleModel, diags: Diagnostics) -> WorkspaceRoleUpsert | None:
    inherited_role_id = parse_optional_uuid(
        model.inherited_role_id, "inherited_role_id", "Inherited Workspace Role", diags
    )
    if diags.has_error():
        return None
    return WorkspaceRoleUpsert(
        name=model.name,
        description=model.description,
        scopes=model.scopes or [],
        inherited_role_id=inherited_role_id,
    )


class WorkspaceRoleResource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_workspace_role"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Resource representing a Prefect Cloud workspace role",
            attributes=WORKSPACE_ROLE_RESOURCE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Resource", resp.diagnostics)
        if client is not None:
            self._client = client

    def _roles(self, model: WorkspaceRoleModel, diags: Diagnostics) -> WorkspaceRolesClient | None:
        account_id = parse_optional_uuid(model.account_id, "account_id", "Account", diags)
        if diags.has_error() or not require_configured(self._client, diags):
            return None
        return build_client(self._client.workspace_roles, "workspace role", diags, account_id)

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        model, diags = req.plan.get(WorkspaceRoleModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        payload = _upsert_payload(model, resp.diagnostics)
        if payload is None:
            return

        client = self._roles(model, resp.diagnostics)
        if client is None:
            return

        try:
            role = await client.create(payload)
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error creating Workspace Role", "create Workspace Role", e
            )
            return

        model.refresh(role)

        resp.diagnostics.append(resp.state.set(model))

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None:
        model, diags = req.state.get(WorkspaceRoleModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._roles(model, resp.diagnostics)
        if client is None:
            return

        role_id = parse_uuid(model.id, "id", "Workspace Role", resp.diagnostics)
        if role_id is None:
            return

        try:
            role = await client.get(role_id)
        except ObjectNotFound:
            resp.state.remove_resource()
            return
        except Exception as e:
            add_api_error(
                resp.diagnostics,
                "Error refreshing Workspace Role state",
                "read Workspace Role",
                e,
            )
            return

        model.refresh(role)

        resp.diagnostics.append(resp.state.set(model))

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        model, diags = req.plan.get(WorkspaceRoleModel)
        resp.diagnostics.append(diags)
        prior, diags = req.state.get(WorkspaceRoleModel)
        resp.diagnostics.append(diags)
        if model is None or prior is None or resp.diagnostics.has_error():
            return

        payload = _upsert_payload(model, resp.diagnostics)
        if payload is None:
            return

        client = self._roles(model, resp.diagnostics)
        if client is None:
            return

        role_id = parse_uuid(prior.id, "id", "Workspace Role", resp.diagnostics)
        if role_id is None:
            return

        try:
            await client.update(role_id, payload)
            role = await client.get(role_id)
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error updating Workspace Role", "update Workspace Role", e
            )
            return

        model.refresh(role)

        resp.diagnostics.append(resp.state.set(model))

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        model, diags = req.state.get(WorkspaceRoleModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._roles(model, resp.diagnostics)
        if client is None:
            return

        role_id = parse_uuid(model.id, "id", "Workspace Role", resp.diagnostics)
        if role_id is None:
            return

        try:
            await client.delete(role_id)
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error deleting Workspace Role", "delete Workspace Role", e
            )
            return

        resp.state.remove_resource()

    async def import_state(self, req: ImportStateRequest, resp: ImportStateResponse) -> None:
        resp.state.set_attribute("id", req.id)


__all__ = ["WorkspaceRoleResource", "WORKSPACE_ROLE_RESOURCE_ATTRIBUTES"]
