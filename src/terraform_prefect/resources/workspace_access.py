"""Resource granting a workspace role to a user, service account or team."""

from __future__ import annotations

from ..api.client import PrefectClient, WorkspaceAccessClient
from ..api.exceptions import ObjectNotFound
from ..api.models import AccessorType, WorkspaceAccessUpsert
from ..framework import (
    Attribute,
    AttributePath,
    ConfigureRequest,
    ConfigureResponse,
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    DeleteResponse,
    Diagnostics,
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
from ..models import WorkspaceAccessModel

WORKSPACE_ACCESS_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Workspace Access UUID"),
    "accessor_type": Attribute(
        required=True,
        description="USER | SERVICE_ACCOUNT | TEAM. "
        "Specifies the type of accessor for the Workspace Access.",
    ),
    "accessor_id": Attribute(
        required=True,
        description="ID (UUID) of accessor to the workspace. "
        "This can be an account_member.user_id, service_account.id or team.id",
    ),
    "workspace_role_id": Attribute(
        required=True, description="Workspace Role ID (UUID) to grant to accessor"
    ),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "workspace_id": Attribute(
        optional=True,
        computed=True,
        description="Workspace UUID, defaults to the workspace set in the provider",
    ),
}


def parse_accessor_type(value: str | None, diags: Diagnostics) -> AccessorType | None:
    try:
        return AccessorType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in AccessorType)
        diags.add_attribute_error(
            AttributePath.root("accessor_type"),
            "Invalid accessor type",
            f"Expected one of {allowed}, got: {value!r}",
        )
        return None


class WorkspaceAccessResource:
    """Grants workspace access.

    Create and update both upsert the grant; the API keys grants by accessor,
    so a second grant for the same accessor replaces the first.
    """

    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_workspace_access"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Resource representing Prefect Workspace Access for a "
            "user, service account or team",
            attributes=WORKSPACE_ACCESS_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Resource", resp.diagnostics)
        if client is not None:
            self._client = client

    def _access(
        self, model: WorkspaceAccessModel, diags: Diagnostics
    ) -> WorkspaceAccessClient | None:
        account_id = parse_optional_uuid(model.account_id, "account_id", "Account", diags)
        workspace_id = parse_optional_uuid(model.workspace_id, "workspace_id", "Workspace", diags)
        if diags.has_error() or not require_configured(self._client, diags):
            return None
        return build_client(
            self._client.workspace_access, "workspace access", diags, account_id, workspace_id
        )

    async def _upsert(
        self, model: WorkspaceAccessModel, diags: Diagnostics, summary: str
    ) -> bool:
        accessor_type = parse_accessor_type(model.accessor_type, diags)
        accessor_id = parse_uuid(model.accessor_id, "accessor_id", "Accessor", diags)
        role_id = parse_uuid(model.workspace_role_id, "workspace_role_id", "Workspace Role", diags)
        if diags.has_error():
            return False

        client = self._access(model, diags)
        if client is None:
            return False

        try:
            access = await client.upsert(
                WorkspaceAccessUpsert(
                    accessor_type=accessor_type,
                    accessor_id=accessor_id,
                    workspace_role_id=role_id,
                )
            )
        except Exception as e:
            add_api_error(diags, summary, "upsert Workspace Access", e)
            return False

        model.refresh(access)
        return True

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        model, diags = req.plan.get(WorkspaceAccessModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        if not await self._upsert(model, resp.diagnostics, "Error creating Workspace Access"):
            return

        resp.diagnostics.append(resp.state.set(model))

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None:
        model, diags = req.state.get(WorkspaceAccessModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        accessor_type = parse_accessor_type(model.accessor_type, resp.diagnostics)
        access_id = parse_uuid(model.id, "id", "Workspace Access", resp.diagnostics)
        if resp.diagnostics.has_error():
            return

        client = self._access(model, resp.diagnostics)
        if client is None:
            return

        try:
            access = await client.get(accessor_type, access_id)
        except ObjectNotFound:
            resp.state.remove_resource()
            return
        except Exception as e:
            add_api_error(
                resp.diagnostics,
                "Error refreshing Workspace Access state",
                "read Workspace Access",
                e,
            )
            return

        model.refresh(access)

        resp.diagnostics.append(resp.state.set(model))

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        model, diags = req.plan.get(WorkspaceAccessModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        if not await self._upsert(model, resp.diagnostics, "Error updating Workspace Access"):
            return

        resp.diagnostics.append(resp.state.set(model))

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        model, diags = req.state.get(WorkspaceAccessModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        accessor_type = parse_accessor_type(model.accessor_type, resp.diagnostics)
        access_id = parse_uuid(model.id, "id", "Workspace Access", resp.diagnostics)
        if resp.diagnostics.has_error():
            return

        client = self._access(model, resp.diagnostics)
        if client is None:
            return

        try:
            await client.delete(accessor_type, access_id)
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error deleting Workspace Access", "delete Workspace Access", e
            )
            return

        resp.state.remove_resource()


__all__ = ["WorkspaceAccessResource", "WORKSPACE_ACCESS_ATTRIBUTES", "parse_accessor_type"]
