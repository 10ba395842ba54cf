"""Data source for a Prefect Cloud workspace, looked up by ID or by name."""

from __future__ import annotations

from ..api.client import PrefectClient
from ..framework import (
    Attribute,
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
    parse_uuid,
    require_configured,
)
from ..models import WorkspaceModel

WORKSPACE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(
        description="Workspace UUID",
        optional=True,
        computed=True,
    ),
    "created": Attribute(
        computed=True,
        description="Date and time of the workspace creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the workspace was last updated in RFC 3339 format",
    ),
    "account_id": Attribute(
        description="Account UUID, defaults to the account set in the provider",
        optional=True,
    ),
    "name": Attribute(
        optional=True,
        computed=True,
        description="Name of the workspace",
    ),
    "handle": Attribute(
        computed=True,
        description="Unique handle for the workspace",
    ),
    "description": Attribute(
        computed=True,
        description="Description for the workspace",
    ),
}


class WorkspaceDataSource:
    """Reads one workspace into state."""

    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_workspace"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect workspace",
            attributes=WORKSPACE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        """Refresh the state with the latest workspace data.

        Exactly one of ``id`` or ``name`` selects the workspace. A name lookup
        lists the account's workspaces and picks the one with that name.
        """
        model, diags = req.config.get(WorkspaceModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        if model.id is not None and model.name is not None:
            resp.diagnostics.add_error(
                "Conflicting workspace lookup keys",
                "Workspaces can be identified by their unique name or ID, but not both.",
            )
            return
        if model.id is None and model.name is None:
            resp.diagnostics.add_error(
                "Missing workspace lookup key",
                "Either id or name must be set to look up a workspace.",
            )
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(self._client.workspaces, "workspace", resp.diagnostics, account_id)
        if client is None:
            return

        if model.name is not None:
            try:
                workspaces = await client.list()
            except Exception as e:
                add_api_error(
                    resp.diagnostics, "Error refreshing workspace state", "list workspaces", e
                )
                return

            matches = [w for w in workspaces if w.name == model.name]
            if not matches:
                resp.diagnostics.add_error(
                    "Error refreshing workspace state",
                    f"Could not find workspace with name {model.name!r}",
                )
                return
            workspace = matches[0]
        else:
            workspace_id = parse_uuid(model.id, "id", "Workspace", resp.diagnostics)
            if workspace_id is None:
                return

            try:
                workspace = await client.get(workspace_id)
            except Exception as e:
                add_api_error(
                    resp.diagnostics, "Error refreshing workspace state", "read workspace", e
                )
                return

        model.refresh(workspace)

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["WorkspaceDataSource", "WORKSPACE_ATTRIBUTES"]
