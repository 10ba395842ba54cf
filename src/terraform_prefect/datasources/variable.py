"""Data source for a workspace variable, looked up by ID or by name."""

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
    parse_uuid,
    require_configured,
)
from ..models import VariableModel

VARIABLE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(optional=True, computed=True, description="Variable UUID"),
    "created": Attribute(
        computed=True,
        description="Date and time of the variable creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the variable was last updated in RFC 3339 format",
    ),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "workspace_id": Attribute(
        optional=True,
        description="Workspace UUID, defaults to the workspace set in the provider",
    ),
    "name": Attribute(optional=True, computed=True, description="Name of the variable"),
    "value": Attribute(computed=True, description="Value of the variable, as a JSON string"),
    "tags": Attribute(
        type=AttributeType.LIST_STRING,
        computed=True,
        description="Tags associated with the variable",
    ),
}


class VariableDataSource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_variable"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect variable",
            attributes=VARIABLE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        """Refresh the state with the latest variable data.

        Exactly one of ``id`` or ``name`` must be set.
        """
        model, diags = req.config.get(VariableModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        if model.id is not None and model.name is not None:
            resp.diagnostics.add_error(
                "Conflicting variable lookup keys",
                "Variables can be identified by their unique name or ID, but not both.",
            )
            return
        if model.id is None and model.name is None:
            resp.diagnostics.add_error(
                "Missing variable lookup key",
                "Either id or name must be set to look up a variable.",
            )
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
            self._client.variables, "variable", resp.diagnostics, account_id, workspace_id
        )
        if client is None:
            return

        if model.name is not None:
            try:
                variable = await client.get_by_name(model.name)
            except Exception as e:
                add_api_error(
                    resp.diagnostics, "Error refreshing variable state", "read variable", e
                )
                return
        else:
            variable_id = parse_uuid(model.id, "id", "Variable", resp.diagnostics)
            if variable_id is None:
                return

            try:
                variable = await client.get(variable_id)
            except Exception as e:
                add_api_error(
                    resp.diagnostics, "Error refreshing variable state", "read variable", e
                )
                return

        model.refresh(variable)

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["VariableDataSource", "VARIABLE_ATTRIBUTES"]
