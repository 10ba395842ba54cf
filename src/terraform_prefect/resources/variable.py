"""Resource managing a workspace variable.

The value is any JSON document, held in state as its JSON text.
"""

from __future__ import annotations

from ..api.client import PrefectClient, VariablesClient
from ..api.exceptions import ObjectNotFound
from ..api.models import VariableCreate, VariableUpdate
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
    json_loads,
    parse_optional_uuid,
    parse_uuid,
    require_configured,
)
from ..models import VariableModel

VARIABLE_RESOURCE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Variable UUID"),
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
    "name": Attribute(required=True, description="Name of the variable"),
    "value": Attribute(required=True, description="Value of the variable, as a JSON string"),
    "tags": Attribute(
        type=AttributeType.LIST_STRING,
        optional=True,
        computed=True,
        description="Tags associated with the variable",
    ),
}


class VariableResource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_variable"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Resource representing a Prefect variable",
            attributes=VARIABLE_RESOURCE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Resource", resp.diagnostics)
        if client is not None:
            self._client = client

    def _variables(self, model: VariableModel, diags: Diagnostics) -> VariablesClient | None:
        account_id = parse_optional_uuid(model.account_id, "account_id", "Account", diags)
        workspace_id = parse_optional_uuid(model.workspace_id, "workspace_id", "Workspace", diags)
        if diags.has_error() or not require_configured(self._client, diags):
            return None
        return build_client(self._client.variables, "variable", diags, account_id, workspace_id)

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        model, diags = req.plan.get(VariableModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        value = json_loads(model.value, "value", resp.diagnostics)
        if resp.diagnostics.has_error():
            return

        client = self._variables(model, resp.diagnostics)
        if client is None:
            return

        try:
            variable = await client.create(
                VariableCreate(name=model.name, value=value, tags=model.tags or [])
            )
        except Exception as e:
            add_api_error(resp.diagnostics, "Error creating variable", "create variable", e)
            return

        model.refresh(variable)

        resp.diagnostics.append(resp.state.set(model))

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None:
        model, diags = req.state.get(VariableModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._variables(model, resp.diagnostics)
        if client is None:
            return

        variable_id = parse_uuid(model.id, "id", "Variable", resp.diagnostics)
        if variable_id is None:
            return

        try:
            variable = await client.get(variable_id)
        except ObjectNotFound:
            resp.state.remove_resource()
            return
        except Exception as e:
            add_api_error(resp.diagnostics, "Error refreshing variable state", "read variable", e)
            return

        model.refresh(variable)

        resp.diagnostics.append(resp.state.set(model))

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        model, diags = req.plan.get(VariableModel)
        resp.diagnostics.append(diags)
        prior, diags = req.state.get(VariableModel)
        resp.diagnostics.append(diags)
        if model is None or prior is None or resp.diagnostics.has_error():
            return

        value = json_loads(model.value, "value", resp.diagnostics)
        if resp.diagnostics.has_error():
            return

        client = self._variables(model, resp.diagnostics)
        if client is None:
            return

        variable_id = parse_uuid(prior.id, "id", "Variable", resp.diagnostics)
        if variable_id is None:
            return

        try:
            await client.update(
                variable_id, VariableUpdate(name=model.name, value=value, tags=model.tags or [])
            )
            variable = await client.get(variable_id)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error updating variable", "update variable", e)
            return

        model.refresh(variable)

        resp.diagnostics.append(resp.state.set(model))

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        model, diags = req.state.get(VariableModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        client = self._variables(model, resp.diagnostics)
        if client is None:
            return

        variable_id = parse_uuid(model.id, "id", "Variable", resp.diagnostics)
        if variable_id is None:
            return

        try:
            await client.delete(variable_id)
        except Exception as e:
            add_api_error(resp.diagnostics, "Error deleting variable", "delete variable", e)
            return

        resp.state.remove_resource()

    async def import_state(self, req: ImportStateRequest, resp: ImportStateResponse) -> None:
        resp.state.set_attribute("id", req.id)


__all__ = ["VariableResource", "VARIABLE_RESOURCE_ATTRIBUTES"]
