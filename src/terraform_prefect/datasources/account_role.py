"""Data source for a Prefect Cloud account role, looked up by name."""

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
from ..models import AccountRoleModel

ACCOUNT_ROLE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Account Role UUID"),
    "created": Attribute(
        computed=True,
        description="Date and time of the account role creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the account role was last updated in RFC 3339 format",
    ),
    "name": Attribute(required=True, description="Name of the Account Role"),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "permissions": Attribute(
        type=AttributeType.LIST_STRING,
        computed=True,
        description="List of permissions linked to the Account Role",
    ),
    "is_system_role": Attribute(
        type=AttributeType.BOOL,
        computed=True,
        description="Whether the role is one of the built-in roles",
    ),
}


class AccountRoleDataSource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_account_role"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect Cloud account role",
            attributes=ACCOUNT_ROLE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        model, diags = req.config.get(AccountRoleModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(
            self._client.account_roles, "account role", resp.diagnostics, account_id
        )
        if client is None:
            return

        try:
            roles = await client.list(names=[model.name])
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error refreshing account role state", "list account roles", e
            )
            return

        if len(roles) != 1:
            resp.diagnostics.add_error(
                "Could not find Account Role",
                f"Could not find Account Role with name {model.name!r}, "
                f"found {len(roles)} matches",
            )
            return

        model.refresh(roles[0])

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["AccountRoleDataSource", "ACCOUNT_ROLE_ATTRIBUTES"]
