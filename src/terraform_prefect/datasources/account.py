"""Data source for a Prefect Cloud account."""

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
from ..models import AccountModel

ACCOUNT_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(
        optional=True,
        computed=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "created": Attribute(
        computed=True,
        description="Date and time of the account creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the account was last updated in RFC 3339 format",
    ),
    "name": Attribute(computed=True, description="Name of the account"),
    "handle": Attribute(computed=True, description="Unique handle of the account"),
    "location": Attribute(
        computed=True, description="An optional physical location for the account"
    ),
    "link": Attribute(
        computed=True, description="An optional external URL associated with the account"
    ),
    "allow_public_workspaces": Attribute(
        type=AttributeType.BOOL,
        computed=True,
        description="Whether or not this account allows public workspaces",
    ),
    "billing_email": Attribute(
        computed=True, description="Billing email to apply to the account's Stripe customer"
    ),
    "domain_names": Attribute(
        type=AttributeType.LIST_STRING,
        computed=True,
        description="Domain names associated with the account",
    ),
}


class AccountDataSource:
    """Reads the provider's account, or another account by ID."""

    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_account"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect Cloud account",
            attributes=ACCOUNT_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        model, diags = req.config.get(AccountModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(model.id, "id", "Account", resp.diagnostics)
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(self._client.accounts, "account", resp.diagnostics, account_id)
        if client is None:
            return

        try:
            account = await client.get()
        except Exception as e:
            add_api_error(resp.diagnostics, "Error refreshing account state", "read account", e)
            return

        model.refresh(account)

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["AccountDataSource", "ACCOUNT_ATTRIBUTES"]
