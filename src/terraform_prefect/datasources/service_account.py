"""Data source for a Prefect Cloud service account, looked up by ID or by name."""

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
from ..models import ServiceAccountModel

SERVICE_ACCOUNT_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(optional=True, computed=True, description="Service Account UUID"),
    "actor_id": Attribute(computed=True, description="Actor UUID, used for workspace access"),
    "created": Attribute(
        computed=True,
        description="Date and time of the service account creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the service account was last updated in RFC 3339 format",
    ),
    "name": Attribute(optional=True, computed=True, description="Name of the service account"),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "account_role_name": Attribute(
        computed=True, description="Account Role name of the service account"
    ),
    "api_key_id": Attribute(
        computed=True, description="API Key ID associated with the service account"
    ),
    "api_key_name": Attribute(
        computed=True, description="API Key Name associated with the service account"
    ),
    "api_key_created": Attribute(
        computed=True,
        description="Date and time that the API Key was created in RFC 3339 format",
    ),
    "api_key_expiration": Attribute(
        computed=True,
        description="Date and time that the API Key expires in RFC 3339 format",
    ),
    "api_key": Attribute(
        computed=True,
        sensitive=True,
        description="API Key associated with the service account, only returned on creation",
    ),
}


class ServiceAccountDataSource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_service_account"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect Cloud service account",
            attributes=SERVICE_ACCOUNT_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        """Refresh the state with the latest service account data.

        Exactly one of ``id`` or ``name`` must be set.
        """
        model, diags = req.config.get(ServiceAccountModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        if model.id is not None and model.name is not None:
            resp.diagnostics.add_error(
                "Conflicting service account lookup keys",
                "Service accounts can be identified by their unique name or ID, but not both.",
            )
            return
        if model.id is None and model.name is None:
            resp.diagnostics.add_error(
                "Missing service account lookup key",
                "Either id or name must be set to look up a service account.",
            )
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(
            self._client.service_accounts, "service account", resp.diagnostics, account_id
        )
        if client is None:
            return

        if model.name is not None:
            try:
                service_accounts = await client.list(names=[model.name])
            except Exception as e:
                add_api_error(
                    resp.diagnostics,
                    "Error refreshing service account state",
                    "list service accounts",
                    e,
                )
                return

            if len(service_accounts) != 1:
                resp.diagnostics.add_error(
                    "Could not find Service Account",
                    f"Could not find Service Account with name {model.name!r}, "
                    f"found {len(service_accounts)} matches",
                )
                return
            service_account = service_accounts[0]
        else:
            service_account_id = parse_uuid(model.id, "id", "Service Account", resp.diagnostics)
            if service_account_id is None:
                return

            try:
                service_account = await client.get(service_account_id)
            except Exception as e:
                add_api_error(
                    resp.diagnostics,
                    "Error refreshing service account state",
                    "read service account",
                    e,
                )
                return

        model.refresh(service_account)

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["ServiceAccountDataSource", "SERVICE_ACCOUNT_ATTRIBUTES"]
