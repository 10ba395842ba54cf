"""Data source for a member of a Prefect Cloud account, looked up by email."""

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
    require_configured,
)
from ..models import AccountMemberModel

ACCOUNT_MEMBER_ATTRIBUTES: dict[str, Attribute] = {
    "email": Attribute(required=True, description="Member email"),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "id": Attribute(computed=True, description="Account Member UUID"),
    "actor_id": Attribute(computed=True, description="Actor UUID"),
    "user_id": Attribute(computed=True, description="User UUID"),
    "first_name": Attribute(computed=True, description="Member's first name"),
    "last_name": Attribute(computed=True, description="Member's last name"),
    "handle": Attribute(computed=True, description="Member handle, or a human-readable identifier"),
    "account_role_id": Attribute(computed=True, description="Account Role UUID"),
    "account_role_name": Attribute(computed=True, description="Name of Account Role assigned"),
}


class AccountMemberDataSource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_account_member"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect Cloud account member",
            attributes=ACCOUNT_MEMBER_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        """Look up a member by email. The email must match exactly one membership."""
        model, diags = req.config.get(AccountMemberModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(
            self._client.account_memberships, "account memberships", resp.diagnostics, account_id
        )
        if client is None:
            return

        try:
            members = await client.list(emails=[model.email])
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error refreshing account member state", "list account members", e
            )
            return

        if len(members) != 1:
            resp.diagnostics.add_error(
                "Could not find Account Member",
                f"Could not find Account Member with email {model.email!r}, "
                f"found {len(members)} matches",
            )
            return

        model.refresh(members[0])

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["AccountMemberDataSource", "ACCOUNT_MEMBER_ATTRIBUTES"]
