"""Data source for a Prefect Cloud team, looked up by name."""

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
from ..models import TeamModel

TEAM_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Team UUID"),
    "created": Attribute(
        computed=True,
        description="Date and time of the team creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the team was last updated in RFC 3339 format",
    ),
    "name": Attribute(required=True, description="Name of Team"),
    "description": Attribute(computed=True, description="Description of Team"),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
}


class TeamDataSource:
    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_team"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Data Source representing a Prefect Cloud team",
            attributes=TEAM_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Data Source", resp.diagnostics)
        if client is not None:
            self._client = client

    async def read(self, req: ReadDataSourceRequest, resp: ReadDataSourceResponse) -> None:
        model, diags = req.config.get(TeamModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        client = build_client(self._client.teams, "teams", resp.diagnostics, account_id)
        if client is None:
            return

        try:
            teams = await client.list(names=[model.name])
        except Exception as e:
            add_api_error(resp.diagnostics, "Error refreshing team state", "list teams", e)
            return

        if len(teams) != 1:
            resp.diagnostics.add_error(
                "Could not find Team",
                f"Could not find Team with name {model.name!r}, found {len(teams)} matches",
            )
            return

        model.refresh(teams[0])

        resp.diagnostics.append(resp.state.set(model))


__all__ = ["TeamDataSource", "TEAM_ATTRIBUTES"]
