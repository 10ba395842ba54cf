"""Resource managing a Prefect Cloud service account and its API key."""

from __future__ import annotations

from uuid import UUID

from ..api.client import PrefectClient
from ..api.exceptions import ObjectNotFound
from ..api.models import ServiceAccountCreate, ServiceAccountUpdate
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
    parse_rfc3339,
    parse_uuid,
    require_configured,
)
from ..models import ServiceAccountModel

SERVICE_ACCOUNT_RESOURCE_ATTRIBUTES: dict[str, Attribute] = {
    "id": Attribute(computed=True, description="Service Account UUID"),
    "actor_id": Attribute(computed=True, description="Actor UUID, used for workspace access"),
    "created": Attribute(
        computed=True,
        description="Date and time of the service account creation in RFC 3339 format",
    ),
    "updated": Attribute(
        computed=True,
        description="Date and time that the service account was last updated in RFC 3339 format",
    ),
    "name": Attribute(required=True, description="Name of the service account"),
    "account_id": Attribute(
        optional=True,
        description="Account UUID, defaults to the account set in the provider",
    ),
    "account_role_name": Attribute(
        optional=True,
        computed=True,
        description="Account Role name of the service account, defaults to the account's "
        "default role",
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
        optional=True,
        computed=True,
        description="Date and time that the API Key expires in RFC 3339 format",
    ),
    "api_key": Attribute(
        computed=True,
        sensitive=True,
        description="API Key associated with the service account",
    ),
}


class ServiceAccountResource:
    """Manages a service account.

    The API key is only returned when the service account is created, so it is
    carried forward from prior state on every later read and update.
    """

    def __init__(self) -> None:
        self._client: PrefectClient | None = None

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = f"{req.provider_type_name}_service_account"

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Resource representing a Prefect Cloud service account",
            attributes=SERVICE_ACCOUNT_RESOURCE_ATTRIBUTES,
        )

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        client = client_from_provider_data(req.provider_data, "Resource", resp.diagnostics)
        if client is not None:
            self._client = client

    async def _account_role_id(
        self, name: str | None, account_id: UUID | None, diags: Diagnostics
    ) -> UUID | None:
        """Resolve an account role name to its ID. A null name leaves the role unset."""
        if name is None:
            return None

        client = build_client(self._client.account_roles, "account role", diags, account_id)
        if client is None:
            return None

        try:
            roles = await client.list(names=[name])
        except Exception as e:
            add_api_error(diags, "Error fetching Account Role", "list account roles", e)
            return None

        if len(roles) != 1:
            diags.add_attribute_error(
                AttributePath.root("account_role_name"),
                "Could not find Account Role",
                f"Could not find Account Role with name {name!r}, found {len(roles)} matches",
            )
            return None
        return roles[0].id

    async def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        model, diags = req.plan.get(ServiceAccountModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        expiration = parse_rfc3339(
            model.api_key_expiration, "api_key_expiration", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        role_id = await self._account_role_id(
            model.account_role_name, account_id, resp.diagnostics
        )
        if resp.diagnostics.has_error():
            return

        client = build_client(
            self._client.service_accounts, "service account", resp.diagnostics, account_id
        )
        if client is None:
            return

        try:
            service_account = await client.create(
                ServiceAccountCreate(
                    name=model.name, account_role_id=role_id, api_key_expiration=expiration
                )
            )
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error creating Service Account", "create Service Account", e
            )
            return

        model.refresh(service_account)

        resp.diagnostics.append(resp.state.set(model))

    async def read(self, req: ReadResourceRequest, resp: ReadResourceResponse) -> None:
        model, diags = req.state.get(ServiceAccountModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
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

        service_account_id = parse_uuid(model.id, "id", "Service Account", resp.diagnostics)
        if service_account_id is None:
            return

        try:
            service_account = await client.get(service_account_id)
        except ObjectNotFound:
            resp.state.remove_resource()
            return
        except Exception as e:
            add_api_error(
                resp.diagnostics,
                "Error refreshing Service Account state",
                "read Service Account",
                e,
            )
            return

        model.refresh(service_account)

        resp.diagnostics.append(resp.state.set(model))

    async def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        model, diags = req.plan.get(ServiceAccountModel)
        resp.diagnostics.append(diags)
        prior, diags = req.state.get(ServiceAccountModel)
        resp.diagnostics.append(diags)
        if model is None or prior is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        if resp.diagnostics.has_error() or not require_configured(self._client, resp.diagnostics):
            return

        service_account_id = parse_uuid(prior.id, "id", "Service Account", resp.diagnostics)
        if service_account_id is None:
            return

        role_id = await self._account_role_id(
            model.account_role_name, account_id, resp.diagnostics
        )
        if resp.diagnostics.has_error():
            return

        client = build_client(
            self._client.service_accounts, "service account", resp.diagnostics, account_id
        )
        if client is None:
            return

        changes: dict = {"name": model.name}
        if role_id is not None:
            changes["account_role_id"] = role_id
        payload = ServiceAccountUpdate(**changes)

        try:
            await client.update(service_account_id, payload)
            service_account = await client.get(service_account_id)
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error updating Service Account", "update Service Account", e
            )
            return

        model.api_key = prior.api_key
        model.refresh(service_account)

        resp.diagnostics.append(resp.state.set(model))

    async def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        model, diags = req.state.get(ServiceAccountModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
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

        service_account_id = parse_uuid(model.id, "id", "Service Account", resp.diagnostics)
        if service_account_id is None:
            return

        try:
            await client.delete(service_account_id)
        except Exception as e:
            add_api_error(
                resp.diagnostics, "Error deleting Service Account", "delete Service Account", e
            )
            return

        resp.state.remove_resource()

    async def import_state(self, req: ImportStateRequest, resp: ImportStateResponse) -> None:
        resp.state.set_attribute("id", req.id)


__all__ = ["ServiceAccountResource", "SERVICE_ACCOUNT_RESOURCE_ATTRIBUTES"]
