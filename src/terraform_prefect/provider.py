"""The Prefect provider: provider-level schema and configuration.

Public API (the "studs"):
    PrefectProvider: Configures the client facade and lists the adapters
    PROVIDER_TYPE_NAME: Prefix of every adapter type name

Configuration values come from the provider block, falling back to the
environment (PREFECT_API_URL, PREFECT_API_KEY, PREFECT_CLOUD_ACCOUNT_ID,
PREFECT_CLOUD_WORKSPACE_ID). The resulting client facade is handed to every
data source and resource as opaque provider data.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from urllib.parse import urlparse

from pydantic import ValidationError

from .api import PrefectClient, ProviderConfig, create_prefect_client
from .datasources import DATA_SOURCES
from .framework import (
    Attribute,
    AttributePath,
    MetadataRequest,
    MetadataResponse,
    ProviderConfigureRequest,
    ProviderConfigureResponse,
    Schema,
    SchemaRequest,
    SchemaResponse,
)
from .helpers import parse_optional_uuid
from .models import AttributeModel
from .resources import RESOURCES

_logger = logging.getLogger(__name__)

PROVIDER_TYPE_NAME = "prefect"

PROVIDER_ATTRIBUTES: dict[str, Attribute] = {
    "endpoint": Attribute(
        optional=True,
        description="The Prefect API URL. Can also be set via the PREFECT_API_URL "
        "environment variable. Defaults to the Prefect Cloud API",
    ),
    "api_key": Attribute(
        optional=True,
        sensitive=True,
        description="Prefect Cloud API key. Can also be set via the PREFECT_API_KEY "
        "environment variable",
    ),
    "account_id": Attribute(
        optional=True,
        description="Default Prefect Cloud account ID. Can also be set via the "
        "PREFECT_CLOUD_ACCOUNT_ID environment variable",
    ),
    "workspace_id": Attribute(
        optional=True,
        description="Default Prefect Cloud workspace ID. Can also be set via the "
        "PREFECT_CLOUD_WORKSPACE_ID environment variable",
    ),
}


class ProviderModel(AttributeModel):
    endpoint: str | None = None
    api_key: str | None = None
    account_id: str | None = None
    workspace_id: str | None = None


def _is_prefect_cloud(endpoint: str) -> bool:
    return (urlparse(endpoint).hostname or "").endswith("prefect.cloud")


class PrefectProvider:
    """Provider for Prefect Cloud.

    Attributes:
        client_factory: Builds the client facade from the resolved configuration
    """

    def __init__(
        self,
        client_factory: Callable[[ProviderConfig], PrefectClient] = create_prefect_client,
    ) -> None:
        self.client_factory = client_factory

    def metadata(self, req: MetadataRequest, resp: MetadataResponse) -> None:
        resp.type_name = PROVIDER_TYPE_NAME

    def schema(self, req: SchemaRequest, resp: SchemaResponse) -> None:
        resp.schema = Schema(
            description="Manage Prefect Cloud accounts, workspaces and work pools",
            attributes=PROVIDER_ATTRIBUTES,
        )

    def configure(self, req: ProviderConfigureRequest, resp: ProviderConfigureResponse) -> None:
        model, diags = req.config.get(ProviderModel)
        resp.diagnostics.append(diags)
        if model is None or resp.diagnostics.has_error():
            return

        account_id = parse_optional_uuid(
            model.account_id, "account_id", "Account", resp.diagnostics
        )
        workspace_id = parse_optional_uuid(
            model.workspace_id, "workspace_id", "Workspace", resp.diagnostics
        )
        if resp.diagnostics.has_error():
            return

        try:
            config = ProviderConfig.from_env(
                endpoint=model.endpoint or None,
                api_key=model.api_key or None,
                account_id=account_id,
                workspace_id=workspace_id,
            )
        except ValidationError as e:
            for item in e.errors():
                loc = item.get("loc", ())
                resp.diagnostics.add_attribute_error(
                    AttributePath.root(str(loc[0]) if loc else "endpoint"),
                    "Invalid Prefect provider configuration",
                    item.get("msg", ""),
                )
            return

        if config.api_key is None and _is_prefect_cloud(config.endpoint):
            resp.diagnostics.add_attribute_warning(
                AttributePath.root("api_key"),
                "Missing Prefect API Key",
                "The Prefect API key is not set. Requests to Prefect Cloud will fail "
                "unless it is set in the provider configuration or PREFECT_API_KEY.",
            )

        client = self.client_factory(config)
        _logger.debug(
            "Configured Prefect provider (endpoint=%s, account_id=%s, workspace_id=%s)",
            config.endpoint,
            config.account_id,
            config.workspace_id,
        )
        resp.data_source_data = client
        resp.resource_data = client

    def data_sources(self) -> list[type]:
        return list(DATA_SOURCES)

    def resources(self) -> list[type]:
        return list(RESOURCES)


__all__ = ["PrefectProvider", "PROVIDER_TYPE_NAME", "PROVIDER_ATTRIBUTES"]
