"""Prefect Cloud API client layer.

Public API (the "studs"):
    create_prefect_client: Factory function to build the client facade
    ProviderConfig: Configuration model for the client
    PrefectClient: Facade protocol returning scoped sub-clients
    PrefectError: Base exception for client errors

Example:
    >>> from terraform_prefect.api import ProviderConfig, create_prefect_client
    >>>
    >>> config = ProviderConfig.from_env()
    >>> client = create_prefect_client(config)
    >>> workspace = await client.workspaces(None).get(workspace_id)
"""

from terraform_prefect.api.client import PrefectClient
from terraform_prefect.api.config import ProviderConfig
from terraform_prefect.api.exceptions import (
    ClientConstructionError,
    ObjectAlreadyExists,
    ObjectNotFound,
    PrefectAPIError,
    PrefectError,
)
from terraform_prefect.api.factory import create_prefect_client

__all__ = [
    # Factory
    "create_prefect_client",
    # Config
    "ProviderConfig",
    # Facade
    "PrefectClient",
    # Exceptions
    "PrefectError",
    "PrefectAPIError",
    "ObjectNotFound",
    "ObjectAlreadyExists",
    "ClientConstructionError",
]
