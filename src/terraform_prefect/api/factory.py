"""Factory function for creating Prefect clients.

Public API (the "studs"):
    create_prefect_client: Build the client facade from configuration
"""

from terraform_prefect.api.client import PrefectClient
from terraform_prefect.api.config import ProviderConfig


def create_prefect_client(config: ProviderConfig) -> PrefectClient:
    """Create a Prefect client facade based on configuration.

    Args:
        config: ProviderConfig with endpoint, credentials and default scope

    Returns:
        PrefectClient: Facade returning scoped sub-clients

    Example:
        >>> config = ProviderConfig(api_key="pnu_...", account_id="...")
        >>> client = create_prefect_client(config)
        >>> workspaces = client.workspaces(None)
    """
    from terraform_prefect.api.http import HTTPPrefectClient

    return HTTPPrefectClient(config)


__all__ = ["create_prefect_client"]
