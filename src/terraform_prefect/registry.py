"""Adapter Registry - Discovers data source and resource adapters.

The registry is responsible for:
1. Registering the built-in adapters the provider ships
2. Discovering third-party adapters (via entry points)
3. Configuring the provider and handing its client to adapter instances
"""

from __future__ import annotations

import logging
from typing import Any

from .framework import (
    Config,
    ConfigureRequest,
    ConfigureResponse,
    DataSource,
    Diagnostics,
    MetadataRequest,
    MetadataResponse,
    ProviderConfigureRequest,
    ProviderConfigureResponse,
    Resource,
    Schema,
    SchemaRequest,
    SchemaResponse,
)
from .provider import PROVIDER_TYPE_NAME, PrefectProvider

_logger = logging.getLogger(__name__)


def type_name_of(adapter: Any) -> str:
    """Ask an adapter for its full type name, e.g. ``prefect_workspace``."""
    resp = MetadataResponse()
    adapter.metadata(MetadataRequest(provider_type_name=PROVIDER_TYPE_NAME), resp)
    return resp.type_name


def schema_of(adapter: Any) -> Schema:
    resp = SchemaResponse()
    adapter.schema(SchemaRequest(), resp)
    return resp.schema


class AdapterRegistry:
    """Registry mapping type names to data source and resource classes.

    Adapters can be:
    1. Built into the provider
    2. Installed Python packages (discovered via entry points)
    3. Registered programmatically (tests)
    """

    # Entry point group for adapter discovery
    ENTRY_POINT_GROUP = "terraform_prefect.adapters"

    def __init__(self, provider: PrefectProvider | None = None) -> None:
        """Initialize the registry.

        Args:
            provider: Provider whose client is injected into adapters
        """
        self._provider = provider or PrefectProvider()
        self._data_sources: dict[str, type] = {}
        self._resources: dict[str, type] = {}
        self._provider_data: Any = None

    @property
    def provider(self) -> PrefectProvider:
        return self._provider

    def discover(self) -> None:
        """Register the built-in adapters, then any installed via entry points.

        Third-party packages register adapter classes in pyproject.toml:
            [project.entry-points."terraform_prefect.adapters"]
            prefect_deployment = "my_package.deployment:DeploymentResource"
        """
        for adapter_class in self._provider.data_sources() + self._provider.resources():
            self.register(adapter_class)

        try:
            from importlib.metadata import entry_points

            eps = entry_points(group=self.ENTRY_POINT_GROUP)

            for ep in eps:
                try:
                    self.register(ep.load())
                except Exception as e:
                    _logger.warning("Failed to load adapter %s: %s", ep.name, e, exc_info=True)

        except Exception as e:
            _logger.warning("Failed to discover adapters: %s", e, exc_info=True)

    def register(self, adapter_class: type) -> str:
        """Register a data source or resource class under its type name.

        Returns:
            The adapter's type name

        Raises:
            TypeError: If the class implements neither protocol
        """
        if not isinstance(adapter_class, type):
            raise TypeError(f"Expected an adapter class, got: {adapter_class!r}")

        instance = adapter_class()
        type_name = type_name_of(instance)
        if isinstance(instance, Resource):
            self._resources[type_name] = adapter_class
        elif isinstance(instance, DataSource):
            self._data_sources[type_name] = adapter_class
        else:
            raise TypeError(
                f"{adapter_class.__name__} implements neither the DataSource nor the Resource "
                "protocol"
            )
        _logger.debug("Registered adapter %s (%s)", type_name, adapter_class.__name__)
        return type_name

    def _ensure_discovered(self) -> None:
        if not self._data_sources and not self._resources:
            self.discover()

    @staticmethod
    def normalize(type_name: str) -> str:
        """Accept ``workspace`` as shorthand for ``prefect_workspace``."""
        prefix = f"{PROVIDER_TYPE_NAME}_"
        return type_name if type_name.startswith(prefix) else prefix + type_name

    def data_source_types(self) -> list[str]:
        self._ensure_discovered()
        return sorted(self._data_sources)

    def resource_types(self) -> list[str]:
        self._ensure_discovered()
        return sorted(self._resources)

    def get_data_source(self, type_name: str) -> DataSource | None:
        """Get a fresh data source instance, or None if the type is unknown."""
        self._ensure_discovered()
        adapter_class = self._data_sources.get(self.normalize(type_name))
        return adapter_class() if adapter_class else None

    def get_resource(self, type_name: str) -> Resource | None:
        """Get a fresh resource instance, or None if the type is unknown."""
        self._ensure_discovered()
        adapter_class = self._resources.get(self.normalize(type_name))
        return adapter_class() if adapter_class else None

    def configure_provider(self, values: dict[str, Any]) -> Diagnostics:
        """Validate the provider block and run the provider's configure."""
        diags = schema_of(self._provider).validate_config(values)
        if diags.has_error():
            return diags

        resp = ProviderConfigureResponse()
        self._provider.configure(ProviderConfigureRequest(config=Config(values)), resp)
        diags.append(resp.diagnostics)
        if not resp.diagnostics.has_error():
            self._provider_data = resp.resource_data
        return diags

    def configure(self, adapter: Any) -> Diagnostics:
        """Hand the configured provider's client to an adapter."""
        resp = ConfigureResponse()
        adapter.configure(ConfigureRequest(provider_data=self._provider_data), resp)
        return resp.diagnostics

    async def aclose(self) -> None:
        """Close the provider's client if it holds open connections."""
        close = getattr(self._provider_data, "aclose", None)
        if close is not None:
            await close()
        self._provider_data = None


__all__ = ["AdapterRegistry", "type_name_of", "schema_of"]
