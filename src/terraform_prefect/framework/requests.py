"""Request and response objects passed between the runtime and adapters.

Each operation receives a request and fills in a response. Responses carry a
Diagnostics collection; adapters never raise across the operation boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .diagnostics import Diagnostics
from .schema import Schema
from .tfsdk import Config, Plan, State


@dataclass
class MetadataRequest:
    provider_type_name: str


@dataclass
class MetadataResponse:
    type_name: str = ""


@dataclass
class SchemaRequest:
    pass


@dataclass
class SchemaResponse:
    schema: Schema | None = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ConfigureRequest:
    """Carries the opaque data the provider produced during its own configure."""

    provider_data: Any = None


@dataclass
class ConfigureResponse:
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ReadDataSourceRequest:
    config: Config


@dataclass
class ReadDataSourceResponse:
    state: State = field(default_factory=State)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class CreateRequest:
    plan: Plan


@dataclass
class CreateResponse:
    state: State = field(default_factory=State)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ReadResourceRequest:
    state: State


@dataclass
class ReadResourceResponse:
    """Starts out holding the prior state; adapters overwrite or remove it."""

    state: State = field(default_factory=State)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class UpdateRequest:
    plan: Plan
    state: State


@dataclass
class UpdateResponse:
    state: State = field(default_factory=State)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class DeleteRequest:
    state: State


@dataclass
class DeleteResponse:
    state: State = field(default_factory=State)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ImportStateRequest:
    id: str


@dataclass
class ImportStateResponse:
    state: State = field(default_factory=State)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ProviderConfigureRequest:
    config: Config


@dataclass
class ProviderConfigureResponse:
    data_source_data: Any = None
    resource_data: Any = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


__all__ = [
    "MetadataRequest",
    "MetadataResponse",
    "SchemaRequest",
    "SchemaResponse",
    "ConfigureRequest",
    "ConfigureResponse",
    "ReadDataSourceRequest",
    "ReadDataSourceResponse",
    "CreateRequest",
    "CreateResponse",
    "ReadResourceRequest",
    "ReadResourceResponse",
    "UpdateRequest",
    "UpdateResponse",
    "DeleteRequest",
    "DeleteResponse",
    "ImportStateRequest",
    "ImportStateResponse",
    "ProviderConfigureRequest",
    "ProviderConfigureResponse",
]
