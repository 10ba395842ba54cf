"""In-process stand-in for the host runtime's typed surface.

Provides what adapters exchange with the runtime: diagnostics, schemas,
configuration/plan/state containers and request/response objects.
"""

from .diagnostics import AttributePath, Diagnostic, Diagnostics, Severity
from .protocols import DataSource, Resource, ResourceWithImportState
from .requests import (
    ConfigureRequest,
    ConfigureResponse,
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    DeleteResponse,
    ImportStateRequest,
    ImportStateResponse,
    MetadataRequest,
    MetadataResponse,
    ProviderConfigureRequest,
    ProviderConfigureResponse,
    ReadDataSourceRequest,
    ReadDataSourceResponse,
    ReadResourceRequest,
    ReadResourceResponse,
    SchemaRequest,
    SchemaResponse,
    UpdateRequest,
    UpdateResponse,
)
from .schema import Attribute, AttributeType, Schema
from .tfsdk import Config, Plan, State

__all__ = [
    "AttributePath",
    "Diagnostic",
    "Diagnostics",
    "Severity",
    "DataSource",
    "Resource",
    "ResourceWithImportState",
    "Attribute",
    "AttributeType",
    "Schema",
    "Config",
    "Plan",
    "State",
    "ConfigureRequest",
    "ConfigureResponse",
    "CreateRequest",
    "CreateResponse",
    "DeleteRequest",
    "DeleteResponse",
    "ImportStateRequest",
    "ImportStateResponse",
    "MetadataRequest",
    "MetadataResponse",
    "ProviderConfigureRequest",
    "ProviderConfigureResponse",
    "ReadDataSourceRequest",
    "ReadDataSourceResponse",
    "ReadResourceRequest",
    "ReadResourceResponse",
    "SchemaRequest",
    "SchemaResponse",
    "UpdateRequest",
    "UpdateResponse",
]
