"""Shared steps for data source and resource adapters.

Each helper records diagnostics instead of raising. Callers check
``diags.has_error()`` after a step and return early when it is set.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from .api.client import PrefectClient
from .api.exceptions import ClientConstructionError
from .framework import AttributePath, Diagnostics

_logger = logging.getLogger(__name__)

ClientT = TypeVar("ClientT")

_DATETIME = TypeAdapter(datetime)


def format_rfc3339(value: datetime | None) -> str | None:
    """Render a timestamp as RFC 3339 with second precision, or None if absent.

    Naive timestamps are taken to be UTC. A UTC offset renders as ``Z``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        return text[: -len("+00:00")] + "Z"
    return text


def uuid_to_str(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


def parse_rfc3339(value: str | None, attribute: str, diags: Diagnostics) -> datetime | None:
    """Parse an optional RFC 3339 timestamp attribute. Null and empty strings are None."""
    if value is None or value == "":
        return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError as e:
        diags.add_attribute_error(
            AttributePath.root(attribute),
            "Error parsing timestamp",
            f"Could not parse {attribute} as an RFC 3339 timestamp, unexpected error: {e}",
        )
        return None


def parse_uuid(value: str | None, attribute: str, label: str, diags: Diagnostics) -> UUID | None:
    """Parse a required UUID attribute, reporting an attribute error on failure."""
    try:
        return UUID(value or "")
    except ValueError as e:
        diags.add_attribute_error(
            AttributePath.root(attribute),
            f"Error parsing {label} ID",
            f"Could not parse {label.lower()} ID to UUID, unexpected error: {e}",
        )
        return None


def parse_optional_uuid(
    value: str | None, attribute: str, label: str, diags: Diagnostics
) -> UUID | None:
    """Parse an optional UUID attribute. Null and empty strings are None."""
    if value is None or value == "":
        return None
    return parse_uuid(value, attribute, label, diags)


def client_from_provider_data(
    provider_data: Any, kind: str, diags: Diagnostics
) -> PrefectClient | None:
    """Check the provider data handed to ``configure`` is a client facade.

    Args:
        provider_data: Whatever the provider produced during its configure
        kind: "Data Source" or "Resource", used in the diagnostic summary
        diags: Diagnostics to append to

    Returns:
        The facade, or None if provider_data is None or has the wrong type
    """
    if provider_data is None:
        return None

    if not isinstance(provider_data, PrefectClient):
        diags.add_error(
            f"Unexpected {kind} Configure Type",
            f"Expected PrefectClient, got: {type(provider_data).__name__}. "
            "Please report this issue to the provider developers.",
        )
        return None

    return provider_data


def build_client(
    factory: Callable[..., ClientT], entity: str, diags: Diagnostics, *scope: Any
) -> ClientT | None:
    """Construct a scoped sub-client, reporting failure as a provider bug."""
    try:
        return factory(*scope)
    except ClientConstructionError as e:
        diags.add_error(
            f"Error creating {entity} client",
            f"Could not create {entity} client, unexpected error: {e}. "
            "This is a bug in the provider, please report this to the maintainers.",
        )
        return None


def add_api_error(diags: Diagnostics, summary: str, action: str, error: Exception) -> None:
    """Report a failed remote call verbatim."""
    _logger.debug("%s: %s", summary, error)
    diags.add_error(summary, f"Could not {action}, unexpected error: {error}")


def require_configured(client: PrefectClient | None, diags: Diagnostics) -> bool:
    """Report an error if the adapter has not received a client yet."""
    if client is None:
        diags.add_error(
            "Unconfigured Prefect client",
            "Expected a configured Prefect client, but the provider has not been configured. "
            "This is a bug in the provider, please report this to the maintainers.",
        )
        return False
    return True


def json_dumps(value: Any) -> str:
    """Serialize a JSON value with stable key order, as stored in string attributes."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def json_preserving(prior: str | None, remote: Any) -> str:
    """Encode a remote JSON value, keeping the prior text if it decodes to the same value."""
    if prior:
        try:
            if json.loads(prior) == remote:
                return prior
        except json.JSONDecodeError:
            pass
    return json_dumps(remote)


def json_loads(text: str | None, attribute: str, diags: Diagnostics) -> Any:
    """Parse a JSON-encoded string attribute, reporting an attribute error on failure."""
    if text is None or text == "":
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        diags.add_attribute_error(
            AttributePath.root(attribute),
            "Error parsing JSON",
            f"Could not parse {attribute} as JSON, unexpected error: {e}",
        )
        return None


__all__ = [
    "format_rfc3339",
    "uuid_to_str",
    "parse_rfc3339",
    "parse_uuid",
    "parse_optional_uuid",
    "client_from_provider_data",
    "build_client",
    "add_api_error",
    "require_configured",
    "json_dumps",
    "json_preserving",
    "json_loads",
]
