"""Main CLI entry point for terraform-prefect.

Runs provider adapters outside Terraform, against the same Prefect API:
    tfprefect types [--kind data|resource]
    tfprefect schema <type> [--kind data|resource]
    tfprefect read <type> -a key=value ...
    tfprefect resource create|read|update|delete <type> -a key=value ...
    tfprefect resource import <type> <id>

Provider settings come from --config-file (YAML), the --endpoint/--account-id/
--workspace-id flags, and the PREFECT_* environment variables, in increasing
order of precedence for the flags over the file.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from .. import __version__
from ..framework import AttributeType, Diagnostics, Schema
from ..registry import AdapterRegistry

# Global registry instance
_registry: AdapterRegistry | None = None

SENSITIVE_MASK = "(sensitive)"


def get_registry() -> AdapterRegistry:
    """Get or create the adapter registry."""
    global _registry
    if _registry is None:
        _registry = AdapterRegistry()
        _registry.discover()
    return _registry


def run_async(coro: Any) -> Any:
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


def load_config_file(config_file: str) -> dict[str, Any]:
    """Load and validate a YAML provider config file.

    Args:
        config_file: Path to the YAML config file

    Returns:
        Parsed config dictionary

    Raises:
        click.ClickException: If file not found or invalid YAML
    """
    path = Path(config_file)
    if not path.exists():
        raise click.ClickException(f"Config file not found: {config_file}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in config file: {e}") from None

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.ClickException("Config file must contain a YAML mapping (dict)")

    return data


def _convert(name: str, raw: str, attribute_type: AttributeType) -> Any:
    if attribute_type == AttributeType.BOOL:
        if raw.lower() not in ("true", "false"):
            raise click.BadParameter(f"{name} must be true or false, got: {raw!r}")
        return raw.lower() == "true"
    if attribute_type == AttributeType.INT64:
        try:
            return int(raw)
        except ValueError:
            raise click.BadParameter(f"{name} must be an integer, got: {raw!r}") from None
    if attribute_type == AttributeType.FLOAT64:
        try:
            return float(raw)
        except ValueError:
            raise click.BadParameter(f"{name} must be a number, got: {raw!r}") from None
    if attribute_type == AttributeType.LIST_STRING:
        return [item.strip() for item in raw.split(",") if item.strip()]
    if attribute_type == AttributeType.MAP_STRING:
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"{name} must be a JSON object: {e}") from None
        if not isinstance(value, dict):
            raise click.BadParameter(f"{name} must be a JSON object, got: {raw!r}")
        return value
    return raw


def parse_attributes(pairs: tuple[str, ...], schema: Schema) -> dict[str, Any]:
    """Parse ``key=value`` pairs into attribute values typed by the schema.

    Unknown keys are kept as strings; schema validation reports them later.
    Lists are comma separated, maps are JSON objects.
    """
    values: dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"Expected key=value, got: {pair!r}")
        name, raw = pair.split("=", 1)
        attribute = schema.attributes.get(name)
        attribute_type = attribute.type if attribute else AttributeType.STRING
        values[name] = _convert(name, raw, attribute_type)
    return values


def echo_diagnostics(diags: Diagnostics) -> None:
    """Print warnings and errors to stderr."""
    for diag in diags:
        click.echo(str(diag), err=True)


def echo_state(values: dict[str, Any] | None, schema: Schema, output_format: str) -> None:
    """Print state values, masking sensitive attributes."""
    if values is None:
        click.echo("(no state)")
        return

    sensitive = schema.sensitive_attributes()
    masked = {
        k: (SENSITIVE_MASK if k in sensitive and v is not None else v) for k, v in values.items()
    }

    if output_format == "json":
        click.echo(json.dumps(masked, indent=2, sort_keys=True))
        return

    width = max((len(k) for k in masked), default=0)
    for name in sorted(masked):
        value = masked[name]
        if value is None:
            shown = "null"
        elif isinstance(value, str):
            shown = value
        else:
            shown = json.dumps(value)
        click.echo(f"{name:<{width}} = {shown}")


def configure_provider(registry: AdapterRegistry, provider_values: dict[str, Any]) -> None:
    """Configure the provider, exiting with status 1 on error."""
    diags = registry.configure_provider(provider_values)
    echo_diagnostics(diags)
    if diags.has_error():
        sys.exit(1)


def exit_on_error(diags: Diagnostics) -> None:
    echo_diagnostics(diags)
    if diags.has_error():
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="terraform-prefect")
@click.option(
    "--config-file",
    type=click.Path(exists=False),
    help="YAML provider config file (flags take precedence)",
)
@click.option("--endpoint", help="Prefect API URL")
@click.option("--account-id", help="Default Prefect Cloud account ID")
@click.option("--workspace-id", help="Default Prefect Cloud workspace ID")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    endpoint: str | None,
    account_id: str | None,
    workspace_id: str | None,
    verbose: bool,
) -> None:
    """terraform-prefect - Prefect Cloud data sources and resources.

    \b
    Inspect the provider:
        tfprefect types
        tfprefect schema workspace

    \b
    Read and manage Prefect Cloud objects:
        tfprefect read workspace -a name=prod
        tfprefect resource create variable -a name=env -a value='"prod"'
        tfprefect resource delete variable -a id=<uuid>
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    provider_values: dict[str, Any] = {}
    if config_file:
        provider_values.update(load_config_file(config_file))

    flags = {"endpoint": endpoint, "account_id": account_id, "workspace_id": workspace_id}
    provider_values.update({k: v for k, v in flags.items() if v is not None})

    ctx.ensure_object(dict)
    ctx.obj["provider"] = provider_values


def main() -> None:
    """Main entry point."""
    cli()


# Register subcommands
from . import catalog, read, resource  # noqa: E402, F401

if __name__ == "__main__":
    main()
