"""Commands for inspecting the provider: registered types and their schemas."""

import json
import sys

import click

from ..registry import schema_of
from .main import cli, get_registry


@cli.command("types")
@click.option(
    "--kind",
    "-k",
    type=click.Choice(["all", "data", "resource"]),
    default="all",
    help="Which adapter types to list",
)
def list_types(kind: str) -> None:
    """List data source and resource type names.

    \b
    Examples:
        tfprefect types
        tfprefect types --kind resource
    """
    registry = get_registry()

    if kind in ("all", "data"):
        click.echo("Data sources:")
        for name in registry.data_source_types():
            click.echo(f"  - {name}")
    if kind in ("all", "resource"):
        click.echo("Resources:")
        for name in registry.resource_types():
            click.echo(f"  - {name}")


@cli.command()
@click.argument("type_name")
@click.option(
    "--kind",
    "-k",
    type=click.Choice(["data", "resource"]),
    default="data",
    help="Show the data source or the resource schema",
)
@click.option(
    "--format", "-f", "output_format", type=click.Choice(["text", "json"]), default="text"
)
def schema(type_name: str, kind: str, output_format: str) -> None:
    """Show the attributes of a data source or resource.

    \b
    Examples:
        tfprefect schema workspace
        tfprefect schema prefect_work_pool --kind resource --format json
    """
    registry = get_registry()
    if kind == "data":
        adapter = registry.get_data_source(type_name)
    else:
        adapter = registry.get_resource(type_name)

    if adapter is None:
        label = "Data source" if kind == "data" else "Resource"
        click.echo(f"Error: {label} '{registry.normalize(type_name)}' not found.")
        sys.exit(1)

    block = schema_of(adapter)

    if output_format == "json":
        click.echo(json.dumps(block.model_dump(mode="json"), indent=2))
        return

    click.echo(f"{registry.normalize(type_name)}: {block.description}")
    for name, attribute in block.attributes.items():
        flags = [
            flag
            for flag in ("required", "optional", "computed", "sensitive")
            if getattr(attribute, flag)
        ]
        click.echo(f"  {name} ({attribute.type.value}, {', '.join(flags)})")
        if attribute.description:
            click.echo(f"      {attribute.description}")
