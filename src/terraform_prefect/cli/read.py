"""Read command: run a data source and print the resulting state."""

import sys

import click

from ..framework import Config, ReadDataSourceRequest, ReadDataSourceResponse
from ..registry import schema_of
from .main import (
    cli,
    configure_provider,
    echo_state,
    exit_on_error,
    get_registry,
    parse_attributes,
    run_async,
)


@cli.command()
@click.argument("type_name")
@click.option("--attr", "-a", multiple=True, help="Data source argument in key=value format")
@click.option(
    "--format", "-f", "output_format", type=click.Choice(["text", "json"]), default="text"
)
@click.pass_obj
def read(obj: dict, type_name: str, attr: tuple[str, ...], output_format: str) -> None:
    """Read a data source.

    \b
    Examples:
        tfprefect read workspace -a name=prod
        tfprefect read prefect_work_pool -a name=kubernetes --format json
    """
    registry = get_registry()
    data_source = registry.get_data_source(type_name)

    if data_source is None:
        click.echo(f"Error: Data source '{registry.normalize(type_name)}' not found.")
        available = registry.data_source_types()
        if available:
            click.echo(f"Available data sources: {', '.join(available)}")
        sys.exit(1)

    block = schema_of(data_source)
    values = parse_attributes(attr, block)
    exit_on_error(block.validate_config(values))

    configure_provider(registry, obj["provider"])
    exit_on_error(registry.configure(data_source))

    async def _read() -> ReadDataSourceResponse:
        resp = ReadDataSourceResponse()
        try:
            await data_source.read(ReadDataSourceRequest(config=Config(values)), resp)
        finally:
            await registry.aclose()
        return resp

    resp = run_async(_read())
    exit_on_error(resp.diagnostics)
    echo_state(resp.state.raw, block, output_format)
