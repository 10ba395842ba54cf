"""Resource lifecycle commands: create, read, update, delete and import.

Each command runs one adapter operation against the Prefect API and prints
the resulting state. State is not persisted between commands; pass the
identifying attributes (usually ``id``) printed by create to later commands.
"""

import sys
from typing import Any

import click

from ..framework import (
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    DeleteResponse,
    Diagnostics,
    ImportStateRequest,
    ImportStateResponse,
    Plan,
    ReadResourceRequest,
    ReadResourceResponse,
    Resource,
    ResourceWithImportState,
    Schema,
    State,
    UpdateRequest,
    UpdateResponse,
)
from ..registry import AdapterRegistry, schema_of
from .main import (
    cli,
    configure_provider,
    echo_state,
    exit_on_error,
    get_registry,
    parse_attributes,
    run_async,
)

_attr_option = click.option(
    "--attr", "-a", multiple=True, help="Resource attribute in key=value format"
)
_format_option = click.option(
    "--format", "-f", "output_format", type=click.Choice(["text", "json"]), default="text"
)


def _get_resource(registry: AdapterRegistry, type_name: str) -> Resource:
    resource_adapter = registry.get_resource(type_name)
    if resource_adapter is None:
        click.echo(f"Error: Resource '{registry.normalize(type_name)}' not found.")
        available = registry.resource_types()
        if available:
            click.echo(f"Available resources: {', '.join(available)}")
        sys.exit(1)
    return resource_adapter


def _prepare(obj: dict, type_name: str) -> tuple[AdapterRegistry, Resource, Schema]:
    """Look up the resource and configure it with the provider's client."""
    registry = get_registry()
    resource_adapter = _get_resource(registry, type_name)
    configure_provider(registry, obj["provider"])
    exit_on_error(registry.configure(resource_adapter))
    return registry, resource_adapter, schema_of(resource_adapter)


def _configurable(values: dict[str, Any], block: Schema) -> dict[str, Any]:
    """Keep only the attributes a user may set in configuration."""
    return {
        name: value
        for name, value in values.items()
        if name in block.attributes
        and (block.attributes[name].required or block.attributes[name].optional)
    }


async def _refresh(
    resource_adapter: Resource, values: dict[str, Any]
) -> ReadResourceResponse:
    resp = ReadResourceResponse(state=State(values))
    await resource_adapter.read(ReadResourceRequest(state=State(values)), resp)
    return resp


@cli.group()
def resource() -> None:
    """Manage Prefect Cloud resources.

    \b
    Commands:
        tfprefect resource create <type> -a key=value ...
        tfprefect resource read <type> -a id=<uuid>
        tfprefect resource update <type> -s id=<uuid> -a key=value ...
        tfprefect resource delete <type> -a id=<uuid>
        tfprefect resource import <type> <import-id>
    """
    pass


@resource.command("create")
@click.argument("type_name")
@_attr_option
@_format_option
@click.pass_obj
def resource_create(obj: dict, type_name: str, attr: tuple[str, ...], output_format: str) -> None:
    """Create a resource.

    \b
    Examples:
        tfprefect resource create workspace -a name=Staging -a handle=staging
        tfprefect resource create work_pool -a name=k8s -a type=kubernetes
    """
    registry, resource_adapter, block = _prepare(obj, type_name)
    values = parse_attributes(attr, block)
    exit_on_error(block.validate_config(values))

    async def _create() -> CreateResponse:
        resp = CreateResponse()
        try:
            await resource_adapter.create(CreateRequest(plan=Plan(values)), resp)
        finally:
            await registry.aclose()
        return resp

    resp = run_async(_create())
    exit_on_error(resp.diagnostics)
    echo_state(resp.state.raw, block, output_format)


@resource.command("read")
@click.argument("type_name")
@_attr_option
@_format_option
@click.pass_obj
def resource_read(obj: dict, type_name: str, attr: tuple[str, ...], output_format: str) -> None:
    """Refresh a resource from its identifying attributes.

    \b
    Examples:
        tfprefect resource read workspace -a id=<uuid>
        tfprefect resource read work_queue -a work_pool_name=k8s -a name=default
    """
    registry, resource_adapter, block = _prepare(obj, type_name)
    values = parse_attributes(attr, block)

    async def _read() -> ReadResourceResponse:
        try:
            return await _refresh(resource_adapter, values)
        finally:
            await registry.aclose()

    resp = run_async(_read())
    exit_on_error(resp.diagnostics)
    if resp.state.is_null():
        click.echo("Resource no longer exists.")
        return
    echo_state(resp.state.raw, block, output_format)


@resource.command("update")
@click.argument("type_name")
@click.option(
    "--state-attr",
    "-s",
    multiple=True,
    help="Identifying attribute of the existing resource in key=value format",
)
@_attr_option
@_format_option
@click.pass_obj
def resource_update(
    obj: dict,
    type_name: str,
    state_attr: tuple[str, ...],
    attr: tuple[str, ...],
    output_format: str,
) -> None:
    """Update a resource.

    The current state is read first; attributes given with -a replace its
    values to form the planned state.

    \b
    Examples:
        tfprefect resource update workspace -s id=<uuid> -a description="Staging env"
    """
    registry, resource_adapter, block = _prepare(obj, type_name)
    identity = parse_attributes(state_attr, block)
    changes = parse_attributes(attr, block)

    async def _update() -> tuple[Diagnostics, UpdateResponse | None]:
        try:
            current = await _refresh(resource_adapter, identity)
            if current.diagnostics.has_error():
                return current.diagnostics, None
            if current.state.is_null():
                diags = Diagnostics()
                diags.add_error("Resource not found", "The resource to update no longer exists.")
                return diags, None

            prior = current.state.raw
            diags = block.validate_config({**_configurable(prior, block), **changes})
            if diags.has_error():
                return diags, None

            resp = UpdateResponse(state=State(prior))
            await resource_adapter.update(
                UpdateRequest(plan=Plan({**prior, **changes}), state=State(prior)), resp
            )
            return diags, resp
        finally:
            await registry.aclose()

    diags, resp = run_async(_update())
    exit_on_error(diags)
    exit_on_error(resp.diagnostics)
    echo_state(resp.state.raw, block, output_format)


@resource.command("delete")
@click.argument("type_name")
@_attr_option
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_obj
def resource_delete(obj: dict, type_name: str, attr: tuple[str, ...], yes: bool) -> None:
    """Delete a resource.

    This is destructive and cannot be undone.

    \b
    Examples:
        tfprefect resource delete variable -a id=<uuid>
        tfprefect resource delete work_pool -a name=k8s --yes
    """
    registry, resource_adapter, block = _prepare(obj, type_name)
    values = parse_attributes(attr, block)

    if not yes:
        click.echo(f"This will delete {registry.normalize(type_name)}: {values}")
        if not click.confirm("Are you sure?"):
            click.echo("Aborted.")
            sys.exit(0)

    async def _delete() -> DeleteResponse:
        resp = DeleteResponse(state=State(values))
        try:
            await resource_adapter.delete(DeleteRequest(state=State(values)), resp)
        finally:
            await registry.aclose()
        return resp

    resp = run_async(_delete())
    exit_on_error(resp.diagnostics)
    click.echo(f"Deleted {registry.normalize(type_name)}.")


@resource.command("import")
@click.argument("type_name")
@click.argument("import_id")
@_format_option
@click.pass_obj
def resource_import(obj: dict, type_name: str, import_id: str, output_format: str) -> None:
    """Import an existing resource by its import identifier and print its state.

    \b
    Examples:
        tfprefect resource import workspace <uuid>
        tfprefect resource import work_queue k8s,default
    """
    registry, resource_adapter, block = _prepare(obj, type_name)
    if not isinstance(resource_adapter, ResourceWithImportState):
        click.echo(f"Error: Resource '{registry.normalize(type_name)}' does not support import.")
        sys.exit(1)

    async def _import() -> tuple[Diagnostics, ReadResourceResponse | None]:
        try:
            imported = ImportStateResponse()
            await resource_adapter.import_state(ImportStateRequest(id=import_id), imported)
            if imported.diagnostics.has_error():
                return imported.diagnostics, None
            return imported.diagnostics, await _refresh(resource_adapter, imported.state.raw)
        finally:
            await registry.aclose()

    diags, resp = run_async(_import())
    exit_on_error(diags)
    exit_on_error(resp.diagnostics)
    if resp.state.is_null():
        click.echo("Resource no longer exists.")
        return
    echo_state(resp.state.raw, block, output_format)
