"""Tests for CLI commands using Click's CliRunner."""

import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from uuid import UUID

import pytest
import yaml
from click.testing import CliRunner

from conftest import make_prefect_client, sub_client
from terraform_prefect import AdapterRegistry, PrefectProvider
from terraform_prefect.api import ObjectNotFound
from terraform_prefect.api.models import (
    ServiceAccount,
    ServiceAccountAPIKey,
    WorkQueue,
    Workspace,
)
from terraform_prefect.cli import main
from terraform_prefect.cli.main import cli

runner = CliRunner()

ID = "11111111-1111-1111-1111-111111111111"

PROD = Workspace(
    id=UUID(ID),
    name="prod",
    handle="prod-handle",
    created=datetime(2023, 1, 1, tzinfo=timezone.utc),
)


@pytest.fixture
def client(monkeypatch):
    """Install a registry whose provider hands out a spy facade."""
    monkeypatch.setenv("PREFECT_API_KEY", "pnu_test")
    fake = make_prefect_client()
    main._registry = AdapterRegistry(PrefectProvider(client_factory=lambda config: fake))
    return fake


class TestCLIBasic:
    """Tests for basic CLI functionality."""

    def test_version(self):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "terraform-prefect" in result.output
        assert "0.1.0" in result.output

    def test_help(self):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("types", "schema", "read", "resource"):
            assert command in result.output

    def test_resource_help(self):
        result = runner.invoke(cli, ["resource", "--help"])
        assert result.exit_code == 0
        for command in ("create", "read", "update", "delete", "import"):
            assert command in result.output


class TestCatalog:
    def test_types(self):
        result = runner.invoke(cli, ["types"])
        assert result.exit_code == 0
        assert "Data sources:" in result.output
        assert "  - prefect_worker_metadata" in result.output
        assert "  - prefect_workspace_access" in result.output

    def test_types_resources_only(self):
        result = runner.invoke(cli, ["types", "--kind", "resource"])
        assert result.exit_code == 0
        assert "Data sources:" not in result.output
        assert "prefect_worker_metadata" not in result.output

    def test_schema_text(self):
        result = runner.invoke(cli, ["schema", "workspace"])
        assert result.exit_code == 0
        assert "prefect_workspace: Data Source representing a Prefect workspace" in result.output
        assert "  handle (string, computed)" in result.output

    def test_schema_json(self):
        result = runner.invoke(
            cli, ["schema", "work_pool", "--kind", "resource", "--format", "json"]
        )
        assert result.exit_code == 0
        attributes = json.loads(result.output)["attributes"]
        assert attributes["name"]["required"] is True
        assert attributes["paused"]["type"] == "bool"

    def test_schema_unknown(self):
        result = runner.invoke(cli, ["schema", "deployment"])
        assert result.exit_code == 1
        assert "Data source 'prefect_deployment' not found" in result.output


class TestRead:
    def test_read_workspace(self, client):
        client.workspaces.return_value = sub_client(get=PROD)

        result = runner.invoke(cli, ["read", "workspace", "-a", f"id={ID}"])

        assert result.exit_code == 0, result.output
        assert "handle      = prod-handle" in result.output
        assert "description = null" in result.output
        assert "created     = 2023-01-01T00:00:00Z" in result.output

    def test_read_json(self, client):
        client.workspaces.return_value = sub_client(list=[PROD])

        result = runner.invoke(cli, ["read", "workspace", "-a", "name=prod", "-f", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["id"] == ID

    def test_conflicting_keys(self, client):
        result = runner.invoke(cli, ["read", "workspace", "-a", "id=", "-a", "name=prod"])

        assert result.exit_code == 1
        assert "Conflicting workspace lookup keys" in result.output
        client.workspaces.assert_not_called()

    def test_unknown_attribute(self, client):
        result = runner.invoke(cli, ["read", "workspace", "-a", "region=us"])

        assert result.exit_code == 1
        assert "Unsupported argument" in result.output

    def test_unknown_type(self, client):
        result = runner.invoke(cli, ["read", "deployment"])

        assert result.exit_code == 1
        assert "Available data sources:" in result.output

    def test_bad_pair(self, client):
        result = runner.invoke(cli, ["read", "workspace", "-a", "name"])
        assert result.exit_code != 0
        assert "Expected key=value" in result.output

    def test_invalid_account_flag(self, client):
        result = runner.invoke(
            cli, ["--account-id", "nope", "read", "workspace", "-a", f"id={ID}"]
        )

        assert result.exit_code == 1
        assert "Error parsing Account ID" in result.output


class TestConfigFile:
    def _write(self, data) -> str:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump(data, f)
            return f.name

    def test_invalid_endpoint_from_file(self, client):
        path = self._write({"endpoint": "ftp://example.com"})
        try:
            result = runner.invoke(
                cli, ["--config-file", path, "read", "workspace", "-a", f"id={ID}"]
            )
        finally:
            Path(path).unlink()

        assert result.exit_code == 1
        assert "Invalid Prefect provider configuration" in result.output

    def test_flag_beats_file(self, client):
        client.workspaces.return_value = sub_client(get=PROD)
        path = self._write({"endpoint": "ftp://example.com"})
        try:
            result = runner.invoke(
                cli,
                [
                    "--config-file",
                    path,
                    "--endpoint",
                    "http://localhost:4200/api",
                    "read",
                    "workspace",
                    "-a",
                    f"id={ID}",
                ],
            )
        finally:
            Path(path).unlink()

        assert result.exit_code == 0, result.output

    def test_missing_file(self, client):
        result = runner.invoke(cli, ["--config-file", "/nonexistent.yaml", "types"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestResource:
    def test_create_masks_sensitive(self, client):
        client.service_accounts.return_value = sub_client(
            create=ServiceAccount(
                id=UUID(ID), name="ci", api_key=ServiceAccountAPIKey(key="pnu_secret")
            )
        )

        result = runner.invoke(
            cli, ["resource", "create", "service_account", "-a", "name=ci", "-f", "json"]
        )

        assert result.exit_code == 0, result.output
        state = json.loads(result.output)
        assert state["api_key"] == "(sensitive)"
        assert "pnu_secret" not in result.output

    def test_create_missing_required(self, client):
        result = runner.invoke(cli, ["resource", "create", "workspace", "-a", "name=prod"])

        assert result.exit_code == 1
        assert "Missing required argument" in result.output
        client.workspaces.assert_not_called()

    def test_read_gone(self, client):
        client.workspaces.return_value = sub_client(get=ObjectNotFound("HTTP 404", 404))

        result = runner.invoke(cli, ["resource", "read", "workspace", "-a", f"id={ID}"])

        assert result.exit_code == 0
        assert "Resource no longer exists." in result.output

    def test_update(self, client):
        workspaces = sub_client(get=PROD, update=None)
        client.workspaces.return_value = workspaces

        result = runner.invoke(
            cli,
            ["resource", "update", "workspace", "-s", f"id={ID}", "-a", "description=Prod"],
        )

        assert result.exit_code == 0, result.output
        workspace_id, payload = workspaces.update.await_args.args
        assert workspace_id == UUID(ID)
        assert payload.description == "Prod"
        assert payload.handle == "prod-handle"

    def test_delete_with_yes(self, client):
        variables = sub_client(delete=None)
        client.variables.return_value = variables

        result = runner.invoke(cli, ["resource", "delete", "variable", "-a", f"id={ID}", "--yes"])

        assert result.exit_code == 0, result.output
        assert "Deleted prefect_variable." in result.output
        variables.delete.assert_awaited_once_with(UUID(ID))

    def test_delete_declined(self, client):
        result = runner.invoke(
            cli, ["resource", "delete", "variable", "-a", f"id={ID}"], input="n\n"
        )

        assert result.exit_code == 0
        assert "Aborted." in result.output
        client.variables.assert_not_called()

    def test_import_work_queue(self, client):
        queues = sub_client(get=WorkQueue(id=UUID(ID), name="high", priority=1))
        client.work_queues.return_value = queues

        result = runner.invoke(cli, ["resource", "import", "work_queue", "k8s,high"])

        assert result.exit_code == 0, result.output
        client.work_queues.assert_called_once_with(None, None, "k8s")
        queues.get.assert_awaited_once_with("high")
        assert "work_pool_name    = k8s" in result.output

    def test_import_bad_identifier(self, client):
        result = runner.invoke(cli, ["resource", "import", "work_queue", "high"])

        assert result.exit_code == 1
        assert "Unexpected Import Identifier" in result.output

    def test_import_unsupported(self, client):
        result = runner.invoke(cli, ["resource", "import", "workspace_access", ID])

        assert result.exit_code == 1
        assert "does not support import" in result.output
