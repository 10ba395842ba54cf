"""Tests for PrefectProvider."""

from uuid import UUID

import pytest

from conftest import ACCOUNT_ID, WORKSPACE_ID, make_prefect_client
from terraform_prefect import PrefectProvider
from terraform_prefect.api import ProviderConfig
from terraform_prefect.datasources import DATA_SOURCES
from terraform_prefect.framework import (
    Config,
    MetadataRequest,
    MetadataResponse,
    ProviderConfigureRequest,
    ProviderConfigureResponse,
    SchemaRequest,
    SchemaResponse,
)
from terraform_prefect.resources import RESOURCES


class FakeFactory:
    """Records the configuration it was called with."""

    def __init__(self):
        self.configs: list[ProviderConfig] = []
        self.client = make_prefect_client()

    def __call__(self, config):
        self.configs.append(config)
        return self.client


@pytest.fixture
def factory():
    return FakeFactory()


def configure(provider, **values) -> ProviderConfigureResponse:
    resp = ProviderConfigureResponse()
    provider.configure(ProviderConfigureRequest(config=Config(values)), resp)
    return resp


class TestDescription:
    def test_metadata(self):
        resp = MetadataResponse()
        PrefectProvider().metadata(MetadataRequest(provider_type_name=""), resp)
        assert resp.type_name == "prefect"

    def test_schema(self):
        resp = SchemaResponse()
        PrefectProvider().schema(SchemaRequest(), resp)
        attributes = resp.schema.attributes
        assert set(attributes) == {"endpoint", "api_key", "account_id", "workspace_id"}
        assert all(attr.optional for attr in attributes.values())
        assert resp.schema.sensitive_attributes() == {"api_key"}

    def test_adapters(self):
        provider = PrefectProvider()
        assert provider.data_sources() == DATA_SOURCES
        assert provider.resources() == RESOURCES
        assert provider.resources() is not RESOURCES


class TestConfigure:
    def test_hands_client_to_adapters(self, factory):
        resp = configure(
            PrefectProvider(client_factory=factory),
            api_key="pnu_test",
            account_id=ACCOUNT_ID,
            workspace_id=WORKSPACE_ID,
        )

        assert not resp.diagnostics
        assert resp.data_source_data is factory.client
        assert resp.resource_data is factory.client
        [config] = factory.configs
        assert config.api_key.get_secret_value() == "pnu_test"
        assert config.account_id == UUID(ACCOUNT_ID)
        assert config.workspace_id == UUID(WORKSPACE_ID)

    def test_environment_fallback(self, factory, monkeypatch):
        monkeypatch.setenv("PREFECT_API_KEY", "pnu_env")
        monkeypatch.setenv("PREFECT_CLOUD_ACCOUNT_ID", ACCOUNT_ID)

        resp = configure(PrefectProvider(client_factory=factory))

        assert not resp.diagnostics
        [config] = factory.configs
        assert config.api_key.get_secret_value() == "pnu_env"
        assert config.account_id == UUID(ACCOUNT_ID)

    def test_attributes_beat_environment(self, factory, monkeypatch):
        monkeypatch.setenv("PREFECT_API_KEY", "pnu_env")

        configure(PrefectProvider(client_factory=factory), api_key="pnu_attr")

        assert factory.configs[0].api_key.get_secret_value() == "pnu_attr"

    def test_empty_strings_are_unset(self, factory):
        resp = configure(
            PrefectProvider(client_factory=factory), api_key="pnu", endpoint="", account_id=""
        )

        assert not resp.diagnostics
        assert factory.configs[0].endpoint == "https://api.prefect.cloud/api"
        assert factory.configs[0].account_id is None

    def test_malformed_account_id(self, factory):
        resp = configure(PrefectProvider(client_factory=factory), account_id="nope")

        [diag] = resp.diagnostics.errors()
        assert str(diag.attribute) == "account_id"
        assert factory.configs == []
        assert resp.resource_data is None

    def test_invalid_endpoint(self, factory):
        resp = configure(PrefectProvider(client_factory=factory), endpoint="ftp://example.com")

        [diag] = resp.diagnostics.errors()
        assert diag.summary == "Invalid Prefect provider configuration"
        assert str(diag.attribute) == "endpoint"
        assert factory.configs == []

    def test_missing_key_warns_for_cloud(self, factory):
        resp = configure(PrefectProvider(client_factory=factory))

        assert not resp.diagnostics.has_error()
        [diag] = resp.diagnostics.warnings()
        assert diag.summary == "Missing Prefect API Key"
        assert resp.resource_data is factory.client

    def test_missing_key_is_fine_for_self_hosted(self, factory):
        resp = configure(
            PrefectProvider(client_factory=factory), endpoint="http://localhost:4200/api"
        )

        assert not resp.diagnostics
