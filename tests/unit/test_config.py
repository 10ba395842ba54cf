"""Tests for the provider configuration model."""

import os
from unittest.mock import patch
from uuid import UUID

import pytest
from pydantic import ValidationError

from terraform_prefect.api.config import DEFAULT_ENDPOINT, ProviderConfig

ACCOUNT_ID = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"
WORKSPACE_ID = "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb"


class TestProviderConfig:
    """Tests for ProviderConfig model."""

    def test_defaults(self):
        config = ProviderConfig()
        assert config.endpoint == DEFAULT_ENDPOINT
        assert config.api_key is None
        assert config.account_id is None
        assert config.timeout_seconds is None

    def test_api_key_is_secret(self):
        config = ProviderConfig(api_key="pnu_secret")
        assert config.api_key.get_secret_value() == "pnu_secret"
        assert "pnu_secret" not in repr(config)

    def test_endpoint_trailing_slash_stripped(self):
        config = ProviderConfig(endpoint="http://localhost:4200/api/")
        assert config.endpoint == "http://localhost:4200/api"

    def test_endpoint_requires_http(self):
        with pytest.raises(ValidationError, match="must start with"):
            ProviderConfig(endpoint="ftp://example.com")

    def test_ids_parsed(self):
        config = ProviderConfig(account_id=ACCOUNT_ID, workspace_id=WORKSPACE_ID)
        assert config.account_id == UUID(ACCOUNT_ID)
        assert config.workspace_id == UUID(WORKSPACE_ID)

    def test_empty_id_is_unset(self):
        assert ProviderConfig(account_id="").account_id is None

    def test_malformed_id(self):
        with pytest.raises(ValidationError):
            ProviderConfig(account_id="not-a-uuid")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ProviderConfig(timeout_seconds=0)


class TestProviderConfigFromEnv:
    """Tests for ProviderConfig.from_env()."""

    def test_from_env(self):
        env = {
            "PREFECT_API_URL": "https://example.com/api",
            "PREFECT_API_KEY": "pnu_env",
            "PREFECT_CLOUD_ACCOUNT_ID": ACCOUNT_ID,
            "PREFECT_CLOUD_WORKSPACE_ID": WORKSPACE_ID,
        }
        with patch.dict(os.environ, env, clear=True):
            config = ProviderConfig.from_env()
        assert config.endpoint == "https://example.com/api"
        assert config.api_key.get_secret_value() == "pnu_env"
        assert config.account_id == UUID(ACCOUNT_ID)
        assert config.workspace_id == UUID(WORKSPACE_ID)

    def test_from_env_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ProviderConfig.from_env()
        assert config.endpoint == DEFAULT_ENDPOINT
        assert config.api_key is None

    def test_overrides_take_precedence(self):
        with patch.dict(os.environ, {"PREFECT_API_URL": "https://env.example.com"}, clear=True):
            config = ProviderConfig.from_env(endpoint="https://flag.example.com")
        assert config.endpoint == "https://flag.example.com"

    def test_none_override_falls_back_to_env(self):
        with patch.dict(os.environ, {"PREFECT_API_KEY": "pnu_env"}, clear=True):
            config = ProviderConfig.from_env(api_key=None)
        assert config.api_key.get_secret_value() == "pnu_env"

    def test_malformed_env_id(self):
        with patch.dict(os.environ, {"PREFECT_CLOUD_ACCOUNT_ID": "nope"}, clear=True):
            with pytest.raises(ValidationError):
                ProviderConfig.from_env()
