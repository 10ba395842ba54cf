"""Configuration model for the Prefect API client.

Public API (the "studs"):
    ProviderConfig: Endpoint, credentials and default scope for the client
"""

import os
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_ENDPOINT = "https://api.prefect.cloud/api"

# Data-driven mapping: config field -> env var
_ENV_MAP: dict[str, str] = {
    "endpoint": "PREFECT_API_URL",
    "api_key": "PREFECT_API_KEY",
    "account_id": "PREFECT_CLOUD_ACCOUNT_ID",
    "workspace_id": "PREFECT_CLOUD_WORKSPACE_ID",
}


class ProviderConfig(BaseModel):
    """Configuration for talking to Prefect Cloud.

    Attributes:
        endpoint: Base API URL, without the account/workspace suffix
        api_key: API key sent as a bearer token
        account_id: Default account for account-scoped clients
        workspace_id: Default workspace for workspace-scoped clients
        timeout_seconds: Per-request timeout; None disables it
    """

    endpoint: str = Field(DEFAULT_ENDPOINT, description="Prefect API base URL")
    api_key: SecretStr | None = Field(None, description="Prefect API key")
    account_id: UUID | None = Field(None, description="Default account ID")
    workspace_id: UUID | None = Field(None, description="Default workspace ID")
    timeout_seconds: float | None = Field(None, gt=0, description="Request timeout in seconds")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Validate the endpoint is an http(s) URL and strip any trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"endpoint must start with 'https://' or 'http://': {v!r}")
        return v.rstrip("/")

    @field_validator("account_id", "workspace_id", mode="before")
    @classmethod
    def empty_id_is_unset(cls, v: Any) -> Any:
        """Treat an empty string as an unset identifier."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_env(cls, **overrides: Any) -> "ProviderConfig":
        """Create ProviderConfig from environment variables.

        Explicit keyword overrides that are not None take precedence over the
        environment.

        Environment variables:
            PREFECT_API_URL: API base URL (default: Prefect Cloud)
            PREFECT_API_KEY: API key
            PREFECT_CLOUD_ACCOUNT_ID: Default account ID
            PREFECT_CLOUD_WORKSPACE_ID: Default workspace ID

        Returns:
            ProviderConfig instance

        Raises:
            pydantic.ValidationError: If a value is malformed
        """
        kwargs: dict[str, Any] = {}
        for field, env_var in _ENV_MAP.items():
            value = os.environ.get(env_var)
            if value:
                kwargs[field] = value

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)


__all__ = ["ProviderConfig", "DEFAULT_ENDPOINT"]
