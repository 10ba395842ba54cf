"""Shared test fixtures."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from terraform_prefect.api.client import PrefectClient

ACCOUNT_ID = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"
WORKSPACE_ID = "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb"


def run(coro):
    """Run a coroutine to completion."""
    return asyncio.run(coro)


def make_prefect_client() -> MagicMock:
    """A spy facade; sub-client verbs are AsyncMocks set per test."""
    return MagicMock(spec=PrefectClient)


@pytest.fixture
def prefect_client():
    return make_prefect_client()


def sub_client(**verbs) -> MagicMock:
    """A sub-client whose verbs are AsyncMocks with the given return values or side effects."""
    client = MagicMock()
    for name, result in verbs.items():
        if isinstance(result, BaseException) or (
            isinstance(result, type) and issubclass(result, BaseException)
        ):
            setattr(client, name, AsyncMock(side_effect=result))
        else:
            setattr(client, name, AsyncMock(return_value=result))
    return client


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep real Prefect settings and the CLI's cached registry out of tests."""
    for var in (
        "PREFECT_API_URL",
        "PREFECT_API_KEY",
        "PREFECT_CLOUD_ACCOUNT_ID",
        "PREFECT_CLOUD_WORKSPACE_ID",
    ):
        monkeypatch.delenv(var, raising=False)

    from terraform_prefect.cli import main

    main._registry = None
    yield
    main._registry = None
