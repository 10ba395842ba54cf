"""HTTP implementation of the Prefect client facade, built on httpx."""

from .client import HTTPPrefectClient

__all__ = ["HTTPPrefectClient"]
