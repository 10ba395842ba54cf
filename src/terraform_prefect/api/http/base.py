"""Shared request handling for the HTTP sub-clients."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..exceptions import ObjectAlreadyExists, ObjectNotFound, PrefectAPIError

_logger = logging.getLogger(__name__)


def _raise_for_status(response: httpx.Response) -> None:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        body = e.response.text
        message = (
            f"{e.request.method} {e.request.url} returned status {status_code}: {body}"
        )
        if status_code == httpx.codes.NOT_FOUND:
            raise ObjectNotFound(message, status_code=status_code, body=body) from e
        if status_code == httpx.codes.CONFLICT:
            raise ObjectAlreadyExists(message, status_code=status_code, body=body) from e
        raise PrefectAPIError(message, status_code=status_code, body=body) from e


def any_filter(collection: str, field: str, values: list[str] | None) -> dict[str, Any]:
    """Build a ``{"<collection>": {"<field>": {"any_": [...]}}}`` filter body."""
    if not values:
        return {}
    return {collection: {field: {"any_": list(values)}}}


class SubClient:
    """Base for sub-clients bound to one URL prefix.

    Subclasses call ``_request`` with paths relative to ``base_path``.
    """

    def __init__(self, http: httpx.AsyncClient, base_path: str) -> None:
        self._http = http
        self._base_path = base_path.rstrip("/")

    def _url(self, path: str = "") -> str:
        if not path:
            return self._base_path
        return f"{self._base_path}/{path.lstrip('/')}"

    async def _request(self, method: str, path: str = "", json: Any = None) -> httpx.Response:
        """Send a request and map failures to client exceptions.

        Raises:
            ObjectNotFound: If the API returns 404
            ObjectAlreadyExists: If the API returns 409
            PrefectAPIError: For other non-success statuses and transport errors
        """
        url = self._url(path)
        _logger.debug("%s %s", method, url)
        try:
            response = await self._http.request(method, url, json=json)
        except httpx.RequestError as e:
            raise PrefectAPIError(f"{method} {url} failed: {e}") from e

        _raise_for_status(response)
        return response


__all__ = ["SubClient", "any_filter"]
