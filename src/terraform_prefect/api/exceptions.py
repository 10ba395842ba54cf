"""Exceptions for the Prefect API client layer.

Public API (the "studs"):
    PrefectError: Base exception for all client errors
    PrefectAPIError: Request failed or returned a non-success status
    ObjectNotFound: The API returned 404
    ObjectAlreadyExists: The API returned 409
    ClientConstructionError: A sub-client could not be scoped
"""


class PrefectError(Exception):
    """Base exception for all Prefect client errors."""

    pass


class PrefectAPIError(PrefectError):
    """Request to the Prefect API failed.

    Attributes:
        status_code: HTTP status, or None for transport failures
        body: Response body text, if any
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ObjectNotFound(PrefectAPIError):
    """The requested object does not exist."""

    pass


class ObjectAlreadyExists(PrefectAPIError):
    """An object with the same unique key already exists."""

    pass


class ClientConstructionError(PrefectError):
    """A scoped sub-client could not be built from the given identifiers."""

    pass


__all__ = [
    "PrefectError",
    "PrefectAPIError",
    "ObjectNotFound",
    "ObjectAlreadyExists",
    "ClientConstructionError",
]
