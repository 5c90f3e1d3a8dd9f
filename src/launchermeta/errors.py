"""Error taxonomy for version resolution.

Fetch failures are defined next to the HTTP helper and re-exported here so
callers need a single import.
"""

from common.http_client import (  # noqa: F401
    DecodeError,
    FetchError,
    HTTPStatusError,
    TransportError,
    UnexpectedContentTypeError,
)


class ResolutionError(Exception):
    """Base class for lookup failures that are not transport problems."""


class NotFoundError(ResolutionError):
    """The requested identifier is not listed in the manifest."""

    def __init__(self, identifier: str):
        super().__init__(f"version {identifier} not found")
        self.identifier = identifier


class PoisonedCacheError(ResolutionError):
    """A cached manifest load failure, replayed until the cache is invalidated.

    ``cause`` is the original error object from the failed load.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"manifest load failed earlier: {cause}")
        self.cause = cause


__all__ = [
    "FetchError",
    "TransportError",
    "HTTPStatusError",
    "UnexpectedContentTypeError",
    "DecodeError",
    "ResolutionError",
    "NotFoundError",
    "PoisonedCacheError",
]
