"""Catalog pipeline exception hierarchy.

Each exception carries a taxonomy code (see `core.errors`).
"""
from __future__ import annotations

from core.errors import validate_error_type


class CatalogError(Exception):
    """Base catalog exception. Fatal unless caught per model."""

    error_type = "catalog-error"


class FetchError(CatalogError):
    """Raised when a page cannot be retrieved.

    Reasons: transport failure, timeout, non-2xx HTTP status.
    """

    def __init__(
        self, url: str, cause: BaseException, error_type: str = "fetch-failed"
    ) -> None:
        self.url = url
        self.cause = cause
        self.error_type = validate_error_type(error_type)
        super().__init__(f"failed to fetch {url}: {cause}")


class NoModelsFoundError(CatalogError):
    """Library page fetched fine but no model entries were extracted."""

    error_type = "no-models-found"


class NoMatchError(CatalogError):
    """A non-empty filter excluded every model."""

    error_type = "no-match"

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"no models match filter '{pattern}'")


class InvalidFilterError(CatalogError):
    """The filter text is not a valid regular expression."""

    error_type = "invalid-filter"

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"invalid filter '{pattern}': {reason}")
