"""Central Error Taxonomy for the catalog pipeline.

Every error surfaced to the user or recorded in metrics carries one of the
codes below. Unknown codes are a programming error.
"""
from __future__ import annotations

_ALLOWED_ERROR_TYPES = {
    # generic (base CatalogError)
    "catalog-error",
    # library.fetch / detail.fetch
    "fetch-failed",
    "timeout",
    "http-status",
    # extraction / filtering
    "no-models-found",
    "no-match",
    "invalid-filter",
    # output
    "write-failed",
    # config
    "config-out-of-range",
    "config-invalid",
    # infra
    "event-handler-error",
}


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


def map_exception(e: BaseException, phase: str) -> str:
    """Classify a raw exception raised during ``phase``.

    Only the ``fetch`` phase is classified in detail; anything else maps
    to ``fetch-failed``.
    """
    name = e.__class__.__name__.lower()
    msg = str(e).lower()
    if phase == "fetch":
        if "timeout" in name or "timed out" in msg:
            return "timeout"
        if "httperror" in name or getattr(e, "response", None) is not None:
            return "http-status"
        return "fetch-failed"
    return "fetch-failed"


__all__ = ["validate_error_type", "map_exception"]
