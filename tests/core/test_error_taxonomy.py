import pytest
import requests

from core.catalog import CatalogWriteError
from core.errors import map_exception, validate_error_type
from core.library import (
    CatalogError,
    FetchError,
    InvalidFilterError,
    NoMatchError,
    NoModelsFoundError,
)


def test_error_taxonomy_known():
    assert validate_error_type("timeout") == "timeout"
    assert validate_error_type("no-match") == "no-match"
    assert validate_error_type("config-out-of-range") == "config-out-of-range"


def test_error_taxonomy_unknown():
    with pytest.raises(AssertionError):
        validate_error_type("not-a-code")


def test_catalog_exceptions_carry_known_codes():
    for exc in (
        CatalogError("generic"),
        FetchError("u", OSError("x")),
        NoModelsFoundError("none"),
        NoMatchError("x"),
        InvalidFilterError("(", "missing )"),
    ):
        assert validate_error_type(exc.error_type) == exc.error_type


def test_base_catalog_error_is_not_labelled_as_a_fetch_failure():
    assert CatalogError("generic").error_type == "catalog-error"
    assert FetchError("u", OSError("x")).error_type == "fetch-failed"
    assert issubclass(CatalogWriteError, CatalogError)
    assert CatalogWriteError.error_type == "write-failed"


def test_map_exception_fetch_phase():
    assert map_exception(requests.Timeout("slow"), "fetch") == "timeout"
    assert map_exception(
        requests.HTTPError("404", response=object()), "fetch"
    ) == "http-status"
    assert map_exception(OSError("refused"), "fetch") == "fetch-failed"
