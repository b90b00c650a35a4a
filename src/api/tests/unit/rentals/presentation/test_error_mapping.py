"""Unit tests for mapping record errors to HTTP responses."""

import pytest

from rentals.domain.exceptions import RecordError, RecordValidationError
from rentals.ports.exceptions import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from rentals.presentation.errors import to_http_exception


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (RecordNotFoundError("rental_properties", "abc"), 404),
        (RecordValidationError(["name is required"]), 422),
        (DuplicateRecordError("payment_methods", "cash"), 409),
        (StoreUnavailableError("down"), 503),
        (RecordError("unexpected"), 500),
    ],
)
def test_status_codes(error, status_code):
    assert to_http_exception(error).status_code == status_code


def test_validation_detail_lists_every_failure():
    error = RecordValidationError(["a is required", "b must be positive"])
    assert to_http_exception(error).detail == ["a is required", "b must be positive"]


def test_store_unavailable_hides_driver_message():
    exc = to_http_exception(StoreUnavailableError("password authentication failed"))
    assert "password" not in exc.detail
