"""Mapping of record errors to HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from rentals.domain.exceptions import RecordError, RecordValidationError
from rentals.ports.exceptions import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreUnavailableError,
)


def to_http_exception(error: RecordError) -> HTTPException:
    """Translate a record error into the HTTPException a route should raise.

    NotFound never reveals whether the record exists for another tenant.
    """
    if isinstance(error, RecordNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Record {error.record_id} not found",
        )
    if isinstance(error, RecordValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=error.errors,
        )
    if isinstance(error, DuplicateRecordError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(error),
        )
    if isinstance(error, StoreUnavailableError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document store unavailable",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unexpected record error",
    )
