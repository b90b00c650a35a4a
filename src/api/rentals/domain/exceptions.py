"""Domain exceptions for the rentals bounded context."""

from __future__ import annotations


class RecordError(Exception):
    """Base class for all record-level errors in the rentals context."""

    pass


class RecordValidationError(RecordError):
    """Raised when a record fails its own validation rules.

    Validation failures are caller errors and are never retried.

    Attributes:
        errors: Human-readable descriptions of every failed rule
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
