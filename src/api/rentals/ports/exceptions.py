"""Repository-level exceptions for the rentals bounded context.

These exceptions represent errors that can occur during repository
operations. They should be caught and handled by the application or
presentation layer.
"""

from __future__ import annotations

from rentals.domain.exceptions import RecordError


class RecordNotFoundError(RecordError):
    """Raised when a record does not exist for the repository's tenant.

    A record owned by another tenant raises this same error, so callers
    cannot tell "absent" from "belongs to someone else".
    """

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record '{record_id}' not found")


class DuplicateRecordError(RecordError):
    """Raised when the store rejects a record as a duplicate.

    Either the identifier is already taken or the record's natural key
    already exists for the same collection and tenant.
    """

    def __init__(self, collection: str, natural_key: str | None = None):
        self.collection = collection
        self.natural_key = natural_key
        detail = f" with key '{natural_key}'" if natural_key else ""
        super().__init__(f"{collection} record{detail} already exists")


class StoreUnavailableError(RecordError):
    """Raised when the document store cannot be reached.

    The repository performs no retry; retry policy belongs to the caller.
    """

    pass
