"""Ports (interfaces) for the rentals bounded context.

Ports define the contracts for repositories without specifying
implementation details, keeping the application layer independent of
the document store.
"""

from rentals.ports.exceptions import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from rentals.ports.repositories import ITenantRepository

__all__ = [
    "DuplicateRecordError",
    "ITenantRepository",
    "RecordNotFoundError",
    "StoreUnavailableError",
]
