"""Repository protocols (ports) for the rentals bounded context.

A repository is always bound to exactly one tenant at construction time.
None of its operations accept a tenant argument, so an unscoped query
cannot be written against this interface.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from rentals.domain.records import BaseRecord
from shared_kernel.middleware.tenant_context import TenantContext

RecordT = TypeVar("RecordT", bound=BaseRecord)


@runtime_checkable
class ITenantRepository(Protocol[RecordT]):
    """Tenant-scoped CRUD access to one record collection."""

    @property
    def tenant(self) -> TenantContext:
        """The tenant every operation is scoped to."""
        ...

    async def get_all(self) -> list[RecordT]:
        """Return all records of the tenant in insertion order.

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        ...

    async def get_by_id(self, record_id: str) -> RecordT:
        """Return one record of the tenant.

        Raises:
            RecordNotFoundError: If no such record exists for the tenant
        """
        ...

    async def create(self, record: RecordT) -> RecordT:
        """Persist a new record and return its stored form.

        Assigns an identifier when absent and stamps the tenant and
        timestamps.

        Raises:
            RecordValidationError: If the record is invalid or names another tenant
            DuplicateRecordError: If the store rejects the record as a duplicate
        """
        ...

    async def update(self, record: RecordT) -> RecordT:
        """Replace a stored record and return its new stored form.

        Keeps the tenant and creation timestamp, refreshes the
        modification timestamp.

        Raises:
            RecordNotFoundError: If no such record exists for the tenant
            RecordValidationError: If the record is invalid
        """
        ...

    async def delete(self, record_id: str) -> None:
        """Delete one record of the tenant.

        Raises:
            RecordNotFoundError: If no such record exists for the tenant
        """
        ...

    async def find_by(self, **fields: str) -> list[RecordT]:
        """Return records of the tenant whose fields equal the given values.

        Raises:
            RecordValidationError: If a field is not queryable
        """
        ...

    async def count(self) -> int:
        """Return the number of records of the tenant."""
        ...
