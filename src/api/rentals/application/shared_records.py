"""Lookups over records that tenants share with the system tenant.

Some collections (payment methods, transaction categories) hold both
tenant-owned records and system defaults. Each lookup goes through a
repository bound to exactly one tenant; the system repository is
read-only from these services' point of view.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from rentals.domain.records import BaseRecord
from rentals.ports.exceptions import RecordNotFoundError
from rentals.ports.repositories import ITenantRepository

SharedT = TypeVar("SharedT", bound=BaseRecord)


class SharedRecordService(Generic[SharedT]):
    """Combines a tenant's records with the system defaults of one collection."""

    def __init__(
        self,
        tenant_repository: ITenantRepository[SharedT],
        system_repository: ITenantRepository[SharedT],
    ):
        if not system_repository.tenant.is_system:
            raise ValueError("system_repository must be bound to the system tenant")
        self._tenant_repository = tenant_repository
        self._system_repository = system_repository

    async def list_available(self) -> list[SharedT]:
        """Return the tenant's records followed by the system defaults."""
        own = await self._tenant_repository.get_all()
        if self._tenant_repository.tenant.is_system:
            return own
        defaults = await self._system_repository.get_all()
        return [*own, *defaults]

    async def get_available(self, record_id: str) -> SharedT:
        """Return a record owned by the tenant or by the system.

        Raises:
            RecordNotFoundError: If neither the tenant nor the system owns it
        """
        try:
            return await self._tenant_repository.get_by_id(record_id)
        except RecordNotFoundError:
            return await self._system_repository.get_by_id(record_id)
