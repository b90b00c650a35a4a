"""Fixtures for rentals tests: an in-memory document store.

The fake honors the same contract as DocumentRepository: tenant scoping,
stamping on create, natural-key uniqueness and NotFound for records of
other tenants.
"""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime

import pytest

from rentals.domain.exceptions import RecordValidationError
from rentals.domain.records import BaseRecord
from rentals.ports.exceptions import DuplicateRecordError, RecordNotFoundError
from shared_kernel.identity import new_id, parse_id
from shared_kernel.middleware.tenant_context import TenantContext


class InMemoryDocumentStore:
    """Records keyed by (collection, tenant_id, id)."""

    def __init__(self):
        self.documents: dict[tuple[str, str, str], BaseRecord] = {}

    def repository(self, record_type: type[BaseRecord], tenant: TenantContext):
        return InMemoryRepository(self, record_type, tenant)

    def records(self, collection: str, tenant_id: str) -> list[BaseRecord]:
        return [
            record
            for (coll, tenant, _), record in self.documents.items()
            if coll == collection and tenant == tenant_id
        ]


class InMemoryRepository:
    """ITenantRepository implementation over InMemoryDocumentStore."""

    def __init__(self, store, record_type, tenant: TenantContext):
        self._store = store
        self._record_type = record_type
        self._tenant = tenant

    @property
    def tenant(self) -> TenantContext:
        return self._tenant

    def _key(self, record_id: str) -> tuple[str, str, str]:
        try:
            canonical = str(parse_id(record_id))
        except ValueError:
            raise RecordNotFoundError(self._record_type.collection, record_id) from None
        return (self._record_type.collection, self._tenant.tenant_id, canonical)

    async def get_all(self):
        return self._store.records(self._record_type.collection, self._tenant.tenant_id)

    async def get_by_id(self, record_id):
        key = self._key(record_id)
        if key not in self._store.documents:
            raise RecordNotFoundError(self._record_type.collection, record_id)
        return self._store.documents[key]

    async def create(self, record):
        if record.tenant_id not in (None, self._tenant.tenant_id):
            raise RecordValidationError(["tenant_id does not match the repository tenant"])
        record.validate()
        natural_key = record.natural_key()
        if natural_key is not None and any(
            existing.natural_key() == natural_key for existing in await self.get_all()
        ):
            raise DuplicateRecordError(self._record_type.collection, natural_key)
        now = datetime.now(UTC)
        stored = dataclasses.replace(
            record,
            id=str(new_id()),
            tenant_id=self._tenant.tenant_id,
            created_at=now,
            updated_at=now,
        )
        self._store.documents[self._key(stored.id)] = stored
        return stored

    async def update(self, record):
        if record.id is None:
            raise RecordValidationError(["id is required for update"])
        current = await self.get_by_id(record.id)
        record.validate()
        stored = dataclasses.replace(
            record,
            id=current.id,
            tenant_id=current.tenant_id,
            created_at=current.created_at,
            updated_at=datetime.now(UTC),
        )
        self._store.documents[self._key(stored.id)] = stored
        return stored

    async def delete(self, record_id):
        await self.get_by_id(record_id)
        del self._store.documents[self._key(record_id)]

    async def find_by(self, **fields):
        unknown = set(fields) - self._record_type.queryable_fields
        if unknown:
            raise RecordValidationError([f"field '{name}' cannot be queried" for name in unknown])
        return [
            record
            for record in await self.get_all()
            if all(getattr(record, name) == value for name, value in fields.items())
        ]

    async def count(self):
        return len(await self.get_all())


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()
