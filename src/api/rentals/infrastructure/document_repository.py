"""PostgreSQL document-store implementation of ITenantRepository.

One repository instance serves one record type for one tenant. Every
statement it issues filters on both the collection and the bound tenant,
so a record of another tenant behaves exactly like a missing record.

Writes only flush; the caller owns the transaction
(``async with session.begin()``). Inserts and updates run inside a
savepoint so a rejected duplicate leaves the outer transaction usable.
"""

from __future__ import annotations

import dataclasses
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import utc_now
from rentals.domain.exceptions import RecordValidationError
from rentals.domain.records import BaseRecord
from rentals.infrastructure.models import DocumentModel
from rentals.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from rentals.infrastructure.serialization import RecordSerializer
from rentals.ports.exceptions import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from shared_kernel.identity import SequentialIdGenerator, new_id, parse_id
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.observability_context import ObservationContext

RecordT = TypeVar("RecordT", bound=BaseRecord)


class DocumentRepository(Generic[RecordT]):
    """Tenant-scoped repository over the documents table.

    Example:
        repository = DocumentRepository(
            session=session,
            record_type=RentalProperty,
            tenant=TenantContext(tenant_id="acme", source="header"),
        )
        async with session.begin():
            stored = await repository.create(RentalProperty(...))
    """

    def __init__(
        self,
        session: AsyncSession,
        record_type: type[RecordT],
        tenant: TenantContext,
        id_generator: SequentialIdGenerator | None = None,
        probe: RepositoryProbe | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize repository for one record type and one tenant.

        Args:
            session: AsyncSession from the caller's scope
            record_type: The record dataclass stored by this repository
            tenant: Tenant every operation is scoped to (required)
            id_generator: Optional generator; the process-wide one by default
            probe: Optional domain probe for observability
            clock: Source of timezone-aware UTC timestamps
        """
        if not isinstance(tenant, TenantContext):
            raise TypeError("tenant must be a TenantContext")
        self._session = session
        self._record_type = record_type
        self._collection = record_type.collection
        self._tenant = tenant
        self._new_id = id_generator.new_id if id_generator else new_id
        self._serializer: RecordSerializer[RecordT] = RecordSerializer(record_type)
        self._clock = clock
        self._probe = (probe or DefaultRepositoryProbe()).with_context(
            ObservationContext(tenant_id=tenant.tenant_id, collection=self._collection)
        )

    @property
    def tenant(self) -> TenantContext:
        """The tenant every operation is scoped to."""
        return self._tenant

    @property
    def record_type(self) -> type[RecordT]:
        """The record dataclass stored by this repository."""
        return self._record_type

    async def get_all(self) -> list[RecordT]:
        """Return all records of the tenant in insertion order."""
        stmt = self._scoped_select().order_by(
            DocumentModel.created_at, DocumentModel.id
        )
        async with self._store_errors("get_all"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        records = [self._serializer.to_record(model) for model in models]
        self._probe.records_listed(len(records))
        return records

    async def get_by_id(self, record_id: str) -> RecordT:
        """Return one record of the tenant.

        Raises:
            RecordNotFoundError: If absent, malformed, or owned by another tenant
        """
        model = await self._get_model(record_id, "get_by_id")
        self._probe.record_retrieved(model.id)
        return self._serializer.to_record(model)

    async def create(self, record: RecordT) -> RecordT:
        """Persist a new record and return its stored form.

        The caller's record object is not modified.

        Raises:
            RecordValidationError: If the record is invalid or names another tenant
            DuplicateRecordError: If the id or natural key is already taken
        """
        self._check_record(record)
        if record.id is None:
            record_id = str(self._new_id())
        else:
            try:
                record_id = str(parse_id(record.id))
            except ValueError as e:
                raise RecordValidationError([f"id is malformed: {record.id!r}"]) from e

        now = self._clock()
        stored = dataclasses.replace(
            record,
            id=record_id,
            tenant_id=self._tenant.tenant_id,
            created_at=record.created_at or now,
            updated_at=now,
        )
        model = self._serializer.to_model(stored)

        async with self._store_errors("create"):
            await self._flush_guarded(stored, model=model)

        self._probe.record_created(record_id)
        return stored

    async def update(self, record: RecordT) -> RecordT:
        """Replace a stored record and return its new stored form.

        Raises:
            RecordNotFoundError: If no such record exists for the tenant
            RecordValidationError: If the record is invalid or names another tenant
            DuplicateRecordError: If the new natural key is already taken
        """
        if record.id is None:
            raise RecordValidationError(["id is required for update"])
        self._check_record(record)

        model = await self._get_model(record.id, "update")
        stored = dataclasses.replace(
            record,
            id=model.id,
            tenant_id=model.tenant_id,
            created_at=model.created_at,
            updated_at=self._clock(),
        )
        self._serializer.apply(stored, model)

        async with self._store_errors("update"):
            await self._flush_guarded(stored)

        self._probe.record_updated(model.id)
        return stored

    async def delete(self, record_id: str) -> None:
        """Delete one record of the tenant.

        Raises:
            RecordNotFoundError: If no such record exists for the tenant
        """
        model = await self._get_model(record_id, "delete")
        async with self._store_errors("delete"):
            await self._session.delete(model)
            await self._session.flush()
        self._probe.record_deleted(model.id)

    async def find_by(self, **fields: str) -> list[RecordT]:
        """Return records of the tenant whose top-level fields equal the values.

        Raises:
            RecordValidationError: If a field is not queryable for this record type
        """
        unknown = sorted(set(fields) - self._record_type.queryable_fields)
        if unknown:
            raise RecordValidationError(
                [f"field '{name}' cannot be queried" for name in unknown]
            )

        stmt = self._scoped_select()
        for name, value in fields.items():
            stmt = stmt.where(DocumentModel.body[name].as_string() == value)
        stmt = stmt.order_by(DocumentModel.created_at, DocumentModel.id)

        async with self._store_errors("find_by"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        records = [self._serializer.to_record(model) for model in models]
        self._probe.records_listed(len(records))
        return records

    async def count(self) -> int:
        """Return the number of records of the tenant."""
        stmt = select(func.count()).select_from(DocumentModel).where(
            DocumentModel.collection == self._collection,
            DocumentModel.tenant_id == self._tenant.tenant_id,
        )
        async with self._store_errors("count"):
            result = await self._session.execute(stmt)
            return int(result.scalar_one())

    def _scoped_select(self) -> Select[tuple[DocumentModel]]:
        """SELECT over this repository's collection and tenant only."""
        return select(DocumentModel).where(
            DocumentModel.collection == self._collection,
            DocumentModel.tenant_id == self._tenant.tenant_id,
        )

    async def _get_model(self, record_id: str, operation: str) -> DocumentModel:
        try:
            canonical_id = str(parse_id(record_id))
        except ValueError:
            self._probe.record_not_found(str(record_id))
            raise RecordNotFoundError(self._collection, str(record_id)) from None

        stmt = self._scoped_select().where(DocumentModel.id == canonical_id)
        async with self._store_errors(operation):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            self._probe.record_not_found(canonical_id)
            raise RecordNotFoundError(self._collection, canonical_id)
        return model

    def _check_record(self, record: RecordT) -> None:
        if not isinstance(record, self._record_type):
            raise RecordValidationError(
                [f"expected a {self._record_type.__name__} record"]
            )
        if record.tenant_id is not None and record.tenant_id != self._tenant.tenant_id:
            raise RecordValidationError(["tenant_id does not match the repository tenant"])
        record.validate()

    async def _flush_guarded(
        self,
        record: RecordT,
        model: DocumentModel | None = None,
    ) -> None:
        """Flush inside a savepoint, translating constraint violations."""
        try:
            async with self._session.begin_nested():
                if model is not None:
                    self._session.add(model)
                await self._session.flush()
        except IntegrityError as e:
            natural_key = record.natural_key()
            self._probe.duplicate_record(natural_key)
            raise DuplicateRecordError(self._collection, natural_key) from e

    @asynccontextmanager
    async def _store_errors(self, operation: str) -> AsyncIterator[None]:
        """Translate connectivity failures into StoreUnavailableError."""
        try:
            yield
        except (OperationalError, InterfaceError) as e:
            self._probe.store_unavailable(operation, e)
            raise StoreUnavailableError(f"Document store unavailable: {e}") from e
        except DBAPIError as e:
            if not e.connection_invalidated:
                raise
            self._probe.store_unavailable(operation, e)
            raise StoreUnavailableError(f"Document store unavailable: {e}") from e
