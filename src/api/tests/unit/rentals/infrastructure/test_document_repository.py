"""Unit tests for DocumentRepository.

Tests verify tenant scoping, stamping and error translation with a mocked
AsyncSession.
"""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from rentals.domain.exceptions import RecordValidationError
from rentals.domain.records import Address, PaymentMethod, RentalPayment, RentalProperty
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.infrastructure.models import DocumentModel
from rentals.infrastructure.serialization import RecordSerializer
from rentals.ports.exceptions import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from rentals.ports.repositories import ITenantRepository
from shared_kernel.identity import SequentialIdGenerator
from shared_kernel.middleware.tenant_context import TenantContext

NOW = datetime(2026, 5, 4, 8, 30, tzinfo=UTC)
ACME = TenantContext(tenant_id="acme", source="header")


@pytest.fixture
def mock_session():
    """Create mock async session with a working savepoint context manager."""
    session = AsyncMock()
    session.add = Mock()
    savepoint = MagicMock()
    savepoint.__aenter__ = AsyncMock(return_value=None)
    savepoint.__aexit__ = AsyncMock(return_value=False)
    session.begin_nested = Mock(return_value=savepoint)
    return session


@pytest.fixture
def mock_probe():
    probe = MagicMock()
    probe.with_context.return_value = probe
    return probe


@pytest.fixture
def repository(mock_session, mock_probe):
    """Create a property repository bound to the acme tenant."""
    return DocumentRepository(
        session=mock_session,
        record_type=RentalProperty,
        tenant=ACME,
        probe=mock_probe,
        clock=lambda: NOW,
    )


def _property(**overrides) -> RentalProperty:
    values = {"address": Address(street="1 Main St"), "weekly_rent_amount": Decimal("300")}
    values.update(overrides)
    return RentalProperty(**values)


def _stored_model(tenant_id: str = "acme") -> DocumentModel:
    record = _property(
        id="018f3a52-7c1e-7a00-8000-0000000000aa",
        tenant_id=tenant_id,
        created_at=NOW,
        updated_at=NOW,
    )
    return RecordSerializer(RentalProperty).to_model(record)


def _returning(mock_session, model):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = model
    mock_session.execute.return_value = mock_result


def _bound_params(mock_session) -> list:
    statement = mock_session.execute.call_args[0][0]
    return list(statement.compile(dialect=postgresql.dialect()).params.values())


class TestConstruction:
    """Tests for repository construction."""

    def test_implements_protocol(self, repository):
        assert isinstance(repository, ITenantRepository)

    def test_requires_tenant_context(self, mock_session):
        """A repository cannot be created without a tenant."""
        with pytest.raises(TypeError):
            DocumentRepository(session=mock_session, record_type=RentalProperty, tenant=None)

    def test_exposes_bound_tenant(self, repository):
        assert repository.tenant == ACME
        assert repository.record_type is RentalProperty


class TestCreate:
    """Tests for create."""

    @pytest.mark.asyncio
    async def test_stamps_id_tenant_and_timestamps(self, repository, mock_session):
        stored = await repository.create(_property())

        assert stored.tenant_id == "acme"
        assert stored.created_at == NOW
        assert stored.updated_at == NOW
        assert len(stored.id) == 36

        mock_session.add.assert_called_once()
        added = mock_session.add.call_args[0][0]
        assert isinstance(added, DocumentModel)
        assert added.id == stored.id
        assert added.collection == "rental_properties"
        assert added.tenant_id == "acme"
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_does_not_modify_caller_record(self, repository):
        record = _property()
        await repository.create(record)
        assert record.id is None
        assert record.tenant_id is None

    @pytest.mark.asyncio
    async def test_uses_injected_generator(self, mock_session):
        generator = SequentialIdGenerator(clock=lambda: 1_000)
        repository = DocumentRepository(
            session=mock_session,
            record_type=RentalProperty,
            tenant=ACME,
            id_generator=generator,
        )

        stored = await repository.create(_property())

        assert stored.id.startswith("00000000-03e8")

    @pytest.mark.asyncio
    async def test_keeps_supplied_creation_time(self, repository):
        earlier = datetime(2025, 1, 1, tzinfo=UTC)
        stored = await repository.create(_property(created_at=earlier))
        assert stored.created_at == earlier
        assert stored.updated_at == NOW

    @pytest.mark.asyncio
    async def test_rejects_record_of_other_tenant(self, repository, mock_session):
        """A record naming another tenant is a validation failure."""
        with pytest.raises(RecordValidationError):
            await repository.create(_property(tenant_id="globex"))
        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_invalid_record(self, repository, mock_session):
        with pytest.raises(RecordValidationError) as exc_info:
            await repository.create(_property(address=Address()))
        assert "address.street is required" in exc_info.value.errors
        mock_session.flush.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_wrong_record_type(self, repository):
        with pytest.raises(RecordValidationError):
            await repository.create(RentalPayment(rental_property_id="x", amount=Decimal("1")))

    @pytest.mark.asyncio
    async def test_integrity_error_becomes_duplicate(self, mock_session, mock_probe):
        repository = DocumentRepository(
            session=mock_session,
            record_type=PaymentMethod,
            tenant=TenantContext.system(),
            probe=mock_probe,
        )
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("duplicate key")
        )

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repository.create(PaymentMethod(name="Cash", is_system_default=True))

        assert exc_info.value.natural_key == "cash"
        mock_probe.duplicate_record.assert_called_once_with("cash")

    @pytest.mark.asyncio
    async def test_operational_error_becomes_store_unavailable(
        self, repository, mock_session, mock_probe
    ):
        mock_session.flush.side_effect = OperationalError(
            "INSERT", {}, Exception("connection refused")
        )

        with pytest.raises(StoreUnavailableError):
            await repository.create(_property())

        mock_probe.store_unavailable.assert_called_once()


class TestGetById:
    """Tests for get_by_id."""

    @pytest.mark.asyncio
    async def test_returns_record(self, repository, mock_session):
        _returning(mock_session, _stored_model())

        record = await repository.get_by_id("018f3a52-7c1e-7a00-8000-0000000000aa")

        assert isinstance(record, RentalProperty)
        assert record.address.street == "1 Main St"
        assert record.tenant_id == "acme"

    @pytest.mark.asyncio
    async def test_query_is_scoped_to_tenant_and_collection(self, repository, mock_session):
        _returning(mock_session, _stored_model())

        await repository.get_by_id("018f3a52-7c1e-7a00-8000-0000000000aa")

        params = _bound_params(mock_session)
        assert "acme" in params
        assert "rental_properties" in params

    @pytest.mark.asyncio
    async def test_missing_record_raises_not_found(self, repository, mock_session):
        """A record of another tenant is filtered out and looks missing."""
        _returning(mock_session, None)

        with pytest.raises(RecordNotFoundError) as exc_info:
            await repository.get_by_id("018f3a52-7c1e-7a00-8000-0000000000aa")

        assert exc_info.value.collection == "rental_properties"

    @pytest.mark.asyncio
    async def test_malformed_id_raises_not_found_without_query(self, repository, mock_session):
        with pytest.raises(RecordNotFoundError):
            await repository.get_by_id("not-an-id")
        mock_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalidated_connection_becomes_store_unavailable(
        self, repository, mock_session
    ):
        mock_session.execute.side_effect = DBAPIError(
            "SELECT", {}, Exception("gone"), connection_invalidated=True
        )

        with pytest.raises(StoreUnavailableError):
            await repository.get_by_id("018f3a52-7c1e-7a00-8000-0000000000aa")

    @pytest.mark.asyncio
    async def test_other_dbapi_errors_propagate(self, repository, mock_session):
        mock_session.execute.side_effect = DBAPIError("SELECT", {}, Exception("syntax"))

        with pytest.raises(DBAPIError):
            await repository.get_by_id("018f3a52-7c1e-7a00-8000-0000000000aa")


class TestGetAll:
    """Tests for get_all and count."""

    @pytest.mark.asyncio
    async def test_returns_all_records(self, repository, mock_session, mock_probe):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [_stored_model(), _stored_model()]
        mock_session.execute.return_value = mock_result

        records = await repository.get_all()

        assert len(records) == 2
        mock_probe.records_listed.assert_called_once_with(2)
        assert "acme" in _bound_params(mock_session)

    @pytest.mark.asyncio
    async def test_count(self, repository, mock_session):
        mock_result = MagicMock()
        mock_result.scalar_one.return_value = 3
        mock_session.execute.return_value = mock_result

        assert await repository.count() == 3


class TestUpdate:
    """Tests for update."""

    @pytest.mark.asyncio
    async def test_keeps_tenant_and_creation_time(self, mock_session):
        later = datetime(2026, 6, 1, tzinfo=UTC)
        repository = DocumentRepository(
            session=mock_session,
            record_type=RentalProperty,
            tenant=ACME,
            clock=lambda: later,
        )
        model = _stored_model()
        _returning(mock_session, model)

        updated = await repository.update(
            _property(id=model.id, description="Renovated", created_at=later)
        )

        assert updated.created_at == NOW
        assert updated.updated_at == later
        assert updated.tenant_id == "acme"
        assert model.body["description"] == "Renovated"
        assert model.updated_at == later

    @pytest.mark.asyncio
    async def test_requires_id(self, repository):
        with pytest.raises(RecordValidationError):
            await repository.update(_property())

    @pytest.mark.asyncio
    async def test_missing_record_raises_not_found(self, repository, mock_session):
        _returning(mock_session, None)

        with pytest.raises(RecordNotFoundError):
            await repository.update(_property(id="018f3a52-7c1e-7a00-8000-0000000000aa"))


class TestDelete:
    """Tests for delete."""

    @pytest.mark.asyncio
    async def test_deletes_model(self, repository, mock_session):
        model = _stored_model()
        _returning(mock_session, model)

        await repository.delete(model.id)

        mock_session.delete.assert_awaited_once_with(model)
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_record_raises_not_found(self, repository, mock_session):
        _returning(mock_session, None)

        with pytest.raises(RecordNotFoundError):
            await repository.delete("018f3a52-7c1e-7a00-8000-0000000000aa")
        mock_session.delete.assert_not_called()


class TestFindBy:
    """Tests for find_by."""

    @pytest.mark.asyncio
    async def test_unknown_field_is_rejected(self, repository):
        with pytest.raises(RecordValidationError):
            await repository.find_by(city="Springfield")

    @pytest.mark.asyncio
    async def test_filters_on_field_value(self, mock_session):
        repository = DocumentRepository(
            session=mock_session, record_type=RentalPayment, tenant=ACME
        )
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = mock_result

        assert await repository.find_by(rental_property_id="p-1") == []

        params = _bound_params(mock_session)
        assert "p-1" in params
        assert "acme" in params
