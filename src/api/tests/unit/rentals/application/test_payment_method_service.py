"""Unit tests for PaymentMethodService."""

import pytest

from rentals.application.payment_method_service import PaymentMethodService
from rentals.domain.records import PaymentMethod
from rentals.ports.exceptions import RecordNotFoundError
from shared_kernel.middleware.tenant_context import TenantContext

ACME = TenantContext(tenant_id="acme", source="header")
GLOBEX = TenantContext(tenant_id="globex", source="header")


@pytest.fixture
def system_repository(document_store):
    return document_store.repository(PaymentMethod, TenantContext.system())


@pytest.fixture
async def cash_default(system_repository):
    return await system_repository.create(
        PaymentMethod(name="Cash", is_system_default=True)
    )


def _service(document_store, tenant: TenantContext) -> PaymentMethodService:
    return PaymentMethodService(
        tenant_repository=document_store.repository(PaymentMethod, tenant),
        system_repository=document_store.repository(PaymentMethod, TenantContext.system()),
    )


class TestConstruction:
    def test_system_repository_must_be_system_bound(self, document_store):
        with pytest.raises(ValueError):
            PaymentMethodService(
                tenant_repository=document_store.repository(PaymentMethod, ACME),
                system_repository=document_store.repository(PaymentMethod, GLOBEX),
            )


class TestListAvailable:
    """Tests for list_available."""

    @pytest.mark.asyncio
    async def test_own_methods_then_defaults(self, document_store, cash_default):
        service = _service(document_store, ACME)
        own = await document_store.repository(PaymentMethod, ACME).create(
            PaymentMethod(name="Venmo")
        )

        methods = await service.list_available()

        assert [m.id for m in methods] == [own.id, cash_default.id]

    @pytest.mark.asyncio
    async def test_other_tenants_methods_are_hidden(self, document_store, cash_default):
        await document_store.repository(PaymentMethod, GLOBEX).create(
            PaymentMethod(name="Globex Card")
        )

        methods = await _service(document_store, ACME).list_available()

        assert [m.name for m in methods] == ["Cash"]


class TestGetAvailable:
    """Tests for get_available."""

    @pytest.mark.asyncio
    async def test_falls_back_to_system_default(self, document_store, cash_default):
        method = await _service(document_store, ACME).get_available(cash_default.id)
        assert method == cash_default

    @pytest.mark.asyncio
    async def test_other_tenant_method_is_not_found(self, document_store):
        foreign = await document_store.repository(PaymentMethod, GLOBEX).create(
            PaymentMethod(name="Globex Card")
        )

        with pytest.raises(RecordNotFoundError):
            await _service(document_store, ACME).get_available(foreign.id)
