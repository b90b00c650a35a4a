"""Unit tests for rentals FastAPI dependencies."""

from unittest.mock import Mock

import pytest
from fastapi import HTTPException

from rentals.application.payment_method_service import PaymentMethodService
from rentals.application.transaction_category_service import (
    TransactionCategoryService,
)
from rentals.dependencies import (
    get_page_request,
    get_payment_method_service,
    get_property_repository,
    get_transaction_category_repository,
    get_transaction_category_service,
    resolve_tenant_context,
)
from rentals.domain.records import PaymentMethod, RentalProperty, TransactionCategory
from rentals.infrastructure.document_repository import DocumentRepository
from shared_kernel.middleware.observability import TenantContextProbe
from shared_kernel.middleware.tenant_context import TenantContext


@pytest.fixture
def mock_probe():
    return Mock(spec=TenantContextProbe)


class TestResolveTenantContext:
    """Tests for X-Tenant-ID header resolution."""

    def test_valid_header_resolves_tenant(self, mock_probe):
        context = resolve_tenant_context("acme-corp", mock_probe)

        assert context == TenantContext(tenant_id="acme-corp", source="header")
        mock_probe.tenant_resolved_from_header.assert_called_once_with("acme-corp")

    def test_surrounding_whitespace_is_ignored(self, mock_probe):
        assert resolve_tenant_context("  acme ", mock_probe).tenant_id == "acme"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_header_is_bad_request(self, mock_probe, value):
        with pytest.raises(HTTPException) as exc_info:
            resolve_tenant_context(value, mock_probe)

        assert exc_info.value.status_code == 400
        mock_probe.tenant_header_missing.assert_called_once()

    @pytest.mark.parametrize("value", ["acme corp", "-acme", "a/b", "x" * 65])
    def test_malformed_header_is_bad_request(self, mock_probe, value):
        with pytest.raises(HTTPException) as exc_info:
            resolve_tenant_context(value, mock_probe)

        assert exc_info.value.status_code == 400
        mock_probe.invalid_tenant_id_format.assert_called_once()

    @pytest.mark.parametrize("value", ["system", "SYSTEM", "System"])
    def test_system_tenant_is_forbidden(self, mock_probe, value):
        """Clients can never act as the tenant that owns the defaults."""
        with pytest.raises(HTTPException) as exc_info:
            resolve_tenant_context(value, mock_probe)

        assert exc_info.value.status_code == 403
        mock_probe.reserved_tenant_rejected.assert_called_once_with(value)


class TestRepositoryFactories:
    def test_property_repository_is_bound_to_request_tenant(self):
        tenant = TenantContext(tenant_id="acme", source="header")

        repository = get_property_repository(session=Mock(), tenant=tenant)

        assert isinstance(repository, DocumentRepository)
        assert repository.tenant == tenant
        assert repository.record_type is RentalProperty

    def test_payment_method_service_uses_system_repository(self):
        tenant = TenantContext(tenant_id="acme", source="header")
        session = Mock()
        repository = DocumentRepository(
            session=session, record_type=PaymentMethod, tenant=tenant
        )

        service = get_payment_method_service(session=session, repository=repository)

        assert isinstance(service, PaymentMethodService)

    def test_transaction_category_service_reads_system_defaults(self):
        tenant = TenantContext(tenant_id="acme", source="header")
        session = Mock()
        repository = get_transaction_category_repository(session=session, tenant=tenant)

        service = get_transaction_category_service(
            session=session, repository=repository
        )

        assert isinstance(service, TransactionCategoryService)
        assert service._system_repository.tenant.is_system
        assert service._system_repository.record_type is TransactionCategory


class TestPageRequest:
    def test_out_of_range_values_are_clamped(self):
        request = get_page_request(page_number=0, page_size=99)
        assert request.page_number == 1
        assert request.page_size == 50
