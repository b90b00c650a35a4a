"""FastAPI dependencies for the rentals bounded context.

Resolves the tenant from the X-Tenant-ID request header and builds
repositories bound to that tenant.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        repository: Annotated[
            DocumentRepository[RentalProperty], Depends(get_property_repository)
        ],
    ):
        ...
"""

from __future__ import annotations

import re
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_session
from rentals.application.payment_method_service import PaymentMethodService
from rentals.application.property_transaction_service import (
    PropertyTransactionService,
)
from rentals.application.transaction_category_service import (
    TransactionCategoryService,
)
from rentals.domain.records import (
    Attachment,
    PaymentMethod,
    PropertyTransaction,
    RentalPayment,
    RentalProperty,
    TransactionCategory,
)
from rentals.infrastructure.document_repository import DocumentRepository
from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import SYSTEM_TENANT_ID, TenantContext
from shared_kernel.pagination import DEFAULT_PAGE_SIZE, PageRequest

_TENANT_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$")


def resolve_tenant_context(
    x_tenant_id: str | None,
    probe: TenantContextProbe,
) -> TenantContext:
    """Validate the X-Tenant-ID header value and build the tenant context.

    Args:
        x_tenant_id: The X-Tenant-ID header value, or None if missing.
        probe: Domain probe for observability.

    Returns:
        TenantContext with source 'header'.

    Raises:
        HTTPException 400: If the header is missing or malformed.
        HTTPException 403: If the header names the reserved system tenant.
    """
    if x_tenant_id is None or not x_tenant_id.strip():
        probe.tenant_header_missing()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header is required",
        )

    tenant_id = x_tenant_id.strip()
    if not _TENANT_ID_PATTERN.match(tenant_id):
        probe.invalid_tenant_id_format(tenant_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-Tenant-ID header",
        )

    if tenant_id.casefold() == SYSTEM_TENANT_ID:
        probe.reserved_tenant_rejected(tenant_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The system tenant cannot be used by clients",
        )

    probe.tenant_resolved_from_header(tenant_id)
    return TenantContext(tenant_id=tenant_id, source="header")


def get_tenant_context_probe() -> TenantContextProbe:
    """Provide the tenant context probe (overridable in tests)."""
    return DefaultTenantContextProbe()


async def get_tenant_context(
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
    x_tenant_id: Annotated[str | None, Header(alias="X-Tenant-ID")] = None,
) -> TenantContext:
    """FastAPI dependency resolving the request tenant."""
    return resolve_tenant_context(x_tenant_id, probe)


def get_page_request(
    page_number: Annotated[int, Query(alias="pageNumber")] = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """Read pagination query parameters; out-of-range values are clamped."""
    return PageRequest(page_number=page_number, page_size=page_size)


SessionDep = Annotated[AsyncSession, Depends(get_session)]
TenantDep = Annotated[TenantContext, Depends(get_tenant_context)]
PageDep = Annotated[PageRequest, Depends(get_page_request)]


def get_property_repository(
    session: SessionDep,
    tenant: TenantDep,
) -> DocumentRepository[RentalProperty]:
    """Rental property repository for the request tenant."""
    return DocumentRepository(session=session, record_type=RentalProperty, tenant=tenant)


def get_payment_repository(
    session: SessionDep,
    tenant: TenantDep,
) -> DocumentRepository[RentalPayment]:
    """Rental payment repository for the request tenant."""
    return DocumentRepository(session=session, record_type=RentalPayment, tenant=tenant)


def get_payment_method_repository(
    session: SessionDep,
    tenant: TenantDep,
) -> DocumentRepository[PaymentMethod]:
    """Payment method repository for the request tenant."""
    return DocumentRepository(session=session, record_type=PaymentMethod, tenant=tenant)


def get_attachment_repository(
    session: SessionDep,
    tenant: TenantDep,
) -> DocumentRepository[Attachment]:
    """Attachment metadata repository for the request tenant."""
    return DocumentRepository(session=session, record_type=Attachment, tenant=tenant)


def get_payment_method_service(
    session: SessionDep,
    repository: Annotated[
        DocumentRepository[PaymentMethod], Depends(get_payment_method_repository)
    ],
) -> PaymentMethodService:
    """Payment method service combining tenant methods and system defaults."""
    system_repository = DocumentRepository(
        session=session,
        record_type=PaymentMethod,
        tenant=TenantContext.system(),
    )
    return PaymentMethodService(
        tenant_repository=repository,
        system_repository=system_repository,
    )


def get_transaction_category_repository(
    session: SessionDep,
    tenant: TenantDep,
) -> DocumentRepository[TransactionCategory]:
    """Transaction category repository for the request tenant."""
    return DocumentRepository(
        session=session, record_type=TransactionCategory, tenant=tenant
    )


def get_transaction_repository(
    session: SessionDep,
    tenant: TenantDep,
) -> DocumentRepository[PropertyTransaction]:
    """Property transaction repository for the request tenant."""
    return DocumentRepository(
        session=session, record_type=PropertyTransaction, tenant=tenant
    )


def get_transaction_category_service(
    session: SessionDep,
    repository: Annotated[
        DocumentRepository[TransactionCategory],
        Depends(get_transaction_category_repository),
    ],
) -> TransactionCategoryService:
    """Category service combining tenant categories and system defaults."""
    system_repository = DocumentRepository(
        session=session,
        record_type=TransactionCategory,
        tenant=TenantContext.system(),
    )
    return TransactionCategoryService(
        tenant_repository=repository,
        system_repository=system_repository,
    )


def get_property_transaction_service(
    transactions: Annotated[
        DocumentRepository[PropertyTransaction], Depends(get_transaction_repository)
    ],
    properties: Annotated[
        DocumentRepository[RentalProperty], Depends(get_property_repository)
    ],
    categories: Annotated[
        TransactionCategoryService, Depends(get_transaction_category_service)
    ],
    payment_methods: Annotated[
        PaymentMethodService, Depends(get_payment_method_service)
    ],
) -> PropertyTransactionService:
    """Ledger service for the request tenant."""
    return PropertyTransactionService(
        transactions=transactions,
        properties=properties,
        categories=categories,
        payment_methods=payment_methods,
    )
