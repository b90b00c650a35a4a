"""HTTP routes for rental properties."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from rentals.application.property_transaction_service import (
    PropertyTransactionService,
)
from rentals.dependencies import (
    PageDep,
    SessionDep,
    get_attachment_repository,
    get_payment_repository,
    get_property_repository,
    get_property_transaction_service,
)
from rentals.domain.exceptions import RecordError
from rentals.domain.records import Attachment, RentalPayment, RentalProperty
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.presentation.errors import to_http_exception
from rentals.presentation.models import (
    AttachmentResponse,
    LedgerTotalsResponse,
    PaginatedResponse,
    PropertyTransactionResponse,
    RentalPaymentResponse,
    RentalPropertyRequest,
    RentalPropertyResponse,
)
from shared_kernel.pagination import Page

router = APIRouter(
    prefix="/properties",
    tags=["properties"],
)

PropertyRepositoryDep = Annotated[
    DocumentRepository[RentalProperty], Depends(get_property_repository)
]


@router.get("")
async def list_properties(
    repository: PropertyRepositoryDep,
    page_request: PageDep,
) -> PaginatedResponse[RentalPropertyResponse]:
    """List the tenant's rental properties, one page at a time."""
    try:
        records = await repository.get_all()
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        RentalPropertyResponse.from_domain,
    )


@router.get("/{property_id}")
async def get_property(
    property_id: str,
    repository: PropertyRepositoryDep,
) -> RentalPropertyResponse:
    """Get a rental property by ID.

    Raises:
        HTTPException: 404 if the property does not exist for the tenant
    """
    try:
        record = await repository.get_by_id(property_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return RentalPropertyResponse.from_domain(record)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_property(
    request: RentalPropertyRequest,
    session: SessionDep,
    repository: PropertyRepositoryDep,
) -> RentalPropertyResponse:
    """Create a rental property for the tenant.

    Raises:
        HTTPException: 422 if the property fails validation
    """
    try:
        async with session.begin():
            record = await repository.create(request.to_domain())
    except RecordError as e:
        raise to_http_exception(e) from e
    return RentalPropertyResponse.from_domain(record)


@router.put("/{property_id}")
async def update_property(
    property_id: str,
    request: RentalPropertyRequest,
    session: SessionDep,
    repository: PropertyRepositoryDep,
) -> RentalPropertyResponse:
    """Replace a rental property.

    Raises:
        HTTPException: 404 if the property does not exist for the tenant
        HTTPException: 422 if the property fails validation
    """
    try:
        async with session.begin():
            record = await repository.update(request.to_domain(record_id=property_id))
    except RecordError as e:
        raise to_http_exception(e) from e
    return RentalPropertyResponse.from_domain(record)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(
    property_id: str,
    session: SessionDep,
    repository: PropertyRepositoryDep,
) -> None:
    """Delete a rental property.

    Payments and attachments referencing it are left in place.
    """
    try:
        async with session.begin():
            await repository.delete(property_id)
    except RecordError as e:
        raise to_http_exception(e) from e


@router.get("/{property_id}/payments")
async def list_property_payments(
    property_id: str,
    repository: PropertyRepositoryDep,
    payments: Annotated[
        DocumentRepository[RentalPayment], Depends(get_payment_repository)
    ],
    page_request: PageDep,
) -> PaginatedResponse[RentalPaymentResponse]:
    """List payments recorded against one of the tenant's properties."""
    try:
        record = await repository.get_by_id(property_id)
        records = await payments.find_by(rental_property_id=record.id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        RentalPaymentResponse.from_domain,
    )


@router.get("/{property_id}/attachments")
async def list_property_attachments(
    property_id: str,
    repository: PropertyRepositoryDep,
    attachments: Annotated[
        DocumentRepository[Attachment], Depends(get_attachment_repository)
    ],
    page_request: PageDep,
) -> PaginatedResponse[AttachmentResponse]:
    """List attachments linked to one of the tenant's properties."""
    try:
        record = await repository.get_by_id(property_id)
        records = await attachments.find_by(rental_property_id=record.id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        AttachmentResponse.from_domain,
    )


@router.get("/{property_id}/transactions")
async def list_property_transactions(
    property_id: str,
    service: Annotated[
        PropertyTransactionService, Depends(get_property_transaction_service)
    ],
    page_request: PageDep,
) -> PaginatedResponse[PropertyTransactionResponse]:
    """List the ledger entries of one of the tenant's properties."""
    try:
        records = await service.list_for_property(property_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        PropertyTransactionResponse.from_domain,
    )


@router.get("/{property_id}/transactions/totals")
async def get_property_ledger_totals(
    property_id: str,
    service: Annotated[
        PropertyTransactionService, Depends(get_property_transaction_service)
    ],
) -> LedgerTotalsResponse:
    """Sum income and expenses recorded against a property."""
    try:
        totals = await service.totals_for_property(property_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return LedgerTotalsResponse(
        rental_property_id=totals.rental_property_id,
        income=totals.income,
        expenses=totals.expenses,
        net=totals.net,
    )
