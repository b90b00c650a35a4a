"""HTTP routes for rental payments."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from rentals.application.payment_method_service import PaymentMethodService
from rentals.dependencies import (
    PageDep,
    SessionDep,
    get_payment_method_service,
    get_payment_repository,
    get_property_repository,
)
from rentals.domain.exceptions import RecordError, RecordValidationError
from rentals.domain.records import RentalPayment, RentalProperty
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.ports.exceptions import RecordNotFoundError
from rentals.presentation.errors import to_http_exception
from rentals.presentation.models import (
    PaginatedResponse,
    RentalPaymentRequest,
    RentalPaymentResponse,
)
from shared_kernel.pagination import Page

router = APIRouter(
    prefix="/payments",
    tags=["payments"],
)

PaymentRepositoryDep = Annotated[
    DocumentRepository[RentalPayment], Depends(get_payment_repository)
]
PropertyRepositoryDep = Annotated[
    DocumentRepository[RentalProperty], Depends(get_property_repository)
]
PaymentMethodServiceDep = Annotated[
    PaymentMethodService, Depends(get_payment_method_service)
]


async def _check_references(
    payment: RentalPayment,
    properties: DocumentRepository[RentalProperty],
    payment_methods: PaymentMethodService,
) -> RentalPayment:
    """Resolve the property and payment method a payment refers to.

    Returns the payment with both references in canonical form.

    Raises:
        RecordValidationError: If either reference is unknown to the tenant
    """
    errors: list[str] = []
    property_id = payment.rental_property_id
    method_id = payment.payment_method_id
    try:
        property_id = (await properties.get_by_id(payment.rental_property_id)).id
    except RecordNotFoundError:
        errors.append(f"rental property {payment.rental_property_id} does not exist")
    if payment.payment_method_id is not None:
        try:
            method_id = (await payment_methods.get_available(payment.payment_method_id)).id
        except RecordNotFoundError:
            errors.append(f"payment method {payment.payment_method_id} does not exist")
    if errors:
        raise RecordValidationError(errors)
    payment.rental_property_id = property_id
    payment.payment_method_id = method_id
    return payment


@router.get("")
async def list_payments(
    repository: PaymentRepositoryDep,
    page_request: PageDep,
) -> PaginatedResponse[RentalPaymentResponse]:
    """List the tenant's rental payments, one page at a time."""
    try:
        records = await repository.get_all()
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        RentalPaymentResponse.from_domain,
    )


@router.get("/{payment_id}")
async def get_payment(
    payment_id: str,
    repository: PaymentRepositoryDep,
) -> RentalPaymentResponse:
    try:
        record = await repository.get_by_id(payment_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return RentalPaymentResponse.from_domain(record)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_payment(
    request: RentalPaymentRequest,
    session: SessionDep,
    repository: PaymentRepositoryDep,
    properties: PropertyRepositoryDep,
    payment_methods: PaymentMethodServiceDep,
) -> RentalPaymentResponse:
    """Record a rent payment against one of the tenant's properties.

    The payment method may be one of the tenant's own or a system default.

    Raises:
        HTTPException: 422 if the payment is invalid or references unknown records
    """
    try:
        async with session.begin():
            payment = await _check_references(
                request.to_domain(), properties, payment_methods
            )
            record = await repository.create(payment)
    except RecordError as e:
        raise to_http_exception(e) from e
    return RentalPaymentResponse.from_domain(record)


@router.put("/{payment_id}")
async def update_payment(
    payment_id: str,
    request: RentalPaymentRequest,
    session: SessionDep,
    repository: PaymentRepositoryDep,
    properties: PropertyRepositoryDep,
    payment_methods: PaymentMethodServiceDep,
) -> RentalPaymentResponse:
    try:
        async with session.begin():
            payment = await _check_references(
                request.to_domain(record_id=payment_id), properties, payment_methods
            )
            record = await repository.update(payment)
    except RecordError as e:
        raise to_http_exception(e) from e
    return RentalPaymentResponse.from_domain(record)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: str,
    session: SessionDep,
    repository: PaymentRepositoryDep,
) -> None:
    try:
        async with session.begin():
            await repository.delete(payment_id)
    except RecordError as e:
        raise to_http_exception(e) from e
