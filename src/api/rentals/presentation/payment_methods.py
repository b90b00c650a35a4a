"""HTTP routes for payment methods.

Reads include the system defaults; writes only ever touch the tenant's
own payment methods, so a default cannot be changed or removed here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from rentals.application.payment_method_service import PaymentMethodService
from rentals.dependencies import (
    PageDep,
    SessionDep,
    get_payment_method_repository,
    get_payment_method_service,
)
from rentals.domain.exceptions import RecordError
from rentals.domain.records import PaymentMethod
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.presentation.errors import to_http_exception
from rentals.presentation.models import (
    PaginatedResponse,
    PaymentMethodRequest,
    PaymentMethodResponse,
)
from shared_kernel.pagination import Page

router = APIRouter(
    prefix="/payment-methods",
    tags=["payment-methods"],
)

PaymentMethodRepositoryDep = Annotated[
    DocumentRepository[PaymentMethod], Depends(get_payment_method_repository)
]
PaymentMethodServiceDep = Annotated[
    PaymentMethodService, Depends(get_payment_method_service)
]


@router.get("")
async def list_payment_methods(
    service: PaymentMethodServiceDep,
    page_request: PageDep,
) -> PaginatedResponse[PaymentMethodResponse]:
    """List the tenant's payment methods followed by the system defaults."""
    try:
        records = await service.list_available()
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        PaymentMethodResponse.from_domain,
    )


@router.get("/{method_id}")
async def get_payment_method(
    method_id: str,
    service: PaymentMethodServiceDep,
) -> PaymentMethodResponse:
    """Get one of the tenant's payment methods or a system default."""
    try:
        record = await service.get_available(method_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaymentMethodResponse.from_domain(record)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_payment_method(
    request: PaymentMethodRequest,
    session: SessionDep,
    repository: PaymentMethodRepositoryDep,
) -> PaymentMethodResponse:
    try:
        async with session.begin():
            record = await repository.create(request.to_domain())
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaymentMethodResponse.from_domain(record)


@router.put("/{method_id}")
async def update_payment_method(
    method_id: str,
    request: PaymentMethodRequest,
    session: SessionDep,
    repository: PaymentMethodRepositoryDep,
) -> PaymentMethodResponse:
    """Replace one of the tenant's payment methods.

    Raises:
        HTTPException: 404 if the tenant does not own the payment method
    """
    try:
        async with session.begin():
            record = await repository.update(request.to_domain(record_id=method_id))
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaymentMethodResponse.from_domain(record)


@router.delete("/{method_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment_method(
    method_id: str,
    session: SessionDep,
    repository: PaymentMethodRepositoryDep,
) -> None:
    try:
        async with session.begin():
            await repository.delete(method_id)
    except RecordError as e:
        raise to_http_exception(e) from e
