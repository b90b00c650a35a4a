"""HTTP routes for the property ledger."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from rentals.application.property_transaction_service import (
    PropertyTransactionService,
)
from rentals.dependencies import (
    PageDep,
    SessionDep,
    get_property_transaction_service,
    get_transaction_repository,
)
from rentals.domain.exceptions import RecordError
from rentals.domain.records import PropertyTransaction, TransactionType
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.presentation.errors import to_http_exception
from rentals.presentation.models import (
    PaginatedResponse,
    PropertyTransactionRequest,
    PropertyTransactionResponse,
)
from shared_kernel.pagination import Page

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
)

TransactionRepositoryDep = Annotated[
    DocumentRepository[PropertyTransaction], Depends(get_transaction_repository)
]
TransactionServiceDep = Annotated[
    PropertyTransactionService, Depends(get_property_transaction_service)
]


@router.get("")
async def list_transactions(
    repository: TransactionRepositoryDep,
    page_request: PageDep,
    transaction_type: Annotated[
        TransactionType | None, Query(alias="transactionType")
    ] = None,
    category_id: Annotated[str | None, Query(alias="categoryId")] = None,
) -> PaginatedResponse[PropertyTransactionResponse]:
    """List the tenant's ledger entries, optionally filtered by type or category."""
    filters: dict[str, str] = {}
    if transaction_type is not None:
        filters["transaction_type"] = transaction_type.value
    if category_id is not None:
        filters["category_id"] = category_id
    try:
        if filters:
            records = await repository.find_by(**filters)
        else:
            records = await repository.get_all()
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        PropertyTransactionResponse.from_domain,
    )


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    repository: TransactionRepositoryDep,
) -> PropertyTransactionResponse:
    try:
        record = await repository.get_by_id(transaction_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return PropertyTransactionResponse.from_domain(record)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    request: PropertyTransactionRequest,
    session: SessionDep,
    service: TransactionServiceDep,
) -> PropertyTransactionResponse:
    """Record an income or expense entry against one of the tenant's properties.

    Raises:
        HTTPException: 422 if the entry is invalid, refers to unknown records
            or uses a category of the other transaction type
    """
    try:
        async with session.begin():
            record = await service.create(request.to_domain())
    except RecordError as e:
        raise to_http_exception(e) from e
    return PropertyTransactionResponse.from_domain(record)


@router.post("/batch", status_code=status.HTTP_201_CREATED)
async def create_transactions(
    requests: list[PropertyTransactionRequest],
    session: SessionDep,
    service: TransactionServiceDep,
) -> list[PropertyTransactionResponse]:
    """Record several entries at once; none are stored if any is rejected."""
    try:
        async with session.begin():
            records = await service.create_many([r.to_domain() for r in requests])
    except RecordError as e:
        raise to_http_exception(e) from e
    return [PropertyTransactionResponse.from_domain(r) for r in records]


@router.put("/{transaction_id}")
async def update_transaction(
    transaction_id: str,
    request: PropertyTransactionRequest,
    session: SessionDep,
    service: TransactionServiceDep,
) -> PropertyTransactionResponse:
    try:
        async with session.begin():
            record = await service.update(request.to_domain(record_id=transaction_id))
    except RecordError as e:
        raise to_http_exception(e) from e
    return PropertyTransactionResponse.from_domain(record)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: str,
    session: SessionDep,
    repository: TransactionRepositoryDep,
) -> None:
    try:
        async with session.begin():
            await repository.delete(transaction_id)
    except RecordError as e:
        raise to_http_exception(e) from e
