"""HTTP routes for ledger transaction categories.

Reads include the system defaults; writes only ever touch the tenant's
own categories.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from rentals.application.transaction_category_service import (
    TransactionCategoryService,
)
from rentals.dependencies import (
    PageDep,
    SessionDep,
    get_transaction_category_repository,
    get_transaction_category_service,
)
from rentals.domain.exceptions import RecordError
from rentals.domain.records import TransactionCategory, TransactionType
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.presentation.errors import to_http_exception
from rentals.presentation.models import (
    PaginatedResponse,
    TransactionCategoryRequest,
    TransactionCategoryResponse,
)
from shared_kernel.pagination import Page

router = APIRouter(
    prefix="/transaction-categories",
    tags=["transaction-categories"],
)

CategoryRepositoryDep = Annotated[
    DocumentRepository[TransactionCategory],
    Depends(get_transaction_category_repository),
]
CategoryServiceDep = Annotated[
    TransactionCategoryService, Depends(get_transaction_category_service)
]


@router.get("")
async def list_transaction_categories(
    service: CategoryServiceDep,
    page_request: PageDep,
    transaction_type: Annotated[
        TransactionType | None, Query(alias="transactionType")
    ] = None,
) -> PaginatedResponse[TransactionCategoryResponse]:
    """List the tenant's categories followed by the system defaults.

    With transactionType, only categories of that type are listed, ordered
    by their display order.
    """
    try:
        if transaction_type is None:
            records = await service.list_available()
        else:
            records = await service.list_by_type(transaction_type)
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        TransactionCategoryResponse.from_domain,
    )


@router.get("/{category_id}")
async def get_transaction_category(
    category_id: str,
    service: CategoryServiceDep,
) -> TransactionCategoryResponse:
    try:
        record = await service.get_available(category_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return TransactionCategoryResponse.from_domain(record)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction_category(
    request: TransactionCategoryRequest,
    session: SessionDep,
    repository: CategoryRepositoryDep,
) -> TransactionCategoryResponse:
    try:
        async with session.begin():
            record = await repository.create(request.to_domain())
    except RecordError as e:
        raise to_http_exception(e) from e
    return TransactionCategoryResponse.from_domain(record)


@router.put("/{category_id}")
async def update_transaction_category(
    category_id: str,
    request: TransactionCategoryRequest,
    session: SessionDep,
    repository: CategoryRepositoryDep,
) -> TransactionCategoryResponse:
    """Replace one of the tenant's categories.

    Raises:
        HTTPException: 404 if the tenant does not own the category
    """
    try:
        async with session.begin():
            record = await repository.update(request.to_domain(record_id=category_id))
    except RecordError as e:
        raise to_http_exception(e) from e
    return TransactionCategoryResponse.from_domain(record)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_category(
    category_id: str,
    session: SessionDep,
    repository: CategoryRepositoryDep,
) -> None:
    try:
        async with session.begin():
            await repository.delete(category_id)
    except RecordError as e:
        raise to_http_exception(e) from e
