"""HTTP routes for attachment metadata."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from rentals.dependencies import PageDep, SessionDep, get_attachment_repository
from rentals.domain.exceptions import RecordError
from rentals.domain.records import Attachment
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.presentation.errors import to_http_exception
from rentals.presentation.models import (
    AttachmentRequest,
    AttachmentResponse,
    PaginatedResponse,
)
from shared_kernel.pagination import Page

router = APIRouter(
    prefix="/attachments",
    tags=["attachments"],
)

AttachmentRepositoryDep = Annotated[
    DocumentRepository[Attachment], Depends(get_attachment_repository)
]


@router.get("")
async def list_attachments(
    repository: AttachmentRepositoryDep,
    page_request: PageDep,
    entity_type: Annotated[str | None, Query(alias="entityType")] = None,
) -> PaginatedResponse[AttachmentResponse]:
    """List the tenant's attachments, optionally for one entity type."""
    try:
        if entity_type is None:
            records = await repository.get_all()
        else:
            records = await repository.find_by(entity_type=entity_type)
    except RecordError as e:
        raise to_http_exception(e) from e
    return PaginatedResponse.from_page(
        Page.from_sequence(records, page_request),
        AttachmentResponse.from_domain,
    )


@router.get("/{attachment_id}")
async def get_attachment(
    attachment_id: str,
    repository: AttachmentRepositoryDep,
) -> AttachmentResponse:
    try:
        record = await repository.get_by_id(attachment_id)
    except RecordError as e:
        raise to_http_exception(e) from e
    return AttachmentResponse.from_domain(record)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_attachment(
    request: AttachmentRequest,
    session: SessionDep,
    repository: AttachmentRepositoryDep,
) -> AttachmentResponse:
    """Store metadata for an uploaded file.

    Raises:
        HTTPException: 422 if the entity type does not match the linked ids
    """
    try:
        async with session.begin():
            record = await repository.create(request.to_domain())
    except RecordError as e:
        raise to_http_exception(e) from e
    return AttachmentResponse.from_domain(record)


@router.put("/{attachment_id}")
async def update_attachment(
    attachment_id: str,
    request: AttachmentRequest,
    session: SessionDep,
    repository: AttachmentRepositoryDep,
) -> AttachmentResponse:
    try:
        async with session.begin():
            record = await repository.update(request.to_domain(record_id=attachment_id))
    except RecordError as e:
        raise to_http_exception(e) from e
    return AttachmentResponse.from_domain(record)


@router.delete("/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attachment(
    attachment_id: str,
    session: SessionDep,
    repository: AttachmentRepositoryDep,
) -> None:
    try:
        async with session.begin():
            await repository.delete(attachment_id)
    except RecordError as e:
        raise to_http_exception(e) from e
