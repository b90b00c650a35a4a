"""SQLAlchemy ORM models for the rentals bounded context.

All record collections share one document table. Fields every record has
(id, tenant, timestamps) are real columns; the rest of the record lives in
the JSON body.
"""

from typing import Any

from sqlalchemy import JSON, Index, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class DocumentModel(Base, TimestampMixin):
    """ORM model for the documents table.

    ``natural_key`` is NULL for ordinary records. Record types that must be
    unique per tenant (system default payment methods) fill it in, and the
    unique constraint makes the database reject duplicates.
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_collection_tenant", "collection", "tenant_id"),
        UniqueConstraint(
            "collection",
            "tenant_id",
            "natural_key",
            name="uq_documents_collection_tenant_natural_key",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection: Mapped[str] = mapped_column(String(64), nullable=False)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    natural_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    body: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<DocumentModel(id={self.id}, collection={self.collection}, "
            f"tenant_id={self.tenant_id})>"
        )
