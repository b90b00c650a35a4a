"""create documents table

Revision ID: 4f1c2a9e7b30
Revises:
Create Date: 2026-10-17 09:12:44.502113

Creates the shared documents table holding every record collection.
The unique constraint on (collection, tenant_id, natural_key) lets the
database reject a second copy of a system default payment method when two
instances seed at the same time.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "4f1c2a9e7b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create documents table with its lookup index and natural-key constraint."""
    op.create_table(
        "documents",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("collection", sa.String(64), nullable=False),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column("natural_key", sa.String(255), nullable=True),
        sa.Column("body", postgresql.JSONB(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
        ),
        sa.UniqueConstraint(
            "collection",
            "tenant_id",
            "natural_key",
            name="uq_documents_collection_tenant_natural_key",
        ),
    )
    op.create_index(
        "ix_documents_collection_tenant",
        "documents",
        ["collection", "tenant_id"],
    )


def downgrade() -> None:
    """Drop documents table."""
    op.drop_index("ix_documents_collection_tenant", table_name="documents")
    op.drop_table("documents")
