"""Record serialization between domain dataclasses and document rows.

Bodies are JSON-compatible: Decimal and datetime values are stored as
strings and restored to their declared types on read.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter

from rentals.domain.records import BaseRecord
from rentals.infrastructure.models import DocumentModel

RecordT = TypeVar("RecordT", bound=BaseRecord)

COLUMN_FIELDS = frozenset({"id", "tenant_id", "created_at", "updated_at"})


class RecordSerializer(Generic[RecordT]):
    """Converts one record type to and from DocumentModel rows."""

    def __init__(self, record_type: type[RecordT]) -> None:
        self._record_type = record_type
        self._adapter: TypeAdapter[RecordT] = TypeAdapter(record_type)

    def to_body(self, record: RecordT) -> dict[str, Any]:
        """Serialize the non-column fields of a record."""
        return self._adapter.dump_python(record, mode="json", exclude=set(COLUMN_FIELDS))

    def to_model(self, record: RecordT) -> DocumentModel:
        """Build a new row from a fully stamped record."""
        return DocumentModel(
            id=record.id,
            collection=self._record_type.collection,
            tenant_id=record.tenant_id,
            natural_key=record.natural_key(),
            body=self.to_body(record),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def apply(self, record: RecordT, model: DocumentModel) -> None:
        """Copy the mutable parts of a record onto an existing row.

        The id, tenant and creation timestamp of the row are left alone.
        """
        model.body = self.to_body(record)
        model.natural_key = record.natural_key()
        model.updated_at = record.updated_at

    def to_record(self, model: DocumentModel) -> RecordT:
        """Rebuild a record from a row."""
        data = {
            **model.body,
            "id": model.id,
            "tenant_id": model.tenant_id,
            "created_at": model.created_at,
            "updated_at": model.updated_at,
        }
        return self._adapter.validate_python(data)
