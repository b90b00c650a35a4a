"""Transaction category lookups that include the shared system defaults."""

from __future__ import annotations

from rentals.application.shared_records import SharedRecordService
from rentals.domain.records import TransactionCategory, TransactionType


class TransactionCategoryService(SharedRecordService[TransactionCategory]):
    """Combines a tenant's transaction categories with the system defaults."""

    async def list_by_type(
        self, transaction_type: TransactionType
    ) -> list[TransactionCategory]:
        """Return the available categories of one type, ordered by ``order``.

        Categories with the same order keep the tenant-then-system order
        of list_available.
        """
        categories = await self.list_available()
        matching = [c for c in categories if c.transaction_type == transaction_type]
        return sorted(matching, key=lambda c: c.order)
