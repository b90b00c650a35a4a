"""Payment method lookups that include the shared system defaults."""

from __future__ import annotations

from rentals.application.shared_records import SharedRecordService
from rentals.domain.records import PaymentMethod


class PaymentMethodService(SharedRecordService[PaymentMethod]):
    """Combines a tenant's payment methods with the system defaults."""
