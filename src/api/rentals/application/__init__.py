"""Application services for the rentals bounded context."""

from rentals.application.payment_method_service import PaymentMethodService
from rentals.application.property_transaction_service import (
    LedgerTotals,
    PropertyTransactionService,
)
from rentals.application.seeding import (
    DEFAULT_PAYMENT_METHODS,
    DefaultDataSeeder,
    SeedDescriptor,
)
from rentals.application.shared_records import SharedRecordService
from rentals.application.transaction_category_service import (
    TransactionCategoryService,
)

__all__ = [
    "DEFAULT_PAYMENT_METHODS",
    "DefaultDataSeeder",
    "LedgerTotals",
    "PaymentMethodService",
    "PropertyTransactionService",
    "SeedDescriptor",
    "SharedRecordService",
    "TransactionCategoryService",
]
