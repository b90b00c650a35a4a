"""Domain layer for the rentals bounded context."""

from rentals.domain.exceptions import RecordError, RecordValidationError
from rentals.domain.records import (
    PAYMENT_ENTITY_TYPE,
    PROPERTY_ENTITY_TYPE,
    RECORD_TYPES,
    Address,
    Attachment,
    BaseRecord,
    LeaseDates,
    PaymentMethod,
    PropertyTransaction,
    RentalPayment,
    RentalProperty,
    TransactionCategory,
    TransactionType,
)

__all__ = [
    "PAYMENT_ENTITY_TYPE",
    "PROPERTY_ENTITY_TYPE",
    "RECORD_TYPES",
    "Address",
    "Attachment",
    "BaseRecord",
    "LeaseDates",
    "PaymentMethod",
    "PropertyTransaction",
    "RecordError",
    "RecordValidationError",
    "RentalPayment",
    "RentalProperty",
    "TransactionCategory",
    "TransactionType",
]
