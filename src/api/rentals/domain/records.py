"""Record types stored through the tenant-scoped repository.

Every record carries an identifier, a tenant identifier and creation /
modification timestamps. The repository assigns the identifier and the
timestamps; the tenant identifier comes from the repository's bound tenant
and never changes afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, ClassVar

from rentals.domain.exceptions import RecordValidationError

PROPERTY_ENTITY_TYPE = "Property"
PAYMENT_ENTITY_TYPE = "Payment"


@dataclass(kw_only=True)
class BaseRecord:
    """Fields shared by every stored record.

    Subclasses set ``collection`` (the storage collection name) and
    ``queryable_fields`` (top-level string fields usable with find_by),
    and extend ``validate`` and ``natural_key`` as needed.
    """

    collection: ClassVar[str] = ""
    queryable_fields: ClassVar[frozenset[str]] = frozenset()

    id: str | None = None
    tenant_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def validation_errors(self) -> list[str]:
        """Return the list of failed validation rules (empty when valid)."""
        return []

    def validate(self) -> None:
        """Validate the record.

        Raises:
            RecordValidationError: If any rule fails
        """
        errors = self.validation_errors()
        if errors:
            raise RecordValidationError(errors)

    def natural_key(self) -> str | None:
        """Key that must be unique per collection and tenant, or None."""
        return None


@dataclass(kw_only=True)
class PaymentMethod(BaseRecord):
    """A way of paying rent (bank transfer, cash, ...).

    System defaults live under the system tenant and are unique by name.
    """

    collection: ClassVar[str] = "payment_methods"
    queryable_fields: ClassVar[frozenset[str]] = frozenset({"name", "user_id"})

    name: str = ""
    description: str | None = None
    is_system_default: bool = False
    user_id: str | None = None

    def validation_errors(self) -> list[str]:
        errors = super().validation_errors()
        if not self.name.strip():
            errors.append("name is required")
        return errors

    def natural_key(self) -> str | None:
        if not self.is_system_default:
            return None
        return self.name.strip().casefold()


@dataclass(kw_only=True)
class Address:
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


@dataclass(kw_only=True)
class LeaseDates:
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(kw_only=True)
class RentalProperty(BaseRecord):
    """A rented property and its lease terms."""

    collection: ClassVar[str] = "rental_properties"
    queryable_fields: ClassVar[frozenset[str]] = frozenset({"user_id"})

    address: Address = field(default_factory=Address)
    description: str | None = None
    weekly_rent_amount: Decimal = Decimal("0")
    lease_dates: LeaseDates = field(default_factory=LeaseDates)
    property_manager: str | None = None
    property_manager_contact: str | None = None
    user_id: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def validation_errors(self) -> list[str]:
        errors = super().validation_errors()
        if not self.address.street.strip():
            errors.append("address.street is required")
        if self.weekly_rent_amount < 0:
            errors.append("weekly_rent_amount must not be negative")
        start, end = self.lease_dates.start_date, self.lease_dates.end_date
        if start is not None and end is not None and end < start:
            errors.append("lease_dates.end_date must not precede start_date")
        return errors


@dataclass(kw_only=True)
class RentalPayment(BaseRecord):
    """A rent payment made against a property."""

    collection: ClassVar[str] = "rental_payments"
    queryable_fields: ClassVar[frozenset[str]] = frozenset(
        {"rental_property_id", "payment_method_id"}
    )

    rental_property_id: str = ""
    amount: Decimal = Decimal("0")
    payment_date: datetime | None = None
    payment_method_id: str | None = None
    payment_reference: str | None = None
    notes: str | None = None

    def validation_errors(self) -> list[str]:
        errors = super().validation_errors()
        if not self.rental_property_id.strip():
            errors.append("rental_property_id is required")
        if self.amount <= 0:
            errors.append("amount must be greater than zero")
        return errors


@dataclass(kw_only=True)
class Attachment(BaseRecord):
    """Metadata for a file attached to a property or a payment.

    The file content itself is stored elsewhere; only its location is kept.
    """

    collection: ClassVar[str] = "attachments"
    queryable_fields: ClassVar[frozenset[str]] = frozenset(
        {"rental_property_id", "rental_payment_id", "entity_type"}
    )

    file_name: str = ""
    content_type: str = ""
    storage_path: str = ""
    file_size: int = 0
    description: str | None = None
    entity_type: str = PROPERTY_ENTITY_TYPE
    upload_date: datetime | None = None
    tags: list[str] = field(default_factory=list)
    rental_property_id: str | None = None
    rental_payment_id: str | None = None

    def validation_errors(self) -> list[str]:
        errors = super().validation_errors()
        if not self.file_name.strip():
            errors.append("file_name is required")
        if self.file_size < 0:
            errors.append("file_size must not be negative")
        if self.entity_type == PROPERTY_ENTITY_TYPE:
            if not self.rental_property_id:
                errors.append("rental_property_id is required for Property attachments")
        elif self.entity_type == PAYMENT_ENTITY_TYPE:
            if not self.rental_payment_id:
                errors.append("rental_payment_id is required for Payment attachments")
        else:
            errors.append(
                f"entity_type must be '{PROPERTY_ENTITY_TYPE}' or '{PAYMENT_ENTITY_TYPE}'"
            )
        return errors


class TransactionType(StrEnum):
    """Direction of money in the property ledger."""

    INCOME = "Income"
    EXPENSE = "Expense"


@dataclass(kw_only=True)
class TransactionCategory(BaseRecord):
    """A ledger category such as rent, deposit or repairs.

    Like payment methods, categories are either owned by a tenant or
    shared system defaults, and the defaults are unique by name.
    """

    collection: ClassVar[str] = "transaction_categories"
    queryable_fields: ClassVar[frozenset[str]] = frozenset(
        {"name", "transaction_type", "user_id"}
    )

    name: str = ""
    description: str | None = None
    transaction_type: TransactionType = TransactionType.INCOME
    is_system_default: bool = False
    user_id: str | None = None
    order: int = 0

    def validation_errors(self) -> list[str]:
        errors = super().validation_errors()
        if not self.name.strip():
            errors.append("name is required")
        if self.order < 0:
            errors.append("order must not be negative")
        return errors

    def natural_key(self) -> str | None:
        if not self.is_system_default:
            return None
        return self.name.strip().casefold()


@dataclass(kw_only=True)
class PropertyTransaction(BaseRecord):
    """An income or expense entry in a property's ledger."""

    collection: ClassVar[str] = "property_transactions"
    queryable_fields: ClassVar[frozenset[str]] = frozenset(
        {"rental_property_id", "category_id", "transaction_type", "payment_method_id"}
    )

    rental_property_id: str = ""
    amount: Decimal = Decimal("0")
    transaction_date: datetime | None = None
    transaction_type: TransactionType = TransactionType.INCOME
    category_id: str = ""
    payment_method_id: str | None = None
    reference: str | None = None
    notes: str | None = None
    attachment_ids: list[str] = field(default_factory=list)

    def validation_errors(self) -> list[str]:
        errors = super().validation_errors()
        if not self.rental_property_id.strip():
            errors.append("rental_property_id is required")
        if not self.category_id.strip():
            errors.append("category_id is required")
        if self.amount <= 0:
            errors.append("amount must be greater than zero")
        if self.transaction_date is None:
            errors.append("transaction_date is required")
        return errors


RECORD_TYPES: dict[str, type[BaseRecord]] = {
    record_type.collection: record_type
    for record_type in (
        PaymentMethod,
        RentalProperty,
        RentalPayment,
        Attachment,
        TransactionCategory,
        PropertyTransaction,
    )
}
