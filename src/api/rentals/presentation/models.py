"""Pydantic models for rentals API requests and responses.

JSON field names are camelCase on the wire; snake_case names are also
accepted on input.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rentals.domain.records import (
    PROPERTY_ENTITY_TYPE,
    Address,
    Attachment,
    LeaseDates,
    PaymentMethod,
    PropertyTransaction,
    RentalPayment,
    RentalProperty,
    TransactionCategory,
    TransactionType,
)
from shared_kernel.pagination import Page

ItemT = TypeVar("ItemT")
RecordT = TypeVar("RecordT")


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordResponse(ApiModel):
    """Fields every stored record exposes."""

    id: str = Field(..., description="Record ID (hyphenated UUID)")
    tenant_id: str = Field(..., description="Owning tenant")
    created_at: datetime
    updated_at: datetime


class PaginatedResponse(ApiModel, Generic[ItemT]):
    """One page of items with derived pagination metadata."""

    items: list[ItemT] = Field(default_factory=list)
    total_count: int
    page_number: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_page(
        cls,
        page: Page[RecordT],
        convert: Callable[[RecordT], ItemT],
    ) -> PaginatedResponse[ItemT]:
        """Build the response from a page of domain records."""
        meta = page.metadata
        return cls(
            items=[convert(item) for item in page.items],
            total_count=meta.total_count,
            page_number=meta.page_number,
            total_pages=meta.total_pages,
            has_next_page=meta.has_next_page,
            has_previous_page=meta.has_previous_page,
        )


# Payment methods


class PaymentMethodRequest(ApiModel):
    """Request model for creating or replacing a payment method."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    user_id: str | None = None

    def to_domain(self, record_id: str | None = None) -> PaymentMethod:
        return PaymentMethod(
            id=record_id,
            name=self.name,
            description=self.description,
            user_id=self.user_id,
        )


class PaymentMethodResponse(RecordResponse):
    name: str
    description: str | None
    is_system_default: bool
    user_id: str | None

    @classmethod
    def from_domain(cls, record: PaymentMethod) -> PaymentMethodResponse:
        return cls(
            id=record.id,
            tenant_id=record.tenant_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            name=record.name,
            description=record.description,
            is_system_default=record.is_system_default,
            user_id=record.user_id,
        )


# Rental properties


class AddressModel(ApiModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class LeaseDatesModel(ApiModel):
    start_date: datetime | None = None
    end_date: datetime | None = None


class RentalPropertyRequest(ApiModel):
    """Request model for creating or replacing a rental property."""

    address: AddressModel
    description: str | None = None
    weekly_rent_amount: Decimal = Decimal("0")
    lease_dates: LeaseDatesModel = Field(default_factory=LeaseDatesModel)
    property_manager: str | None = None
    property_manager_contact: str | None = None
    user_id: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    def to_domain(self, record_id: str | None = None) -> RentalProperty:
        return RentalProperty(
            id=record_id,
            address=Address(**self.address.model_dump()),
            description=self.description,
            weekly_rent_amount=self.weekly_rent_amount,
            lease_dates=LeaseDates(**self.lease_dates.model_dump()),
            property_manager=self.property_manager,
            property_manager_contact=self.property_manager_contact,
            user_id=self.user_id,
            attributes=dict(self.attributes),
        )


class RentalPropertyResponse(RecordResponse):
    address: AddressModel
    description: str | None
    weekly_rent_amount: Decimal
    lease_dates: LeaseDatesModel
    property_manager: str | None
    property_manager_contact: str | None
    user_id: str | None
    attributes: dict[str, Any]

    @classmethod
    def from_domain(cls, record: RentalProperty) -> RentalPropertyResponse:
        return cls(
            id=record.id,
            tenant_id=record.tenant_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            address=AddressModel(
                street=record.address.street,
                city=record.address.city,
                state=record.address.state,
                zip_code=record.address.zip_code,
            ),
            description=record.description,
            weekly_rent_amount=record.weekly_rent_amount,
            lease_dates=LeaseDatesModel(
                start_date=record.lease_dates.start_date,
                end_date=record.lease_dates.end_date,
            ),
            property_manager=record.property_manager,
            property_manager_contact=record.property_manager_contact,
            user_id=record.user_id,
            attributes=record.attributes,
        )


# Rental payments


class RentalPaymentRequest(ApiModel):
    """Request model for creating or replacing a rental payment."""

    rental_property_id: str = Field(..., min_length=1)
    amount: Decimal
    payment_date: datetime | None = None
    payment_method_id: str | None = None
    payment_reference: str | None = None
    notes: str | None = None

    def to_domain(self, record_id: str | None = None) -> RentalPayment:
        return RentalPayment(
            id=record_id,
            rental_property_id=self.rental_property_id,
            amount=self.amount,
            payment_date=self.payment_date,
            payment_method_id=self.payment_method_id,
            payment_reference=self.payment_reference,
            notes=self.notes,
        )


class RentalPaymentResponse(RecordResponse):
    rental_property_id: str
    amount: Decimal
    payment_date: datetime | None
    payment_method_id: str | None
    payment_reference: str | None
    notes: str | None

    @classmethod
    def from_domain(cls, record: RentalPayment) -> RentalPaymentResponse:
        return cls(
            id=record.id,
            tenant_id=record.tenant_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            rental_property_id=record.rental_property_id,
            amount=record.amount,
            payment_date=record.payment_date,
            payment_method_id=record.payment_method_id,
            payment_reference=record.payment_reference,
            notes=record.notes,
        )


# Attachments


class AttachmentRequest(ApiModel):
    """Request model for attachment metadata.

    The file itself is uploaded elsewhere; storage_path points at it.
    """

    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = ""
    storage_path: str = ""
    file_size: int = Field(default=0, ge=0)
    description: str | None = None
    entity_type: str = PROPERTY_ENTITY_TYPE
    upload_date: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    rental_property_id: str | None = None
    rental_payment_id: str | None = None

    def to_domain(self, record_id: str | None = None) -> Attachment:
        return Attachment(
            id=record_id,
            file_name=self.file_name,
            content_type=self.content_type,
            storage_path=self.storage_path,
            file_size=self.file_size,
            description=self.description,
            entity_type=self.entity_type,
            upload_date=self.upload_date,
            tags=list(self.tags),
            rental_property_id=self.rental_property_id,
            rental_payment_id=self.rental_payment_id,
        )


class AttachmentResponse(RecordResponse):
    file_name: str
    content_type: str
    storage_path: str
    file_size: int
    description: str | None
    entity_type: str
    upload_date: datetime | None
    tags: list[str]
    rental_property_id: str | None
    rental_payment_id: str | None

    @classmethod
    def from_domain(cls, record: Attachment) -> AttachmentResponse:
        return cls(
            id=record.id,
            tenant_id=record.tenant_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            file_name=record.file_name,
            content_type=record.content_type,
            storage_path=record.storage_path,
            file_size=record.file_size,
            description=record.description,
            entity_type=record.entity_type,
            upload_date=record.upload_date,
            tags=record.tags,
            rental_property_id=record.rental_property_id,
            rental_payment_id=record.rental_payment_id,
        )


# Transaction categories


class TransactionCategoryRequest(ApiModel):
    """Request model for creating or replacing a transaction category."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    transaction_type: TransactionType
    user_id: str | None = None
    order: int = Field(default=0, ge=0)

    def to_domain(self, record_id: str | None = None) -> TransactionCategory:
        return TransactionCategory(
            id=record_id,
            name=self.name,
            description=self.description,
            transaction_type=self.transaction_type,
            user_id=self.user_id,
            order=self.order,
        )


class TransactionCategoryResponse(RecordResponse):
    name: str
    description: str | None
    transaction_type: TransactionType
    is_system_default: bool
    user_id: str | None
    order: int

    @classmethod
    def from_domain(cls, record: TransactionCategory) -> TransactionCategoryResponse:
        return cls(
            id=record.id,
            tenant_id=record.tenant_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            name=record.name,
            description=record.description,
            transaction_type=record.transaction_type,
            is_system_default=record.is_system_default,
            user_id=record.user_id,
            order=record.order,
        )


# Property transactions


class PropertyTransactionRequest(ApiModel):
    """Request model for creating or replacing a ledger entry."""

    rental_property_id: str = Field(..., min_length=1)
    amount: Decimal
    transaction_date: datetime
    transaction_type: TransactionType = TransactionType.INCOME
    category_id: str = Field(..., min_length=1)
    payment_method_id: str | None = None
    reference: str | None = None
    notes: str | None = None
    attachment_ids: list[str] = Field(default_factory=list)

    def to_domain(self, record_id: str | None = None) -> PropertyTransaction:
        return PropertyTransaction(
            id=record_id,
            rental_property_id=self.rental_property_id,
            amount=self.amount,
            transaction_date=self.transaction_date,
            transaction_type=self.transaction_type,
            category_id=self.category_id,
            payment_method_id=self.payment_method_id,
            reference=self.reference,
            notes=self.notes,
            attachment_ids=list(self.attachment_ids),
        )


class PropertyTransactionResponse(RecordResponse):
    rental_property_id: str
    amount: Decimal
    transaction_date: datetime | None
    transaction_type: TransactionType
    category_id: str
    payment_method_id: str | None
    reference: str | None
    notes: str | None
    attachment_ids: list[str]

    @classmethod
    def from_domain(cls, record: PropertyTransaction) -> PropertyTransactionResponse:
        return cls(
            id=record.id,
            tenant_id=record.tenant_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            rental_property_id=record.rental_property_id,
            amount=record.amount,
            transaction_date=record.transaction_date,
            transaction_type=record.transaction_type,
            category_id=record.category_id,
            payment_method_id=record.payment_method_id,
            reference=record.reference,
            notes=record.notes,
            attachment_ids=record.attachment_ids,
        )


class LedgerTotalsResponse(ApiModel):
    """Income, expense and net sums of a property's ledger."""

    rental_property_id: str
    income: Decimal
    expenses: Decimal
    net: Decimal
