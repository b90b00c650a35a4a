"""Property ledger: income and expense transactions against properties.

A transaction must point at one of the tenant's properties and at a
category the tenant can see (its own or a system default) whose type
matches the transaction's type. The payment method, when given, follows
the same tenant-or-system rule.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from decimal import Decimal

from rentals.application.payment_method_service import PaymentMethodService
from rentals.application.transaction_category_service import (
    TransactionCategoryService,
)
from rentals.domain.exceptions import RecordValidationError
from rentals.domain.records import PropertyTransaction, RentalProperty, TransactionType
from rentals.ports.exceptions import RecordNotFoundError
from rentals.ports.repositories import ITenantRepository


@dataclass(frozen=True)
class LedgerTotals:
    """Income and expense sums for one property."""

    rental_property_id: str
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


class PropertyTransactionService:
    """Records and queries ledger entries for the tenant's properties."""

    def __init__(
        self,
        transactions: ITenantRepository[PropertyTransaction],
        properties: ITenantRepository[RentalProperty],
        categories: TransactionCategoryService,
        payment_methods: PaymentMethodService,
    ):
        self._transactions = transactions
        self._properties = properties
        self._categories = categories
        self._payment_methods = payment_methods

    async def list_for_property(self, property_id: str) -> list[PropertyTransaction]:
        """Return the ledger of one property in insertion order.

        Raises:
            RecordNotFoundError: If the tenant has no such property
        """
        rental_property = await self._properties.get_by_id(property_id)
        return await self._transactions.find_by(rental_property_id=rental_property.id)

    async def create(self, transaction: PropertyTransaction) -> PropertyTransaction:
        """Check the references of a transaction and store it.

        Raises:
            RecordValidationError: If the transaction is invalid or refers to
                records the tenant cannot see
        """
        resolved = await self._resolve(transaction)
        return await self._transactions.create(resolved)

    async def create_many(
        self, transactions: list[PropertyTransaction]
    ) -> list[PropertyTransaction]:
        """Store several transactions after checking all of them.

        Nothing is written when any transaction fails its checks.

        Raises:
            RecordValidationError: If the list is empty or any entry is invalid
        """
        if not transactions:
            raise RecordValidationError(["at least one transaction is required"])
        resolved = [await self._resolve(t) for t in transactions]
        return [await self._transactions.create(t) for t in resolved]

    async def update(self, transaction: PropertyTransaction) -> PropertyTransaction:
        """Check the references of a transaction and replace the stored one.

        Raises:
            RecordNotFoundError: If the tenant has no such transaction
            RecordValidationError: If the transaction is invalid or refers to
                records the tenant cannot see
        """
        resolved = await self._resolve(transaction)
        return await self._transactions.update(resolved)

    async def totals_for_property(self, property_id: str) -> LedgerTotals:
        """Sum the income and expenses recorded against a property.

        Raises:
            RecordNotFoundError: If the tenant has no such property
        """
        rental_property = await self._properties.get_by_id(property_id)
        ledger = await self._transactions.find_by(
            rental_property_id=rental_property.id
        )
        income = sum(
            (t.amount for t in ledger if t.transaction_type == TransactionType.INCOME),
            Decimal("0"),
        )
        expenses = sum(
            (t.amount for t in ledger if t.transaction_type == TransactionType.EXPENSE),
            Decimal("0"),
        )
        return LedgerTotals(
            rental_property_id=rental_property.id,
            income=income,
            expenses=expenses,
        )

    async def _resolve(self, transaction: PropertyTransaction) -> PropertyTransaction:
        """Validate a transaction and canonicalize the ids it refers to."""
        transaction.validate()

        errors: list[str] = []
        property_id = transaction.rental_property_id
        category_id = transaction.category_id
        method_id = transaction.payment_method_id

        try:
            property_id = (await self._properties.get_by_id(property_id)).id
        except RecordNotFoundError:
            errors.append(f"rental property {property_id} does not exist")

        try:
            category = await self._categories.get_available(category_id)
        except RecordNotFoundError:
            errors.append(f"transaction category {category_id} does not exist")
        else:
            category_id = category.id
            if category.transaction_type != transaction.transaction_type:
                errors.append(
                    f"category {category.name!r} is for "
                    f"{category.transaction_type.value} transactions"
                )

        if method_id is not None:
            try:
                method_id = (await self._payment_methods.get_available(method_id)).id
            except RecordNotFoundError:
                errors.append(f"payment method {method_id} does not exist")

        if errors:
            raise RecordValidationError(errors)
        return dataclasses.replace(
            transaction,
            rental_property_id=property_id,
            category_id=category_id,
            payment_method_id=method_id,
        )
