"""HTTP presentation layer for the rentals bounded context."""

from fastapi import APIRouter

from rentals.presentation import (
    attachments,
    payment_methods,
    payments,
    properties,
    transaction_categories,
    transactions,
)

router = APIRouter()
router.include_router(properties.router)
router.include_router(payments.router)
router.include_router(payment_methods.router)
router.include_router(attachments.router)
router.include_router(transaction_categories.router)
router.include_router(transactions.router)

__all__ = ["router"]
