"""
Receivables-specific exceptions for ledger and payment operations.

This module provides a hierarchy of exceptions for the reconciliation
engine, inheriting from the core exception base classes for API
consistency.

Exception Hierarchy:
    ReceivablesError (base)
    ├── InvalidAccount (NotFoundError) - Account id does not resolve
    ├── InvoiceNotFound (NotFoundError) - Invoice id does not resolve
    ├── InvalidAmount (ValidationError) - Non-positive or imprecise amount
    ├── InvalidPaymentMode (ValidationError) - Mode outside the enumeration
    └── DataIntegrityFault - Payment linked to an invoice outside the account

    LockAcquisitionError (ConflictError) - Per-invoice write lock contention

Usage:
    from receivables.exceptions import InvoiceNotFound, InvalidAmount

    try:
        recorder.record_payment(invoice_id, amount, ...)
    except InvalidAmount as e:
        return Response(e.to_dict(), status=400)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from typing import Any


class ReceivablesError(BaseApplicationError):
    """
    Base exception for all receivables operations.

    Every exception raised by the builder, aggregator and recorder can be
    caught with this class. The NotFound/Validation subclasses also match
    their core counterparts so views can map them to HTTP statuses.
    """

    default_error_code: str = "RECEIVABLES_ERROR"


class InvalidAccount(ReceivablesError, NotFoundError):
    """
    Raised when an account id does not resolve.

    Example:
        raise InvalidAccount(
            f"Account {account_id} not found",
            details={"account_id": str(account_id)},
        )
    """

    default_error_code: str = "INVALID_ACCOUNT"


class InvoiceNotFound(ReceivablesError, NotFoundError):
    """Raised when a payment references an invoice that does not exist."""

    default_error_code: str = "INVOICE_NOT_FOUND"


class InvalidAmount(ReceivablesError, ValidationError):
    """
    Raised when a payment amount is rejected.

    Use for:
    - Zero or negative amounts
    - Floats (which cannot carry exact cents)
    - Amounts with more than two decimal places
    """

    default_error_code: str = "INVALID_AMOUNT"


class InvalidPaymentMode(ReceivablesError, ValidationError):
    """Raised when a payment mode is not one of PaymentMode's values."""

    default_error_code: str = "INVALID_PAYMENT_MODE"


class DataIntegrityFault(ReceivablesError):
    """
    Raised when a payment points at an invoice outside the account.

    This indicates upstream corruption. The builder raises instead of
    dropping the payment, which would silently corrupt running balances.

    Attributes:
        payment_id: The offending payment
        invoice_id: The invoice id it references
    """

    default_error_code: str = "DATA_INTEGRITY_FAULT"

    def __init__(
        self,
        payment_id: Any,
        invoice_id: Any,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.payment_id = payment_id
        self.invoice_id = invoice_id

        full_details = {
            "payment_id": str(payment_id),
            "invoice_id": str(invoice_id),
        }
        if details:
            full_details.update(details)

        super().__init__(
            message=(
                f"Payment {payment_id} references invoice {invoice_id} "
                f"which does not belong to the account being reconciled"
            ),
            error_code=error_code,
            details=full_details,
        )


class LockAcquisitionError(ConflictError):
    """
    Raised when a distributed lock cannot be acquired.

    Another process is recording a payment against the same invoice and
    did not finish within the timeout. Maps to HTTP 409.
    """

    default_error_code: str = "LOCK_ACQUISITION_FAILED"
