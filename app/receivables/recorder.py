"""
Payment recorder: validate and append a payment against an invoice.

Guarantees:
    - Inputs are validated before anything is locked or written
    - Writes to one invoice are serialized (Redis lock + row lock)
    - The payment row, the invoice's paid_amount and its advisory
      payment_status commit together or not at all
    - The account's cached ledger is dropped after commit

Overpayment is accepted. It is logged at WARNING and announced through
the invoice_overpaid signal so collections can review it.

Usage:
    from receivables.recorder import record_payment

    payment = record_payment(
        invoice_id=invoice.id,
        amount=Decimal("4000.00"),
        payment_date=date(2026, 1, 10),
        payment_mode=PaymentMode.CHEQUE,
        reference_number="CHQ-0042",
    )
"""

from __future__ import annotations

import datetime
import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from django.db import transaction

from core.exceptions import ValidationError

from .exceptions import InvalidAmount, InvalidPaymentMode, InvoiceNotFound
from .locks import invoice_lock
from .models import Invoice, Payment, PaymentMode, PaymentStatus
from .signals import invoice_overpaid, payment_recorded

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Largest value a max_digits=14, decimal_places=2 column holds
MAX_AMOUNT = Decimal("999999999999.99")


def normalize_amount(amount: Any) -> Decimal:
    """
    Validate a payment amount and return it as a two-place Decimal.

    Raises:
        InvalidAmount: For floats, non-numeric values, non-finite values,
            amounts <= 0 or above MAX_AMOUNT, or more than two decimal
            places
    """
    if isinstance(amount, (float, bool)):
        raise InvalidAmount(
            "Amount must be a decimal value, not a float",
            details={"amount": repr(amount)},
        )
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidAmount(
            f"Amount {amount!r} is not a number",
            details={"amount": repr(amount)},
        )
    if not value.is_finite():
        raise InvalidAmount(
            f"Amount {amount!r} is not a finite number",
            details={"amount": repr(amount)},
        )
    if value <= 0:
        raise InvalidAmount(
            f"Amount must be positive, got {value}",
            details={"amount": str(value)},
        )
    if value > MAX_AMOUNT:
        raise InvalidAmount(
            f"Amount {value} exceeds the maximum of {MAX_AMOUNT}",
            details={"amount": str(value), "max_amount": str(MAX_AMOUNT)},
        )
    if value != value.quantize(CENT):
        raise InvalidAmount(
            f"Amount {value} has more than two decimal places",
            details={"amount": str(value)},
        )
    return value.quantize(CENT)


def normalize_payment_mode(payment_mode: Any) -> str:
    if payment_mode not in PaymentMode.values:
        raise InvalidPaymentMode(
            f"Unknown payment mode {payment_mode!r}",
            details={
                "payment_mode": str(payment_mode),
                "allowed": list(PaymentMode.values),
            },
        )
    return str(payment_mode)


def normalize_payment_date(payment_date: Any) -> datetime.date:
    if isinstance(payment_date, datetime.datetime):
        return payment_date.date()
    if not isinstance(payment_date, datetime.date):
        raise ValidationError(
            "payment_date must be a date",
            error_code="INVALID_PAYMENT_DATE",
            details={"payment_date": repr(payment_date)},
        )
    return payment_date


def parse_invoice_id(invoice_id: Any) -> uuid.UUID:
    try:
        return uuid.UUID(str(invoice_id))
    except ValueError:
        raise InvoiceNotFound(
            f"Invoice {invoice_id} not found",
            details={"invoice_id": str(invoice_id)},
        )


def _status_for(invoice: Invoice, paid: Decimal) -> str:
    if paid >= invoice.total_amount:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL


def _after_commit(payment: Payment, invoice: Invoice) -> None:
    payment_recorded.send(sender=Payment, payment=payment, invoice=invoice)

    excess = invoice.paid_amount - invoice.total_amount
    if excess > 0:
        invoice_overpaid.send(
            sender=Invoice,
            invoice=invoice,
            paid_amount=invoice.paid_amount,
            excess=excess,
        )


def record_payment(
    invoice_id: Any,
    amount: Any,
    payment_date: Any,
    payment_mode: Any,
    reference_number: str | None = None,
    created_by: str | None = None,
) -> Payment:
    """
    Record a payment against an invoice.

    Args:
        invoice_id: UUID (or UUID string) of the invoice being paid
        amount: Positive Decimal/int/str with at most two decimal places
        payment_date: Date the payment was received
        payment_mode: One of PaymentMode's values
        reference_number: Optional cheque/UTR/transaction reference
        created_by: Optional identifier of the recording user/service

    Returns:
        The newly created Payment

    Raises:
        InvalidAmount: If amount is invalid
        InvalidPaymentMode: If payment_mode is not a PaymentMode value
        ValidationError: If payment_date is not a date
        InvoiceNotFound: If the invoice does not exist
        LockAcquisitionError: If another writer holds the invoice lock
    """
    value = normalize_amount(amount)
    mode = normalize_payment_mode(payment_mode)
    paid_on = normalize_payment_date(payment_date)
    invoice_pk = parse_invoice_id(invoice_id)

    with invoice_lock(invoice_pk):
        with transaction.atomic():
            invoice = Invoice.objects.select_for_update().filter(pk=invoice_pk).first()
            if invoice is None:
                raise InvoiceNotFound(
                    f"Invoice {invoice_pk} not found",
                    details={"invoice_id": str(invoice_pk)},
                )

            payment = Payment.objects.create(
                invoice=invoice,
                amount=value,
                payment_date=paid_on,
                payment_mode=mode,
                reference_number=reference_number or "",
                created_by=created_by,
            )

            paid = invoice.compute_paid_amount()
            invoice.paid_amount = paid
            invoice.payment_status = _status_for(invoice, paid)
            invoice.save(update_fields=["paid_amount", "payment_status", "updated_at"])

            transaction.on_commit(lambda: _after_commit(payment, invoice))

    logger.info(
        "Payment recorded",
        extra={
            "payment_id": str(payment.id),
            "invoice_id": str(invoice.id),
            "account_id": str(invoice.account_id),
            "amount": str(value),
            "payment_mode": mode,
        },
    )
    if paid > invoice.total_amount:
        logger.warning(
            "Invoice overpaid",
            extra={
                "invoice_id": str(invoice.id),
                "total_amount": str(invoice.total_amount),
                "paid_amount": str(paid),
            },
        )

    return payment
