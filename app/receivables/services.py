"""
Ledger service layer for account reconciliation.

LedgerService is the calling contract consumed by views, exports and
tasks. It fetches a snapshot of an account's invoices and payments from
the database and hands it to the pure builder and aggregator.

Usage:
    from receivables.services import ledger

    built = ledger.build_ledger(account.id)
    summary = ledger.summarize_ledger(account.id, as_of=date(2026, 2, 1))

    payment = ledger.record_payment(
        invoice_id=invoice.id,
        amount=Decimal("4000.00"),
        payment_date=date(2026, 1, 10),
        payment_mode=PaymentMode.CHEQUE,
    )
"""

from __future__ import annotations

import datetime
import uuid
from typing import TYPE_CHECKING

from .aggregator import summarize
from .builder import build_entries
from .cache import get_cached_ledger, store_ledger
from .exceptions import InvalidAccount, InvoiceNotFound
from .models import Account, Invoice, Payment
from .recorder import record_payment
from .types import Ledger, LedgerSummary

if TYPE_CHECKING:
    from typing import Any


def _assemble(
    account: Account, invoices: list[Invoice], payments: list[Payment]
) -> Ledger:
    return Ledger(
        account_id=account.id,
        account_name=account.name,
        entries=build_entries(invoices, payments),
    )


class LedgerService:
    """
    Service class for ledger reads and payment writes.

    Reads are side-effect free apart from the optional snapshot cache.
    Every read re-fetches invoices and payments before building, so a
    ledger can never drift from its source rows.

    All methods are static - no instance state is maintained.
    """

    @staticmethod
    def get_account(account_id: Any) -> Account:
        """
        Get account by ID.

        Raises:
            InvalidAccount: If the id is malformed or does not exist
        """
        try:
            return Account.objects.get(pk=uuid.UUID(str(account_id)))
        except (ValueError, Account.DoesNotExist):
            raise InvalidAccount(
                f"Account {account_id} not found",
                details={"account_id": str(account_id)},
            )

    @staticmethod
    def fetch_snapshot(account: Account) -> tuple[list[Invoice], list[Payment]]:
        """
        Load an account's invoices and their payments in creation order.

        Payments are fetched per invoice id set, so any payment returned
        belongs to one of the returned invoices.
        """
        invoices = list(
            Invoice.objects.filter(account=account).order_by("created_at", "id")
        )
        payments = list(
            Payment.objects.filter(
                invoice_id__in=[invoice.id for invoice in invoices]
            ).order_by("created_at", "id")
        )
        return invoices, payments

    @staticmethod
    def build_ledger(account_id: Any) -> Ledger:
        """
        Build an account's ledger.

        Args:
            account_id: UUID of the account

        Returns:
            Ledger with entries in date order and running balances.
            An account with no invoices yields an empty entry list.

        Raises:
            InvalidAccount: If the account does not exist
            DataIntegrityFault: If a payment does not belong to the account
        """
        account = LedgerService.get_account(account_id)

        cached = get_cached_ledger(account.id)
        if cached is not None:
            return cached

        invoices, payments = LedgerService.fetch_snapshot(account)
        built = _assemble(account, invoices, payments)
        store_ledger(built)
        return built

    @staticmethod
    def summarize_ledger(account_id: Any, as_of: datetime.date) -> LedgerSummary:
        """
        Summarize an account's ledger as of a date.

        Raises:
            InvalidAccount: If the account does not exist
            DataIntegrityFault: If a payment does not belong to the account
        """
        return LedgerService.statement(account_id, as_of)[1]

    @staticmethod
    def statement(
        account_id: Any, as_of: datetime.date
    ) -> tuple[Ledger, LedgerSummary]:
        """
        Build the ledger and its summary from a single snapshot.

        Returns:
            (ledger, summary) computed from the same invoices and payments
        """
        account = LedgerService.get_account(account_id)
        invoices, payments = LedgerService.fetch_snapshot(account)
        built = _assemble(account, invoices, payments)
        return built, summarize(invoices, built.entries, as_of)

    @staticmethod
    def get_invoice_payments(invoice_id: Any) -> tuple[Invoice, list[Payment]]:
        """
        Get an invoice and its payments in creation order.

        Raises:
            InvoiceNotFound: If the invoice does not exist
        """
        try:
            invoice = Invoice.objects.get(pk=uuid.UUID(str(invoice_id)))
        except (ValueError, Invoice.DoesNotExist):
            raise InvoiceNotFound(
                f"Invoice {invoice_id} not found",
                details={"invoice_id": str(invoice_id)},
            )
        return invoice, list(invoice.payments.order_by("created_at", "id"))

    record_payment = staticmethod(record_payment)


# Singleton instance for convenience
# Usage: from receivables.services import ledger
ledger = LedgerService()
