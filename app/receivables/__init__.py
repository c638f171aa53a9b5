"""
Receivables - account ledger reconciliation.

Given one account's invoices (debits) and the payments recorded against
them (credits), this app produces a date-ordered ledger with running
balances, aggregate totals, and overdue exposure.

Public API:
    Models (receivables.models):
        Account, Invoice, Payment, PaymentStatus, PaymentMode

    Service (receivables.services):
        ledger - Singleton instance of LedgerService
        LedgerService - build_ledger, summarize_ledger, statement,
                        record_payment, get_invoice_payments

    Pure functions:
        receivables.builder.build_entries - Invoices + payments -> entries
        receivables.aggregator.summarize - Entries -> LedgerSummary

    Types (receivables.types):
        EntryKind, LedgerEntry, Ledger, LedgerSummary

    Exceptions (receivables.exceptions):
        ReceivablesError, InvalidAccount, InvoiceNotFound, InvalidAmount,
        InvalidPaymentMode, DataIntegrityFault, LockAcquisitionError

Usage:
    from receivables.services import ledger

    built = ledger.build_ledger(account_id)
    summary = ledger.summarize_ledger(account_id, as_of=date(2026, 2, 1))
"""
