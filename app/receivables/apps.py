"""
Receivables app configuration.

This app provides account ledger reconciliation:
- Invoice and payment records
- Ledger building with running balances
- Totals and overdue exposure
- Serialized payment recording
"""

from django.apps import AppConfig


class ReceivablesConfig(AppConfig):
    """Configuration for the receivables application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "receivables"
    verbose_name = "Receivables"

    def ready(self) -> None:
        """Connect signal handlers when app is ready."""
        from receivables.signals import connect_signals

        connect_signals()
