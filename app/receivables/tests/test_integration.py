"""
End-to-end receivables workflows through the HTTP API.

Each test drives the public endpoints the way a collections clerk would:
record payments, then read the statement back.
"""

import datetime
from decimal import Decimal

from rest_framework import status

from receivables.models import PaymentStatus
from receivables.tests.factories import InvoiceFactory

RECEIVABLES_URL = "/api/v1/receivables/"


class TestSettlementJourney:
    """Record payments against an account and reconcile it."""

    def test_two_payments_settle_invoice(self, authenticated_client, account, invoice):
        for amount, paid_on in (("4000.00", "2026-01-10"), ("6000.00", "2026-01-20")):
            response = authenticated_client.post(
                f"{RECEIVABLES_URL}payments/",
                {
                    "invoice_id": str(invoice.id),
                    "amount": amount,
                    "payment_date": paid_on,
                    "payment_mode": "NEFT",
                },
                format="json",
            )
            assert response.status_code == status.HTTP_201_CREATED

        response = authenticated_client.get(
            f"{RECEIVABLES_URL}accounts/{account.id}/statement/",
            {"as_of": "2026-02-01"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [
            (row["kind"], row["date"], row["running_balance"]) for row in data["entries"]
        ] == [
            ("INVOICE", "2026-01-01", "10000.00"),
            ("PAYMENT", "2026-01-10", "6000.00"),
            ("PAYMENT", "2026-01-20", "0.00"),
        ]
        assert data["summary"]["total_debit"] == "10000.00"
        assert data["summary"]["total_credit"] == "10000.00"
        assert data["summary"]["net_balance"] == "0.00"
        assert data["summary"]["overdue_count"] == 0

        invoice.refresh_from_db()
        assert invoice.payment_status == PaymentStatus.PAID

    def test_rejected_payment_leaves_statement_unchanged(
        self, authenticated_client, account, invoice
    ):
        statement_url = f"{RECEIVABLES_URL}accounts/{account.id}/statement/"
        before = authenticated_client.get(statement_url, {"as_of": "2026-02-01"}).json()

        response = authenticated_client.post(
            f"{RECEIVABLES_URL}payments/",
            {
                "invoice_id": str(invoice.id),
                "amount": "-50",
                "payment_date": "2026-01-10",
                "payment_mode": "CASH",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        after = authenticated_client.get(statement_url, {"as_of": "2026-02-01"}).json()
        assert after == before

    def test_payment_applies_to_linked_invoice_only(
        self, authenticated_client, account
    ):
        day = datetime.date(2026, 1, 5)
        first = InvoiceFactory(
            account=account,
            invoice_number="A-1",
            invoice_date=day,
            due_date=datetime.date(2026, 1, 20),
            total_amount=Decimal("300.00"),
        )
        second = InvoiceFactory(
            account=account,
            invoice_number="A-2",
            invoice_date=day,
            due_date=datetime.date(2026, 1, 20),
            total_amount=Decimal("200.00"),
        )

        response = authenticated_client.post(
            f"{RECEIVABLES_URL}payments/",
            {
                "invoice_id": str(second.id),
                "amount": "200.00",
                "payment_date": day.isoformat(),
                "payment_mode": "UPI",
            },
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED

        data = authenticated_client.get(
            f"{RECEIVABLES_URL}accounts/{account.id}/statement/",
            {"as_of": "2026-02-01"},
        ).json()

        assert [(row["kind"], row["invoice_number"]) for row in data["entries"]] == [
            ("INVOICE", "A-1"),
            ("INVOICE", "A-2"),
            ("PAYMENT", "A-2"),
        ]
        assert data["summary"]["overdue_amount"] == "300.00"
        assert data["summary"]["overdue_count"] == 1
        assert data["entries"][0]["invoice_id"] == str(first.id)
