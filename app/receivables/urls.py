"""
URL configuration for the receivables app.

Routes:
    accounts/{id}/ledger/      GET
    accounts/{id}/summary/     GET
    accounts/{id}/statement/   GET
    payments/                  POST
    invoices/{id}/payments/    GET

All routes are prefixed with /api/v1/receivables/ in the main URLconf.
Ids are matched as plain path segments so malformed ids reach the service
layer and come back as the domain's 404 error body.
"""

from django.urls import path

from receivables.views import (
    AccountLedgerView,
    AccountStatementView,
    AccountSummaryView,
    InvoicePaymentsView,
    RecordPaymentView,
)

app_name = "receivables"

urlpatterns = [
    path(
        "accounts/<str:account_id>/ledger/",
        AccountLedgerView.as_view(),
        name="account_ledger",
    ),
    path(
        "accounts/<str:account_id>/summary/",
        AccountSummaryView.as_view(),
        name="account_summary",
    ),
    path(
        "accounts/<str:account_id>/statement/",
        AccountStatementView.as_view(),
        name="account_statement",
    ),
    path("payments/", RecordPaymentView.as_view(), name="record_payment"),
    path(
        "invoices/<str:invoice_id>/payments/",
        InvoicePaymentsView.as_view(),
        name="invoice_payments",
    ),
]
