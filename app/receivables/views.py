"""
DRF views for the receivables API.

Endpoints:
    GET  /api/v1/receivables/accounts/{id}/ledger/     - Ledger entries
    GET  /api/v1/receivables/accounts/{id}/summary/    - Totals and overdue
    GET  /api/v1/receivables/accounts/{id}/statement/  - Entries + summary
    POST /api/v1/receivables/payments/                 - Record a payment
    GET  /api/v1/receivables/invoices/{id}/payments/   - Invoice payments

The summary and statement endpoints take an optional ?as_of=YYYY-MM-DD.
When omitted the view passes today's local date; the service layer never
reads the clock itself.

Error responses carry BaseApplicationError.to_dict():
    404 - InvalidAccount, InvoiceNotFound
    400 - InvalidAmount, InvalidPaymentMode, other validation errors
    409 - LockAcquisitionError
    500 - DataIntegrityFault
"""

from __future__ import annotations

import logging

from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

from .exceptions import DataIntegrityFault
from .models import ZERO
from .serializers import (
    AsOfQuerySerializer,
    InvoicePaymentsSerializer,
    LedgerSerializer,
    LedgerSummarySerializer,
    PaymentSerializer,
    RecordPaymentSerializer,
    StatementSerializer,
)
from .services import LedgerService

logger = logging.getLogger(__name__)

AS_OF_PARAMETER = OpenApiParameter(
    name="as_of",
    type=str,
    description="Reference date for overdue exposure (YYYY-MM-DD, default today)",
    required=False,
)


def error_response(error: BaseApplicationError) -> Response:
    """Map a domain error to an HTTP response."""
    if isinstance(error, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, ConflictError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(error, DataIntegrityFault):
        logger.error(
            "Ledger data integrity fault",
            extra={"error_code": error.error_code, "details": error.details},
        )
    return Response(error.to_dict(), status=status_code)


def resolve_as_of(request):
    serializer = AsOfQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data.get("as_of") or timezone.localdate()


class AccountLedgerView(APIView):
    """
    Get an account's ledger.

    GET /api/v1/receivables/accounts/{account_id}/ledger/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_account_ledger",
        summary="Get account ledger",
        tags=["Receivables - Ledger"],
        responses=LedgerSerializer,
    )
    def get(self, request, account_id):
        try:
            built = LedgerService.build_ledger(account_id)
        except BaseApplicationError as e:
            return error_response(e)
        return Response(LedgerSerializer(built).data)


class AccountSummaryView(APIView):
    """
    Get an account's ledger summary.

    GET /api/v1/receivables/accounts/{account_id}/summary/?as_of=2026-02-01
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_account_summary",
        summary="Get account ledger summary",
        tags=["Receivables - Ledger"],
        parameters=[AS_OF_PARAMETER],
        responses=LedgerSummarySerializer,
    )
    def get(self, request, account_id):
        as_of = resolve_as_of(request)
        try:
            summary = LedgerService.summarize_ledger(account_id, as_of)
        except BaseApplicationError as e:
            return error_response(e)
        return Response(LedgerSummarySerializer(summary).data)


class AccountStatementView(APIView):
    """
    Get an account's ledger and summary from one snapshot.

    GET /api/v1/receivables/accounts/{account_id}/statement/?as_of=2026-02-01
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_account_statement",
        summary="Get account statement",
        tags=["Receivables - Ledger"],
        parameters=[AS_OF_PARAMETER],
        responses=StatementSerializer,
    )
    def get(self, request, account_id):
        as_of = resolve_as_of(request)
        try:
            built, summary = LedgerService.statement(account_id, as_of)
        except BaseApplicationError as e:
            return error_response(e)
        return Response(StatementSerializer({"ledger": built, "summary": summary}).data)


class RecordPaymentView(APIView):
    """
    Record a payment against an invoice.

    POST /api/v1/receivables/payments/

    Request body:
        {
            "invoice_id": "550e8400-e29b-41d4-a716-446655440000",
            "amount": "4000.00",
            "payment_date": "2026-01-10",
            "payment_mode": "CHEQUE",
            "reference_number": "CHQ-0042"
        }
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="record_payment",
        summary="Record payment",
        tags=["Receivables - Payments"],
        request=RecordPaymentSerializer,
        responses={201: PaymentSerializer},
    )
    def post(self, request):
        serializer = RecordPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            payment = LedgerService.record_payment(
                invoice_id=data["invoice_id"],
                amount=data["amount"],
                payment_date=data["payment_date"],
                payment_mode=data["payment_mode"],
                reference_number=data.get("reference_number"),
                created_by=str(request.user.pk),
            )
        except BaseApplicationError as e:
            return error_response(e)

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class InvoicePaymentsView(APIView):
    """
    List an invoice's payments and the total paid.

    GET /api/v1/receivables/invoices/{invoice_id}/payments/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_invoice_payments",
        summary="List invoice payments",
        tags=["Receivables - Payments"],
        responses=InvoicePaymentsSerializer,
    )
    def get(self, request, invoice_id):
        try:
            invoice, payments = LedgerService.get_invoice_payments(invoice_id)
        except BaseApplicationError as e:
            return error_response(e)

        total_paid = sum((payment.amount for payment in payments), ZERO)
        data = {
            "invoice_id": invoice.id,
            "invoice_number": invoice.invoice_number,
            "total_amount": invoice.total_amount,
            "total_paid": total_paid,
            "payment_status": invoice.payment_status,
            "payments": payments,
        }
        return Response(InvoicePaymentsSerializer(data).data)
