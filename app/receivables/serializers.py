"""
DRF serializers for the receivables API.

Input:
    RecordPaymentSerializer: POST body for recording a payment
    AsOfQuerySerializer: ?as_of= query parameter

Output:
    LedgerEntrySerializer / LedgerSerializer: Built ledger
    LedgerSummarySerializer: Totals and overdue exposure
    StatementSerializer: Ledger plus summary
    PaymentSerializer / InvoicePaymentsSerializer: Recorded payments

Amounts are rendered as strings with two decimal places so clients never
see binary floats.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Payment, PaymentMode

AMOUNT_FIELD_KWARGS = {"max_digits": 14, "decimal_places": 2}


class RecordPaymentSerializer(serializers.Serializer):
    """
    Request body for POST /payments/.

    Only shape is checked here. The amount is parsed without precision
    or range limits, and payment-mode membership is not checked, so the
    recorder rejects bad values with the same error codes for every caller.
    """

    invoice_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=None, decimal_places=None)
    payment_date = serializers.DateField()
    payment_mode = serializers.CharField(max_length=16)
    reference_number = serializers.CharField(
        max_length=128, required=False, allow_blank=True, default=""
    )


class AsOfQuerySerializer(serializers.Serializer):
    as_of = serializers.DateField(required=False)


class PaymentSerializer(serializers.ModelSerializer):
    payment_mode_display = serializers.CharField(
        source="get_payment_mode_display", read_only=True
    )

    class Meta:
        model = Payment
        fields = [
            "id",
            "invoice_id",
            "amount",
            "payment_date",
            "payment_mode",
            "payment_mode_display",
            "reference_number",
            "created_by",
            "created_at",
        ]
        read_only_fields = fields


class InvoicePaymentsSerializer(serializers.Serializer):
    invoice_id = serializers.UUIDField()
    invoice_number = serializers.CharField()
    total_amount = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    total_paid = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    payment_status = serializers.CharField()
    payments = PaymentSerializer(many=True)


class LedgerEntrySerializer(serializers.Serializer):
    source_id = serializers.UUIDField()
    invoice_id = serializers.UUIDField()
    invoice_number = serializers.CharField()
    date = serializers.DateField()
    kind = serializers.CharField(source="kind.value")
    description = serializers.CharField()
    debit = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    credit = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    payment_mode = serializers.ChoiceField(
        choices=PaymentMode.choices, allow_null=True
    )
    reference_number = serializers.CharField(allow_null=True)
    running_balance = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)


class AccountRefSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="account_id")
    name = serializers.CharField(source="account_name")


class LedgerSerializer(serializers.Serializer):
    account = AccountRefSerializer(source="*")
    entries = LedgerEntrySerializer(many=True)
    closing_balance = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)


class LedgerSummarySerializer(serializers.Serializer):
    as_of = serializers.DateField()
    total_debit = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    total_credit = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    net_balance = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    overdue_amount = serializers.DecimalField(**AMOUNT_FIELD_KWARGS)
    overdue_count = serializers.IntegerField()


class StatementSerializer(serializers.Serializer):
    account = AccountRefSerializer(source="ledger")
    entries = LedgerEntrySerializer(source="ledger.entries", many=True)
    summary = LedgerSummarySerializer()
