# lis_core/billing/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from lis_core.billing.models import Payment, PaymentMethod
from lis_core.orders.models import OriginChannel


class PaymentCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    notes = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = ["id", "order", "amount", "method", "notes", "paid_at", "recorded_by_user_id"]
        read_only_fields = fields


class OrderBalanceSerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    paid = serializers.DecimalField(max_digits=12, decimal_places=2)
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class OrderPaymentsSerializer(serializers.Serializer):
    balance = OrderBalanceSerializer()
    payments = PaymentSerializer(many=True)


class SettleBatchSerializer(serializers.Serializer):
    order_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    payer_channel = serializers.ChoiceField(choices=OriginChannel.choices, default=OriginChannel.ADMISSION)


class SettleBatchResultSerializer(serializers.Serializer):
    requested = serializers.IntegerField()
    settled = serializers.IntegerField()
