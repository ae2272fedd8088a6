# lis_core/orders/api/serializers.py
from __future__ import annotations

from django.core.exceptions import ObjectDoesNotExist
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from lis_core.lab.api.serializers import LabResultSerializer
from lis_core.orders import lifecycle
from lis_core.orders.models import Order, OrderItem, OrderStatus, OriginChannel


class OrderCreateSerializer(serializers.Serializer):
    patient_id = serializers.UUIDField()
    test_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    origin_channel = serializers.ChoiceField(choices=OriginChannel.choices, default=OriginChannel.FRONT_DESK)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OrderAddItemsSerializer(serializers.Serializer):
    test_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class OrderAdvanceSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class OrderPatientSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    code = serializers.CharField()
    full_name = serializers.CharField()


class OrderItemSerializer(serializers.ModelSerializer):
    test_code = serializers.CharField(source="test.code", read_only=True)
    test_name = serializers.CharField(source="test.name", read_only=True)
    result = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ["id", "test", "test_code", "test_name", "price_snapshot", "status", "result"]

    @extend_schema_field(LabResultSerializer(allow_null=True))
    def get_result(self, obj):
        try:
            result = obj.result
        except ObjectDoesNotExist:
            return None
        return LabResultSerializer(result).data


class OrderSerializer(serializers.ModelSerializer):
    patient = OrderPatientSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    allowed_transitions = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "code",
            "patient",
            "status",
            "origin_channel",
            "total_price",
            "settled_at",
            "delivered_at",
            "notes",
            "items",
            "allowed_transitions",
            "created_at",
            "updated_at",
        ]

    @extend_schema_field(serializers.ListField(child=serializers.CharField()))
    def get_allowed_transitions(self, obj) -> list[str]:
        return sorted(str(s) for s in lifecycle.allowed_targets(obj.status))
