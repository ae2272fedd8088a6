from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from lis_core.catalog.models import LabTest


class LabTestSerializer(serializers.ModelSerializer):
    class Meta:
        model = LabTest
        fields = ["id", "code", "name", "section", "price", "is_active", "created_at", "updated_at"]
        read_only_fields = fields


class LabTestUpsertSerializer(serializers.Serializer):
    code = serializers.SlugField(max_length=64)
    name = serializers.CharField(max_length=255)
    section = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    is_active = serializers.BooleanField(required=False, default=True)
