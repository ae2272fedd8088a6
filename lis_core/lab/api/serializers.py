# lis_core/lab/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from lis_core.lab.models import LabResult, LabResultValue


class ResultValueInputSerializer(serializers.Serializer):
    param_name = serializers.CharField(max_length=128)
    value = serializers.CharField(max_length=128, allow_blank=True)
    unit = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    ref_text = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    is_out_of_range = serializers.BooleanField(required=False, default=False)
    position = serializers.IntegerField(required=False, min_value=0)


class ResultDraftSerializer(serializers.Serializer):
    values = ResultValueInputSerializer(many=True)
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class LabResultValueSerializer(serializers.ModelSerializer):
    class Meta:
        model = LabResultValue
        fields = ["param_name", "value", "unit", "ref_text", "is_out_of_range", "position"]


class LabResultSerializer(serializers.ModelSerializer):
    values = LabResultValueSerializer(many=True, read_only=True)

    class Meta:
        model = LabResult
        fields = ["id", "order_item", "is_draft", "reported_at", "reported_by", "comment", "values", "updated_at"]
        read_only_fields = fields
