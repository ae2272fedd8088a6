from __future__ import annotations

from rest_framework import serializers


class OrderAlertSerializer(serializers.Serializer):
    type = serializers.CharField()
    severity = serializers.CharField()
    label = serializers.CharField()


class PendingOrderSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    code = serializers.CharField()
    patient_code = serializers.CharField(source="patient.code")
    patient_name = serializers.CharField(source="patient.full_name")
    status = serializers.CharField()
    origin_channel = serializers.CharField()
    created_at = serializers.DateTimeField()
    total_tests = serializers.IntegerField()
    captured_tests = serializers.IntegerField()
    pending_alert = serializers.CharField()
    sla_level = serializers.CharField()
    alerts = OrderAlertSerializer(many=True)
