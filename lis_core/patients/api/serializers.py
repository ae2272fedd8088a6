# lis_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from lis_core.patients.models import Patient, Sex


class PatientCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255)
    code = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    document_id = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    date_of_birth = serializers.DateField(required=False, allow_null=True)
    sex = serializers.ChoiceField(choices=Sex.choices, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            "id",
            "code",
            "full_name",
            "document_id",
            "date_of_birth",
            "sex",
            "phone",
            "email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class NextCodeSerializer(serializers.Serializer):
    code = serializers.CharField()
