# lis_core/patients/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from lis_core.common.api.pagination import paginate
from lis_core.common.permissions import PatientPermission
from lis_core.patients.api.serializers import NextCodeSerializer, PatientCreateSerializer, PatientSerializer
from lis_core.patients.models import Patient
from lis_core.patients.selectors import get_patient, search_patients
from lis_core.patients.services import PatientService, next_patient_code


class PatientViewSet(viewsets.ViewSet):
    permission_classes = [PatientPermission]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    @extend_schema(
        tags=["Patients"],
        responses={200: PatientSerializer(many=True)},
        parameters=[OpenApiParameter(name="q", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False)],
    )
    def list(self, request):
        qs = search_patients(q=request.query_params.get("q", ""))
        return paginate(request, qs, PatientSerializer)

    @extend_schema(tags=["Patients"], responses={200: PatientSerializer})
    def retrieve(self, request, pk=None):
        return Response(PatientSerializer(get_patient(patient_id=pk)).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], request=PatientCreateSerializer, responses={201: PatientSerializer})
    def create(self, request):
        ser = PatientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.register_patient(**ser.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Patients"],
        responses={200: NextCodeSerializer},
        parameters=[OpenApiParameter(name="prefix", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False)],
    )
    @action(detail=False, methods=["get"], url_path="next-code")
    def next_code(self, request):
        code = next_patient_code(request.query_params.get("prefix") or None)
        return Response({"code": code}, status=status.HTTP_200_OK)
