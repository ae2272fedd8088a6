from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from lis_core.catalog.api.serializers import LabTestSerializer, LabTestUpsertSerializer
from lis_core.catalog.models import LabTest
from lis_core.catalog.selectors import search_tests
from lis_core.catalog.services import LabTestService
from lis_core.common.api.pagination import paginate
from lis_core.common.permissions import CatalogPermission


class LabTestViewSet(viewsets.ViewSet):
    permission_classes = [CatalogPermission]
    serializer_class = LabTestSerializer
    queryset = LabTest.objects.none()

    @extend_schema(
        tags=["Catalog"],
        responses={200: LabTestSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="q", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="include_inactive", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = search_tests(
            q=request.query_params.get("q"),
            include_inactive=request.query_params.get("include_inactive") == "true",
        )
        return paginate(request, qs, LabTestSerializer)

    @extend_schema(tags=["Catalog"], request=LabTestUpsertSerializer, responses={201: LabTestSerializer})
    def create(self, request):
        ser = LabTestUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        test = LabTestService.upsert(**ser.validated_data)
        return Response(LabTestSerializer(test).data, status=status.HTTP_201_CREATED)
