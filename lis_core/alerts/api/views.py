# lis_core/alerts/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from lis_core.alerts.api.serializers import PendingOrderSerializer
from lis_core.alerts.selectors import pending_orders_with_alerts
from lis_core.common.permissions import CapabilityPermission


class PendingOrdersView(APIView):
    """
    Worklist of open orders with their alert classification, recomputed per request.
    """

    permission_classes = [CapabilityPermission]

    @extend_schema(tags=["Alerts"], responses={200: PendingOrderSerializer(many=True)})
    def get(self, request):
        orders = pending_orders_with_alerts()
        return Response(PendingOrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)
