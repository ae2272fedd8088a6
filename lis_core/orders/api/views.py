# lis_core/orders/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response

from lis_core.billing.api.serializers import (
    OrderPaymentsSerializer,
    PaymentCreateSerializer,
    PaymentSerializer,
    SettleBatchResultSerializer,
    SettleBatchSerializer,
)
from lis_core.billing.selectors import order_balance, payments_for_order, pending_settlement
from lis_core.billing.services import PaymentService, SettlementService
from lis_core.common.api.pagination import paginate
from lis_core.common.permissions import OrderPermission
from lis_core.lab.api.serializers import LabResultSerializer, ResultDraftSerializer
from lis_core.lab.services import ResultService
from lis_core.orders.api.serializers import (
    OrderAddItemsSerializer,
    OrderAdvanceSerializer,
    OrderCreateSerializer,
    OrderSerializer,
)
from lis_core.orders.filters import OrderFilter
from lis_core.orders.models import Order, OriginChannel
from lis_core.orders.selectors import OrderSelector
from lis_core.orders.services import OrderService


class OrderViewSet(viewsets.ViewSet):
    """
    Thin API layer:
    - serializer validation
    - writes delegated to OrderService / ResultService / billing services
    - reads through OrderSelector (re-read after writes so items are fresh)
    """

    permission_classes = [OrderPermission]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    serializer_class = OrderSerializer
    queryset = Order.objects.none()

    def _read(self, order_id) -> dict:
        return OrderSerializer(OrderSelector.get_order(order_id=order_id)).data

    @extend_schema(
        tags=["Orders"],
        responses={200: OrderSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False, many=True),
            OpenApiParameter(name="origin_channel", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="settled", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="patient", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="q", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        f = OrderFilter(request.query_params, queryset=OrderSelector.list_orders())
        if not f.is_valid():
            raise DRFValidationError(f.errors)
        return paginate(request, f.qs, OrderSerializer)

    @extend_schema(tags=["Orders"], responses={200: OrderSerializer})
    def retrieve(self, request, pk=None):
        return Response(self._read(pk), status=status.HTTP_200_OK)

    @extend_schema(tags=["Orders"], request=OrderCreateSerializer, responses={201: OrderSerializer})
    def create(self, request):
        ser = OrderCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        order = OrderService.create_order(
            patient_id=data["patient_id"],
            test_ids=data["test_ids"],
            origin_channel=data["origin_channel"],
            notes=data.get("notes", ""),
        )
        return Response(self._read(order.id), status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Orders"], request=OrderAdvanceSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="advance")
    def advance(self, request, pk=None):
        ser = OrderAdvanceSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        OrderService.advance_status(order_id=pk, target_status=ser.validated_data["status"], actor=request.user)
        return Response(self._read(pk), status=status.HTTP_200_OK)

    @extend_schema(tags=["Orders"], request=OrderAddItemsSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="items")
    def items(self, request, pk=None):
        ser = OrderAddItemsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        OrderService.add_items(order_id=pk, test_ids=ser.validated_data["test_ids"])
        return Response(self._read(pk), status=status.HTTP_200_OK)

    @extend_schema(tags=["Orders"], request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=["delete"], url_path=r"items/(?P<item_id>[0-9a-fA-F-]{36})")
    def remove_item(self, request, pk=None, item_id=None):
        OrderService.remove_item(order_id=pk, item_id=item_id)
        return Response(self._read(pk), status=status.HTTP_200_OK)

    @extend_schema(tags=["Results"], request=ResultDraftSerializer, responses={200: LabResultSerializer})
    @action(detail=True, methods=["put"], url_path=r"items/(?P<item_id>[0-9a-fA-F-]{36})/result-draft")
    def result_draft(self, request, pk=None, item_id=None):
        ser = ResultDraftSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = ResultService.save_draft(
            order_id=pk,
            item_id=item_id,
            values=ser.validated_data["values"],
            comment=ser.validated_data.get("comment", ""),
            actor=request.user,
        )
        return Response(LabResultSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Billing"],
        request=PaymentCreateSerializer,
        responses={200: OrderPaymentsSerializer, 201: PaymentSerializer},
    )
    @action(detail=True, methods=["get", "post"], url_path="payments")
    def payments(self, request, pk=None):
        order = OrderSelector.get_order(order_id=pk)

        if request.method == "GET":
            out = {
                "balance": order_balance(order),
                "payments": payments_for_order(order_id=order.id),
            }
            return Response(OrderPaymentsSerializer(out).data, status=status.HTTP_200_OK)

        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        pay = PaymentService.record_payment(order_id=order.id, actor=request.user, **ser.validated_data)
        return Response(PaymentSerializer(pay).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Billing"], request=SettleBatchSerializer, responses={200: SettleBatchResultSerializer})
    @action(detail=False, methods=["post"], url_path="settle-batch")
    def settle_batch(self, request):
        ser = SettleBatchSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        order_ids = ser.validated_data["order_ids"]

        settled = SettlementService.settle_batch(
            order_ids=order_ids,
            payer_channel=ser.validated_data["payer_channel"],
            actor=request.user,
        )
        return Response({"requested": len(order_ids), "settled": settled}, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Billing"],
        responses={200: OrderSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="payer_channel", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    @action(detail=False, methods=["get"], url_path="pending-settlement")
    def pending_settlement(self, request):
        channel = request.query_params.get("payer_channel") or OriginChannel.ADMISSION
        return paginate(request, pending_settlement(payer_channel=channel), OrderSerializer)
