# lis_core/orders/selectors.py
from __future__ import annotations

from django.db.models import Prefetch, QuerySet

from lis_core.common.errors import NotFound
from lis_core.orders.models import Order, OrderItem


def _items_prefetch() -> Prefetch:
    return Prefetch(
        "items",
        queryset=OrderItem.objects.select_related("test", "result").prefetch_related("result__values").order_by("created_at"),
    )


class OrderSelector:
    @staticmethod
    def get_order(*, order_id) -> Order:
        try:
            return Order.objects.select_related("patient").prefetch_related(_items_prefetch()).get(id=order_id)
        except Order.DoesNotExist:
            raise NotFound("Order not found.")

    @staticmethod
    def get_item(*, order_id, item_id) -> OrderItem:
        try:
            return OrderItem.objects.select_related("order", "test").get(id=item_id, order_id=order_id)
        except OrderItem.DoesNotExist:
            raise NotFound("Order item not found.")

    @staticmethod
    def list_orders(*, patient_id=None) -> QuerySet[Order]:
        qs = Order.objects.select_related("patient").prefetch_related(_items_prefetch()).order_by("-created_at")
        if patient_id:
            qs = qs.filter(patient_id=patient_id)
        return qs
