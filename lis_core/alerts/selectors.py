# lis_core/alerts/selectors.py
from __future__ import annotations

from datetime import datetime

from django.db.models import Count, Q
from django.utils import timezone

from lis_core.alerts import policy
from lis_core.orders.models import Order, OrderItemStatus, OrderStatus


def pending_orders_with_alerts(*, now: datetime | None = None) -> list[Order]:
    """
    Open (pending / in_progress) orders, oldest first. Each order carries
    freshly computed `pending_alert`, `sla_level` and `alerts` attributes.
    """
    now = now or timezone.now()
    qs = (
        Order.objects.filter(status__in=[OrderStatus.PENDING, OrderStatus.IN_PROGRESS])
        .select_related("patient")
        .annotate(
            total_tests=Count("items", distinct=True),
            captured_tests=Count("items", filter=Q(items__status=OrderItemStatus.CAPTURED), distinct=True),
        )
        .order_by("created_at")
    )

    out: list[Order] = []
    for order in qs:
        order.pending_alert = policy.classify(order.status, order.created_at, now)
        order.sla_level = policy.sla_level(order.created_at, now)
        order.alerts = policy.order_alerts(
            order.status,
            order.created_at,
            order.total_tests,
            order.captured_tests,
            now,
        )
        out.append(order)
    return out
