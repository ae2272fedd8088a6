# lis_core/billing/selectors.py
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db.models import QuerySet, Sum

from lis_core.billing.models import Payment
from lis_core.orders.models import Order, OrderStatus


def settleable_channels() -> list[str]:
    return list(getattr(settings, "LIS_SETTLEABLE_CHANNELS", ["admission"]))


def settleable_orders_qs(*, payer_channel: str) -> QuerySet[Order]:
    """
    Orders that a settlement for `payer_channel` may stamp: eligible channel,
    not settled yet, not voided. Empty for channels that are not eligible.
    """
    if payer_channel not in settleable_channels():
        return Order.objects.none()
    return (
        Order.objects.filter(origin_channel=payer_channel, settled_at__isnull=True)
        .exclude(status=OrderStatus.VOIDED)
    )


def pending_settlement(*, payer_channel: str) -> QuerySet[Order]:
    return settleable_orders_qs(payer_channel=payer_channel).select_related("patient").order_by("created_at")


def payments_for_order(*, order_id) -> QuerySet[Payment]:
    return Payment.objects.filter(order_id=order_id).order_by("paid_at")


def amount_paid(*, order_id) -> Decimal:
    agg = Payment.objects.filter(order_id=order_id).aggregate(total=Sum("amount"))
    return (agg["total"] or Decimal("0.00")).quantize(Decimal("0.01"))


def order_balance(order: Order) -> dict:
    total = (order.total_price or Decimal("0.00")).quantize(Decimal("0.01"))
    paid = amount_paid(order_id=order.id)
    return {
        "total": total,
        "paid": paid,
        "balance": (total - paid).quantize(Decimal("0.01")),
    }
