# lis_core/orders/pricing.py
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from django.db.models import Sum

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def quantize(amount) -> Decimal:
    return Decimal(str(amount)).quantize(CENTS)


def sum_snapshots(snapshots: Iterable) -> Decimal:
    return quantize(sum((Decimal(str(s)) for s in snapshots), ZERO))


def add_snapshots(total, snapshots: Iterable) -> Decimal:
    return quantize(Decimal(str(total or ZERO)) + sum_snapshots(snapshots))


def subtract_snapshot(total, snapshot) -> Decimal:
    """
    Total after removing one item, floored at zero.

    >>> subtract_snapshot(Decimal("10.00"), Decimal("25.00"))
    Decimal('0.00')
    """
    remaining = Decimal(str(total or ZERO)) - Decimal(str(snapshot or ZERO))
    return quantize(max(ZERO, remaining))


def recompute_total(order, *, save: bool = True) -> Decimal:
    """
    Rebuilds `order.total_price` from the persisted item snapshots.
    """
    agg = order.items.aggregate(total=Sum("price_snapshot"))
    total = quantize(max(ZERO, agg["total"] or ZERO))

    order.total_price = total
    if save:
        order.save(update_fields=["total_price", "updated_at"])
    return total
