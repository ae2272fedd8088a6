# lis_core/tests/helpers.py
from datetime import timedelta

from django.utils import timezone

from lis_core.orders.models import Order


def backdate(order: Order, *, hours: float) -> Order:
    """
    Moves created_at into the past (auto_now_add ignores explicit values on create).
    """
    Order.objects.filter(id=order.id).update(created_at=timezone.now() - timedelta(hours=hours))
    order.refresh_from_db()
    return order


def error_code(response) -> str:
    return response.data["error"]["code"]
