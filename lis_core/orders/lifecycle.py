# lis_core/orders/lifecycle.py
"""
Order status machine.

    pending -> in_progress -> complete -> delivered
    any non-terminal state -> voided

`delivered` and `voided` are terminal. Pure functions only; side effects of a
transition live in OrderService.advance_status.
"""
from __future__ import annotations

from lis_core.common.errors import IllegalTransition, OrderLocked
from lis_core.orders.models import OrderStatus

TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.VOIDED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.COMPLETE, OrderStatus.VOIDED}),
    OrderStatus.COMPLETE: frozenset({OrderStatus.DELIVERED, OrderStatus.VOIDED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.VOIDED: frozenset(),
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.VOIDED})


def allowed_targets(current: str) -> frozenset[str]:
    return TRANSITIONS.get(current, frozenset())


def can_transition(current: str, target: str) -> bool:
    return target in allowed_targets(current)


def ensure_transition(current: str, target: str) -> None:
    if not can_transition(current, target):
        raise IllegalTransition(current=str(current), requested=str(target))


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def ensure_open(order) -> None:
    """
    Item and result edits are only allowed before the order is delivered or voided.
    """
    if is_terminal(order.status):
        raise OrderLocked(f"Order {order.code} is {order.status} and cannot be modified.")
