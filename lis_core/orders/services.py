# lis_core/orders/services.py
from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from lis_core.catalog.selectors import active_tests
from lis_core.common.codes import SequentialCodeAllocator
from lis_core.common.errors import NotFound, StorageError
from lis_core.common.permissions import CAP_MANAGE_ORDERS, CAP_VALIDATE_RESULTS, require_capability
from lis_core.lab.models import LabResult, LabResultValue
from lis_core.orders import lifecycle, pricing
from lis_core.orders.models import Order, OrderItem, OrderStatus, OriginChannel
from lis_core.orders.selectors import OrderSelector
from lis_core.patients.models import Patient

logger = logging.getLogger(__name__)


def next_order_code(*, day=None) -> str:
    """
    ORD-YYYYMMDD-0001 style code; the counter restarts every day.
    """
    day = day or timezone.localdate()
    prefix = f"{settings.LIS_ORDER_CODE_PREFIX}-{day:%Y%m%d}"
    return SequentialCodeAllocator(Order, "code").next(prefix)


def _lock_order(order_id: UUID) -> Order:
    try:
        return Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise NotFound("Order not found.")


def _unique_ids(ids: Iterable) -> list:
    seen = []
    for i in ids or []:
        if i not in seen:
            seen.append(i)
    return seen


class OrderService:
    """
    Write-model operations for lab orders.
    - create order + items atomically (price snapshots from the catalog)
    - add / remove items, keeping total_price equal to the sum of snapshots
    - advance status through the lifecycle, with its side effects
    """

    @staticmethod
    @transaction.atomic
    def create_order(
        *,
        patient_id: UUID,
        test_ids: list[UUID],
        origin_channel: str = OriginChannel.FRONT_DESK,
        notes: str = "",
    ) -> Order:
        try:
            patient = Patient.objects.get(id=patient_id)
        except Patient.DoesNotExist:
            raise NotFound("Patient not found.")

        tests = list(active_tests(ids=_unique_ids(test_ids)))
        if not tests:
            raise ValidationError({"test_ids": "Select at least one active test."})

        order = Order.objects.create(
            code=next_order_code(),
            patient=patient,
            status=OrderStatus.PENDING,
            origin_channel=origin_channel,
            notes=notes or "",
        )

        items = OrderItem.objects.bulk_create(
            [OrderItem(order=order, test=t, price_snapshot=pricing.quantize(t.price)) for t in tests]
        )

        order.total_price = pricing.sum_snapshots(i.price_snapshot for i in items)
        order.save(update_fields=["total_price", "updated_at"])

        logger.info(
            "Order created id=%s code=%s channel=%s items=%s total=%s",
            order.id,
            order.code,
            order.origin_channel,
            len(items),
            order.total_price,
        )
        return order

    @staticmethod
    @transaction.atomic
    def add_items(*, order_id: UUID, test_ids: list[UUID]) -> list[OrderItem]:
        """
        Adds tests to an open order. Tests already on the order and inactive
        tests are skipped; returns only the items actually created.
        """
        order = _lock_order(order_id)
        lifecycle.ensure_open(order)

        present = set(order.items.values_list("test_id", flat=True))
        tests = [t for t in active_tests(ids=_unique_ids(test_ids)) if t.id not in present]
        if not tests:
            return []

        items = OrderItem.objects.bulk_create(
            [OrderItem(order=order, test=t, price_snapshot=pricing.quantize(t.price)) for t in tests]
        )

        order.total_price = pricing.add_snapshots(order.total_price, (i.price_snapshot for i in items))
        order.save(update_fields=["total_price", "updated_at"])

        logger.info("Order items added order=%s count=%s total=%s", order.code, len(items), order.total_price)
        return items

    @staticmethod
    def remove_item(*, order_id: UUID, item_id: UUID) -> Order:
        """
        Deletes one item together with its result values and result, then lowers
        the order total by the item's snapshot (floored at zero).

        All writes share one transaction; a database failure rolls everything
        back and surfaces as StorageError.
        """
        try:
            with transaction.atomic():
                order = _lock_order(order_id)
                lifecycle.ensure_open(order)

                item = OrderSelector.get_item(order_id=order.id, item_id=item_id)
                snapshot = item.price_snapshot

                LabResultValue.objects.filter(result__order_item=item).delete()
                LabResult.objects.filter(order_item=item).delete()
                item.delete()

                order.total_price = pricing.subtract_snapshot(order.total_price, snapshot)
                order.save(update_fields=["total_price", "updated_at"])
        except DatabaseError as e:
            logger.error("Item removal failed order=%s item=%s: %s", order_id, item_id, e)
            raise StorageError("Could not remove the order item.")

        logger.info(
            "Order item removed order=%s item=%s snapshot=%s total=%s",
            order.code,
            item_id,
            snapshot,
            order.total_price,
        )
        return order

    @staticmethod
    @transaction.atomic
    def advance_status(*, order_id: UUID, target_status: str, actor=None) -> Order:
        """
        Moves the order one step along the lifecycle (or to voided).

        Entering `complete` validates every draft result of the order in the
        same transaction. Entering `delivered` stamps delivered_at.
        """
        if actor is not None:
            require_capability(actor, CAP_MANAGE_ORDERS, CAP_VALIDATE_RESULTS)

        order = _lock_order(order_id)
        current = order.status
        lifecycle.ensure_transition(current, target_status)

        order.status = target_status
        fields = ["status", "updated_at"]

        validated = 0
        if target_status == OrderStatus.COMPLETE:
            validated = LabResult.objects.filter(order_item__order=order, is_draft=True).update(
                is_draft=False,
                updated_at=timezone.now(),
            )
        elif target_status == OrderStatus.DELIVERED:
            order.delivered_at = timezone.now()
            fields.append("delivered_at")

        order.save(update_fields=fields)

        logger.info(
            "Order status changed order=%s %s -> %s validated_results=%s actor=%s",
            order.code,
            current,
            target_status,
            validated,
            getattr(actor, "pk", None),
        )
        return order
