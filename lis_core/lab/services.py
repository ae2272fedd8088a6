# lis_core/lab/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from lis_core.common.errors import NotFound
from lis_core.common.permissions import CAP_CAPTURE_RESULTS, require_capability
from lis_core.lab.models import LabResult, LabResultValue
from lis_core.orders import lifecycle
from lis_core.orders.models import Order, OrderItemStatus
from lis_core.orders.selectors import OrderSelector

logger = logging.getLogger(__name__)


class ResultService:
    """
    Result capture. Every save keeps (or puts back) the result in draft;
    validation only happens when the order is advanced to `complete`.
    """

    @staticmethod
    @transaction.atomic
    def save_draft(
        *,
        order_id: UUID,
        item_id: UUID,
        values: list[dict],
        comment: str = "",
        actor=None,
    ) -> LabResult:
        if actor is not None:
            require_capability(actor, CAP_CAPTURE_RESULTS)

        try:
            order = Order.objects.select_for_update().get(id=order_id)
        except Order.DoesNotExist:
            raise NotFound("Order not found.")
        lifecycle.ensure_open(order)

        item = OrderSelector.get_item(order_id=order.id, item_id=item_id)

        now = timezone.now()
        result, created = LabResult.objects.get_or_create(order_item=item, defaults={"is_draft": True})

        result.is_draft = True
        result.comment = comment or ""
        result.reported_at = now
        result.reported_by = actor if getattr(actor, "is_authenticated", False) else None
        result.save(update_fields=["is_draft", "comment", "reported_at", "reported_by", "updated_at"])

        LabResultValue.objects.filter(result=result).delete()
        LabResultValue.objects.bulk_create(
            [
                LabResultValue(
                    result=result,
                    param_name=v["param_name"],
                    unit=v.get("unit") or "",
                    ref_text=v.get("ref_text") or "",
                    value=str(v.get("value", "")),
                    is_out_of_range=bool(v.get("is_out_of_range", False)),
                    position=int(v.get("position", idx)),
                )
                for idx, v in enumerate(values or [])
            ]
        )

        if item.status != OrderItemStatus.CAPTURED:
            item.status = OrderItemStatus.CAPTURED
            item.save(update_fields=["status", "updated_at"])

        logger.info(
            "Result draft saved order=%s item=%s values=%s new=%s",
            order.code,
            item.id,
            len(values or []),
            created,
        )
        return result
