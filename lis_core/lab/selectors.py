# lis_core/lab/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from lis_core.lab.models import LabResult


def results_for_order(*, order_id) -> QuerySet[LabResult]:
    return (
        LabResult.objects.filter(order_item__order_id=order_id)
        .select_related("order_item", "order_item__test")
        .prefetch_related("values")
        .order_by("created_at")
    )


def draft_count(*, order_id) -> int:
    return LabResult.objects.filter(order_item__order_id=order_id, is_draft=True).count()
