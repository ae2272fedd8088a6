from __future__ import annotations

from django.db.models import Q, QuerySet

from lis_core.catalog.models import LabTest


def active_tests(*, ids=None) -> QuerySet[LabTest]:
    qs = LabTest.objects.filter(is_active=True)
    if ids is not None:
        qs = qs.filter(id__in=list(ids))
    return qs


def search_tests(*, q: str | None = None, include_inactive: bool = False) -> QuerySet[LabTest]:
    qs = LabTest.objects.all() if include_inactive else LabTest.objects.filter(is_active=True)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(code__icontains=qv) | Q(name__icontains=qv))

    return qs.order_by("code")
