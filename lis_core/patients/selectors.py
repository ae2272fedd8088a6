# lis_core/patients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from lis_core.common.errors import NotFound
from lis_core.patients.models import Patient


def get_patient(*, patient_id: UUID) -> Patient:
    try:
        return Patient.objects.get(id=patient_id)
    except Patient.DoesNotExist:
        raise NotFound("Patient not found.")


def search_patients(*, q: str | None = None) -> QuerySet[Patient]:
    qs = Patient.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(full_name__icontains=qv)
            | Q(code__icontains=qv)
            | Q(document_id__icontains=qv)
            | Q(phone__icontains=qv)
        )

    return qs.order_by("-created_at")
