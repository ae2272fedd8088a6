# lis_core/catalog/services.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation

from rest_framework.exceptions import ValidationError

from lis_core.catalog.models import LabTest


class LabTestService:
    @staticmethod
    def _to_decimal(value, field_name: str) -> Decimal:
        """
        Accepts Decimal / str / int / float and converts to Decimal safely.
        Raises ValidationError for invalid values.
        """
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError({field_name: "Invalid decimal value."})

    @staticmethod
    def upsert(
        *,
        code: str,
        name: str,
        price,
        section: str = "",
        is_active: bool = True,
    ) -> LabTest:
        price = LabTestService._to_decimal(price, "price").quantize(Decimal("0.01"))
        if price < Decimal("0.00"):
            raise ValidationError({"price": "Must be >= 0"})

        obj, _ = LabTest.objects.update_or_create(
            code=code,
            defaults={
                "name": name,
                "price": price,
                "section": section or "",
                "is_active": is_active,
            },
        )
        return obj
