# lis_core/catalog/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models

from lis_core.common.models import UUIDModel


class LabTest(UUIDModel):
    """
    Test catalog / price list. Order items snapshot `price` when added,
    so editing a price never rewrites historical order totals.
    """
    code = models.SlugField(max_length=64, unique=True)
    name = models.CharField(max_length=255)
    section = models.CharField(max_length=64, blank=True)

    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "catalog_lab_test"
        indexes = [
            models.Index(fields=["is_active", "code"], name="catalog_test_active_code_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"
