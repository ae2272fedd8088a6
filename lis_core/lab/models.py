# lis_core/lab/models.py
from django.conf import settings
from django.db import models

from lis_core.common.models import UUIDModel
from lis_core.orders.models import OrderItem


class LabResult(UUIDModel):
    """
    Result of one order item. Captured as a draft; only the order's transition
    to `complete` validates it (is_draft -> False).
    """
    order_item = models.OneToOneField(OrderItem, on_delete=models.CASCADE, related_name="result")
    is_draft = models.BooleanField(default=True)

    reported_at = models.DateTimeField(null=True, blank=True)
    reported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    comment = models.TextField(blank=True, default="")

    class Meta:
        db_table = "lab_result"
        indexes = [
            models.Index(fields=["is_draft"], name="lab_result_is_draft_idx"),
        ]


class LabResultValue(UUIDModel):
    result = models.ForeignKey(LabResult, on_delete=models.CASCADE, related_name="values")
    param_name = models.CharField(max_length=128)
    unit = models.CharField(max_length=32, blank=True)
    ref_text = models.CharField(max_length=128, blank=True)
    value = models.CharField(max_length=128, blank=True)
    is_out_of_range = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "lab_result_value"
        ordering = ["position"]
