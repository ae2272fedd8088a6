# lis_core/billing/models.py
from django.db import models
from django.utils import timezone

from lis_core.common.models import UUIDModel
from lis_core.orders.models import Order


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash"
    CARD = "card", "Card"
    TRANSFER = "transfer", "Bank transfer"
    CREDIT = "credit", "Credit"


class Payment(UUIDModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="payments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    method = models.CharField(max_length=16, choices=PaymentMethod.choices, default=PaymentMethod.CASH)

    notes = models.CharField(max_length=255, blank=True)
    paid_at = models.DateTimeField(default=timezone.now)
    recorded_by_user_id = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "billing_payment"
        indexes = [
            models.Index(fields=["order", "paid_at"], name="billing_payment_order_idx"),
        ]
