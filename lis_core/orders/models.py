# lis_core/orders/models.py
from decimal import Decimal

from django.db import models

from lis_core.catalog.models import LabTest
from lis_core.common.models import UUIDModel
from lis_core.patients.models import Patient


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETE = "complete", "Complete"
    DELIVERED = "delivered", "Delivered"
    VOIDED = "voided", "Voided"


class OriginChannel(models.TextChoices):
    FRONT_DESK = "front_desk", "Front desk"
    ADMISSION = "admission", "Admission"


class OrderItemStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    CAPTURED = "captured", "Captured"


class Order(UUIDModel):
    """
    Lab order. `total_price` is derived from the items' price snapshots and is
    only written by OrderService / pricing helpers.
    """
    code = models.CharField(max_length=32, unique=True)
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="orders")
    status = models.CharField(max_length=16, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    origin_channel = models.CharField(
        max_length=16,
        choices=OriginChannel.choices,
        default=OriginChannel.FRONT_DESK,
    )
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    settled_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders_order"
        indexes = [
            models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
            models.Index(fields=["origin_channel", "settled_at"], name="orders_channel_settled_idx"),
        ]

    def __str__(self) -> str:
        return self.code


class OrderItem(UUIDModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    test = models.ForeignKey(LabTest, on_delete=models.PROTECT, related_name="order_items")
    price_snapshot = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=16, choices=OrderItemStatus.choices, default=OrderItemStatus.PENDING)

    class Meta:
        db_table = "orders_order_item"
        constraints = [
            models.UniqueConstraint(fields=["order", "test"], name="uq_order_item_test"),
        ]
