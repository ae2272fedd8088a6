# lis_core/billing/services.py
from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from lis_core.billing.models import Payment, PaymentMethod
from lis_core.billing.selectors import order_balance, settleable_channels, settleable_orders_qs
from lis_core.common.errors import NotFound
from lis_core.common.permissions import (
    CAP_RECORD_PAYMENTS,
    CAP_SETTLE_ADMISSION,
    require_capability,
)
from lis_core.orders.models import Order, OrderStatus

logger = logging.getLogger(__name__)


class SettlementService:
    @staticmethod
    @transaction.atomic
    def settle_batch(*, order_ids: list[UUID], payer_channel: str, actor) -> int:
        """
        Stamps settled_at on the eligible subset of `order_ids` and returns how
        many rows changed.

        Eligible means: origin channel == payer_channel (and that channel is
        settleable), not settled yet, not voided. Everything else in the list
        is skipped silently, so repeating a call settles nothing new.
        """
        require_capability(actor, CAP_SETTLE_ADMISSION, CAP_RECORD_PAYMENTS)

        ids = list(dict.fromkeys(order_ids or []))
        if not ids:
            return 0

        if payer_channel not in settleable_channels():
            logger.info("Settlement skipped: channel=%s is not settleable", payer_channel)
            return 0

        now = timezone.now()
        settled = settleable_orders_qs(payer_channel=payer_channel).filter(id__in=ids).update(
            settled_at=now,
            updated_at=now,
        )

        logger.info(
            "Settlement batch channel=%s requested=%s settled=%s actor=%s",
            payer_channel,
            len(ids),
            settled,
            getattr(actor, "pk", None),
        )
        return settled


class PaymentService:
    @staticmethod
    @transaction.atomic
    def record_payment(
        *,
        order_id: UUID,
        amount: Decimal,
        method: str = PaymentMethod.CASH,
        notes: str = "",
        actor=None,
    ) -> Payment:
        require_capability(actor, CAP_RECORD_PAYMENTS)

        try:
            order = Order.objects.select_for_update().get(id=order_id)
        except Order.DoesNotExist:
            raise NotFound("Order not found.")

        if order.status == OrderStatus.VOIDED:
            raise ValidationError({"order": "Cannot record a payment for a voided order."})

        amount = Decimal(str(amount)).quantize(Decimal("0.01"))
        if amount <= 0:
            raise ValidationError({"amount": "Payment amount must be > 0."})

        balance = order_balance(order)["balance"]
        if amount > balance:
            raise ValidationError({"amount": f"Payment exceeds the outstanding balance ({balance})."})

        pay = Payment.objects.create(
            order=order,
            amount=amount,
            method=method,
            notes=notes or "",
            recorded_by_user_id=getattr(actor, "pk", None),
        )

        logger.info("Payment recorded order=%s amount=%s method=%s", order.code, pay.amount, pay.method)
        return pay
