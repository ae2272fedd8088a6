# lis_core/alerts/policy.py
"""
Time-based alert rules for open orders.

Everything here is a pure function of (status, created_at, now): nothing is
stored, so callers recompute on every read.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from django.conf import settings
from django.db import models
from django.utils import timezone

from lis_core.orders.models import OrderStatus


class PendingAlert(models.TextChoices):
    NONE = "none", "None"
    DELAYED = "delayed", "Delayed"
    OVERDUE = "overdue", "Overdue"


class SlaLevel(models.TextChoices):
    GREEN = "green", "Green"
    YELLOW = "yellow", "Yellow"
    RED = "red", "Red"


class AlertType(models.TextChoices):
    INCOMPLETE = "INCOMPLETE", "Incomplete"
    UNVALIDATED = "UNVALIDATED", "Unvalidated"
    SLA = "SLA", "SLA"


SLA_YELLOW_HOURS = 4
SLA_RED_HOURS = 12

_SEVERITY_RANK = {SlaLevel.RED: 0, SlaLevel.YELLOW: 1, SlaLevel.GREEN: 2}


@dataclass(frozen=True)
class OrderAlert:
    type: str
    severity: str
    label: str


def _aware(dt: datetime) -> datetime:
    if timezone.is_naive(dt):
        return timezone.make_aware(dt)
    return dt


def _age_hours(created_at: datetime, now: datetime | None) -> float:
    now = _aware(now or timezone.now())
    created_at = _aware(created_at)
    return (now - created_at).total_seconds() / 3600


def classify(status: str, created_at: datetime, now: datetime | None = None) -> PendingAlert:
    """
    pending for more than LIS_PENDING_OVERDUE_HOURS -> overdue
    in_progress for more than LIS_IN_PROGRESS_DELAYED_HOURS -> delayed
    anything else -> none
    """
    age = _age_hours(created_at, now)

    if status == OrderStatus.PENDING and age > settings.LIS_PENDING_OVERDUE_HOURS:
        return PendingAlert.OVERDUE
    if status == OrderStatus.IN_PROGRESS and age > settings.LIS_IN_PROGRESS_DELAYED_HOURS:
        return PendingAlert.DELAYED
    return PendingAlert.NONE


def sla_level(created_at: datetime, now: datetime | None = None) -> SlaLevel:
    age = _age_hours(created_at, now)
    if age < SLA_YELLOW_HOURS:
        return SlaLevel.GREEN
    if age < SLA_RED_HOURS:
        return SlaLevel.YELLOW
    return SlaLevel.RED


def order_alerts(
    status: str,
    created_at: datetime,
    total_tests: int,
    captured_tests: int,
    now: datetime | None = None,
) -> list[OrderAlert]:
    """
    Worklist badges for one order, most severe first. The SLA badge is always present.
    """
    sla = sla_level(created_at, now)
    alerts: list[OrderAlert] = []

    if captured_tests < total_tests:
        missing = total_tests - captured_tests
        severity = SlaLevel.RED if missing >= 2 or sla == SlaLevel.RED else SlaLevel.YELLOW
        alerts.append(
            OrderAlert(
                type=AlertType.INCOMPLETE,
                severity=severity,
                label=f"Incomplete ({captured_tests}/{total_tests})",
            )
        )

    needs_validation = (
        total_tests > 0
        and captured_tests >= total_tests
        and status in (OrderStatus.PENDING, OrderStatus.IN_PROGRESS)
    )
    if needs_validation:
        alerts.append(
            OrderAlert(
                type=AlertType.UNVALIDATED,
                severity=SlaLevel.RED if sla == SlaLevel.RED else SlaLevel.YELLOW,
                label="Not validated",
            )
        )

    sla_labels = {SlaLevel.GREEN: "SLA OK", SlaLevel.YELLOW: "SLA due soon", SlaLevel.RED: "SLA breached"}
    alerts.append(OrderAlert(type=AlertType.SLA, severity=sla, label=sla_labels[sla]))

    # sorted() is stable, so equal severities keep insertion order
    return sorted(alerts, key=lambda a: _SEVERITY_RANK[a.severity])
