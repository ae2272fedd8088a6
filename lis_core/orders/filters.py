# lis_core/orders/filters.py
from __future__ import annotations

from django.db.models import Q
from django_filters import rest_framework as filters

from lis_core.orders.models import Order, OrderStatus, OriginChannel


class OrderFilter(filters.FilterSet):
    status = filters.MultipleChoiceFilter(choices=OrderStatus.choices)
    origin_channel = filters.ChoiceFilter(choices=OriginChannel.choices)
    settled = filters.BooleanFilter(method="filter_settled")
    patient = filters.UUIDFilter(field_name="patient_id")
    created_from = filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    created_to = filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    q = filters.CharFilter(method="filter_q")

    class Meta:
        model = Order
        fields = ["status", "origin_channel", "settled", "patient", "created_from", "created_to", "q"]

    def filter_settled(self, queryset, name, value):
        if value is None:
            return queryset
        return queryset.filter(settled_at__isnull=not value)

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(code__icontains=value) | Q(patient__full_name__icontains=value))
