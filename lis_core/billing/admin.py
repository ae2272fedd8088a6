from django.contrib import admin

from lis_core.billing.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("order", "amount", "method", "paid_at", "recorded_by_user_id")
    list_filter = ("method",)
    search_fields = ("order__code", "notes")
    ordering = ("-paid_at",)
