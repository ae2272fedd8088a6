from django.contrib import admin

from lis_core.orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("test", "price_snapshot", "status", "created_at")
    readonly_fields = ("price_snapshot", "created_at")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "patient",
        "status",
        "origin_channel",
        "total_price",
        "settled_at",
        "created_at",
    )
    list_filter = ("status", "origin_channel")
    search_fields = ("code", "patient__full_name", "patient__code")
    readonly_fields = ("total_price", "settled_at", "delivered_at", "created_at", "updated_at")
    inlines = [OrderItemInline]
    ordering = ("-created_at",)
