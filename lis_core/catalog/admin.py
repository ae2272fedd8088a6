from django.contrib import admin

from lis_core.catalog.models import LabTest


@admin.register(LabTest)
class LabTestAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "section", "price", "is_active", "updated_at")
    list_filter = ("is_active", "section")
    search_fields = ("code", "name")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("code",)
