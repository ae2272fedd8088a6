from django.contrib import admin

from lis_core.lab.models import LabResult, LabResultValue


class LabResultValueInline(admin.TabularInline):
    model = LabResultValue
    extra = 0
    fields = ("position", "param_name", "value", "unit", "ref_text", "is_out_of_range")


@admin.register(LabResult)
class LabResultAdmin(admin.ModelAdmin):
    list_display = ("order_item", "is_draft", "reported_at", "reported_by", "updated_at")
    list_filter = ("is_draft",)
    search_fields = ("order_item__order__code", "order_item__test__code")
    readonly_fields = ("created_at", "updated_at")
    inlines = [LabResultValueInline]
