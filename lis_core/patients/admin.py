from django.contrib import admin

from lis_core.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "full_name",
        "document_id",
        "phone",
        "email",
        "created_at",
    )
    search_fields = ("code", "full_name", "document_id", "phone", "email")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
