# lis_core/patients/models.py
from django.db import models

from lis_core.common.models import UUIDModel


class Sex(models.TextChoices):
    MALE = "M", "Male"
    FEMALE = "F", "Female"
    OTHER = "O", "Other"


class Patient(UUIDModel):
    """
    Patient registry entry. `code` is the human-readable id printed on
    reports (PAC-0001, PAC-0002, ...).
    """
    code = models.CharField(max_length=32, unique=True)
    full_name = models.CharField(max_length=255)
    document_id = models.CharField(max_length=32, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    sex = models.CharField(max_length=1, choices=Sex.choices, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["full_name"], name="patients_full_name_idx"),
            models.Index(fields=["document_id"], name="patients_document_id_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.code})"
