# lis_core/patients/services.py
from __future__ import annotations

import logging

from django.conf import settings
from django.db import IntegrityError, transaction

from lis_core.common.codes import SequentialCodeAllocator
from lis_core.common.errors import StorageError
from lis_core.patients.models import Patient

logger = logging.getLogger(__name__)


def next_patient_code(prefix: str | None = None) -> str:
    """
    Next free-looking patient code. Not reserved: see SequentialCodeAllocator.
    """
    prefix = prefix or settings.LIS_PATIENT_CODE_PREFIX
    return SequentialCodeAllocator(Patient, "code").next(prefix)


class PatientService:
    @staticmethod
    def register_patient(
        *,
        full_name: str,
        code: str | None = None,
        document_id: str = "",
        date_of_birth=None,
        sex: str = "",
        phone: str = "",
        email: str = "",
    ) -> Patient:
        """
        Creates a patient, allocating a code when none is supplied.

        A duplicate code (concurrent allocation or a reused manual code) is
        reported as StorageError; nothing is retried.
        """
        code = (code or "").strip() or next_patient_code()

        try:
            with transaction.atomic():
                patient = Patient.objects.create(
                    code=code,
                    full_name=full_name,
                    document_id=document_id or "",
                    date_of_birth=date_of_birth,
                    sex=sex or "",
                    phone=phone or "",
                    email=email or "",
                )
        except IntegrityError:
            logger.warning("Patient code collision code=%s", code)
            raise StorageError(f"Patient code {code} is already taken.")

        logger.info("Patient registered id=%s code=%s", patient.id, patient.code)
        return patient
