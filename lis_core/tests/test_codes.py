import pytest
from django.db import DatabaseError

from lis_core.common.codes import SequentialCodeAllocator, next_code, parse_suffix
from lis_core.common.errors import StorageError
from lis_core.patients.models import Patient


def test_next_code_starts_at_one():
    assert next_code("PAC", []) == "PAC-0001"


def test_next_code_uses_max_not_count():
    assert next_code("PAC", ["PAC-0001", "PAC-0007", "PAC-0003"]) == "PAC-0008"


def test_next_code_ignores_other_prefixes_and_garbage():
    codes = ["PAC-0002", "LAB-0099", "PAC-XYZ", "PAC-", "", "PACX-0050"]
    assert next_code("PAC", codes) == "PAC-0003"


def test_next_code_grows_past_padding_width():
    assert next_code("PAC", ["PAC-9999"]) == "PAC-10000"


def test_next_code_custom_width():
    assert next_code("ORD-20260101", ["ORD-20260101-01"], width=2) == "ORD-20260101-02"


def test_parse_suffix():
    assert parse_suffix("PAC-0042", "PAC") == 42
    assert parse_suffix("PAC-4a", "PAC") is None
    assert parse_suffix("OTHER-1", "PAC") is None


@pytest.mark.django_db
def test_allocator_scans_persisted_codes():
    Patient.objects.create(code="PAC-0001", full_name="A")
    Patient.objects.create(code="PAC-0005", full_name="B")
    Patient.objects.create(code="MAN-0900", full_name="C")

    assert SequentialCodeAllocator(Patient).next("PAC") == "PAC-0006"


@pytest.mark.django_db
def test_allocator_reports_scan_failure_as_storage_error(monkeypatch):
    def boom(*args, **kwargs):
        raise DatabaseError("connection lost")

    monkeypatch.setattr(Patient.objects, "filter", boom)

    with pytest.raises(StorageError):
        SequentialCodeAllocator(Patient).next("PAC")


def test_next_code_ignores_non_ascii_digit_suffixes():
    assert parse_suffix("PAC-²", "PAC") is None
    assert parse_suffix("PAC-٣", "PAC") is None
    assert next_code("PAC", ["PAC-0001", "PAC-²", "PAC-١٢"]) == "PAC-0002"
