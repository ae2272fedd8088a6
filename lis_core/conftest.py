# lis_core/conftest.py
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from rest_framework.test import APIClient

from lis_core.catalog.models import LabTest
from lis_core.common.permissions import ROLE_ADMIN, ROLE_ADMISSION, ROLE_CASHIER, ROLE_LAB, ROLE_READONLY
from lis_core.orders.models import OriginChannel
from lis_core.orders.services import OrderService
from lis_core.patients.models import Patient


@pytest.fixture
def make_user(db):
    """
    Factory: make_user("LAB") -> user in the LAB group.
    """
    User = get_user_model()
    counter = {"n": 0}

    def _make(role: str | None = None, **extra):
        counter["n"] += 1
        user = User.objects.create_user(
            username=f"user{counter['n']}",
            password="testpass",
            is_active=True,
            **extra,
        )
        if role:
            group, _ = Group.objects.get_or_create(name=role)
            user.groups.add(group)
        return user

    return _make


@pytest.fixture
def user(make_user):
    return make_user(ROLE_ADMIN)


@pytest.fixture
def readonly_user(make_user):
    return make_user(ROLE_READONLY)


@pytest.fixture
def lab_user(make_user):
    return make_user(ROLE_LAB)


@pytest.fixture
def cashier_user(make_user):
    return make_user(ROLE_CASHIER)


@pytest.fixture
def admission_user(make_user):
    return make_user(ROLE_ADMISSION)


@pytest.fixture
def client_for():
    def _client(u):
        c = APIClient()
        c.force_authenticate(user=u)
        return c

    return _client


@pytest.fixture
def api_client(user, client_for):
    return client_for(user)


@pytest.fixture
def readonly_client(readonly_user, client_for):
    return client_for(readonly_user)


@pytest.fixture
def patient(db):
    return Patient.objects.create(code="PAC-0001", full_name="Test Patient", document_id="40001234")


@pytest.fixture
def cbc(db):
    return LabTest.objects.create(code="cbc", name="Complete blood count", section="Hematology", price=Decimal("50.00"))


@pytest.fixture
def glucose(db):
    return LabTest.objects.create(code="glucose", name="Glucose", section="Biochemistry", price=Decimal("30.00"))


@pytest.fixture
def order(patient, cbc, glucose):
    return OrderService.create_order(patient_id=patient.id, test_ids=[cbc.id, glucose.id])


@pytest.fixture
def admission_order(patient, cbc):
    return OrderService.create_order(
        patient_id=patient.id,
        test_ids=[cbc.id],
        origin_channel=OriginChannel.ADMISSION,
    )
