import pytest

from lis_core.common.errors import Forbidden
from lis_core.common.permissions import (
    CAP_RECORD_PAYMENTS,
    CAP_SETTLE_ADMISSION,
    CAP_VIEW,
    ROLE_ADMIN,
    ROLE_CASHIER,
    has_capability,
    require_capability,
    user_capabilities,
)

pytestmark = pytest.mark.django_db


def test_user_without_groups_is_readonly(make_user):
    u = make_user()
    assert user_capabilities(u) == {CAP_VIEW}


def test_superuser_has_everything(make_user):
    u = make_user(is_superuser=True)
    assert has_capability(u, CAP_SETTLE_ADMISSION)


def test_require_capability_accepts_any_of(make_user):
    cashier = make_user(ROLE_CASHIER)
    require_capability(cashier, CAP_SETTLE_ADMISSION, CAP_RECORD_PAYMENTS)


def test_require_capability_raises_forbidden(readonly_user):
    with pytest.raises(Forbidden):
        require_capability(readonly_user, CAP_SETTLE_ADMISSION, CAP_RECORD_PAYMENTS)


def test_anonymous_has_no_capabilities():
    from django.contrib.auth.models import AnonymousUser

    assert user_capabilities(AnonymousUser()) == set()


def test_roles_combine(make_user):
    u = make_user(ROLE_CASHIER)
    assert CAP_RECORD_PAYMENTS in user_capabilities(u)
    assert CAP_SETTLE_ADMISSION not in user_capabilities(u)

    from django.contrib.auth.models import Group

    u.groups.add(Group.objects.get_or_create(name=ROLE_ADMIN)[0])
    assert CAP_SETTLE_ADMISSION in user_capabilities(u)


def test_readonly_cannot_create_orders_over_api(readonly_client, patient, cbc):
    r = readonly_client.post(
        "/api/v1/orders/",
        {"patient_id": str(patient.id), "test_ids": [str(cbc.id)]},
        format="json",
    )
    assert r.status_code == 403
    assert r.data["error"]["code"] == "permission_denied"
