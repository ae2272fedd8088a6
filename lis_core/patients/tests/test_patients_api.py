import pytest

pytestmark = pytest.mark.django_db


def test_create_patient_allocates_code(api_client):
    r = api_client.post("/api/v1/patients/", {"full_name": "Rosa Quispe", "sex": "F"}, format="json")
    assert r.status_code == 201, r.data
    assert r.data["code"] == "PAC-0001"


def test_next_code_endpoint(api_client, patient):
    r = api_client.get("/api/v1/patients/next-code/")
    assert r.status_code == 200
    assert r.data == {"code": "PAC-0002"}


def test_duplicate_manual_code_returns_503(api_client, patient):
    r = api_client.post("/api/v1/patients/", {"full_name": "Other", "code": patient.code}, format="json")
    assert r.status_code == 503
    assert r.data["error"]["code"] == "storage_error"


def test_search(api_client, patient):
    api_client.post("/api/v1/patients/", {"full_name": "Someone Else"}, format="json")

    r = api_client.get("/api/v1/patients/?q=test")
    assert r.status_code == 200
    assert [p["code"] for p in r.data["results"]] == [patient.code]


def test_retrieve(api_client, patient):
    r = api_client.get(f"/api/v1/patients/{patient.id}/")
    assert r.status_code == 200
    assert r.data["full_name"] == "Test Patient"


def test_cashier_cannot_register(cashier_user, client_for):
    r = client_for(cashier_user).post("/api/v1/patients/", {"full_name": "X"}, format="json")
    assert r.status_code == 403
