"""Nominee and asset ownership tests."""

import pytest
from sqlalchemy import func, select

from legacy_vault.core.errors import NotFoundError
from legacy_vault.models.nominee import Nominee
from legacy_vault.schemas.nominee import NomineeCreate
from legacy_vault.services.nominee_service import create_nominee

NOMINEE = {"full_name": "Meera Menon", "relationship": "daughter", "mobile_number": "9811122233", "email": "meera@test.com"}
ASSET = {"asset_type": "bank_account", "title": "SBI savings", "value": "250000", "currency": "INR"}


def test_nominee_crud(client, register_user):
    user = register_user()
    r = client.post("/nominees", headers=user["headers"], json=NOMINEE)
    assert r.status_code == 201
    nominee = r.json()
    assert nominee["user_id"] == user["id"]
    assert nominee["is_verified"] is False

    r = client.put(f"/nominees/{nominee['id']}", headers=user["headers"], json={"relationship": "son-in-law"})
    assert r.status_code == 200
    assert r.json()["relationship"] == "son-in-law"
    assert r.json()["full_name"] == "Meera Menon"

    listed = client.get("/nominees", headers=user["headers"]).json()
    assert [n["id"] for n in listed] == [nominee["id"]]

    assert client.delete(f"/nominees/{nominee['id']}", headers=user["headers"]).status_code == 204
    assert client.get(f"/nominees/{nominee['id']}", headers=user["headers"]).status_code == 404


def test_nominees_newest_first(client, register_user):
    user = register_user()
    first = client.post("/nominees", headers=user["headers"], json=NOMINEE).json()
    second = client.post("/nominees", headers=user["headers"], json={**NOMINEE, "full_name": "Arun Menon"}).json()
    listed = client.get("/nominees", headers=user["headers"]).json()
    assert [n["id"] for n in listed] == [second["id"], first["id"]]


def test_nominee_for_missing_user_is_not_created(db_session):
    before = db_session.execute(select(func.count(Nominee.id))).scalar_one()
    with pytest.raises(NotFoundError):
        create_nominee(db_session, 999999, NomineeCreate(**NOMINEE))
    after = db_session.execute(select(func.count(Nominee.id))).scalar_one()
    assert after == before


def test_nominee_validation(client, register_user):
    user = register_user()
    r = client.post("/nominees", headers=user["headers"], json={**NOMINEE, "mobile_number": "call-me"})
    assert r.status_code == 422
    r = client.post("/nominees", headers=user["headers"], json={**NOMINEE, "email": "not-an-email"})
    assert r.status_code == 422


def test_other_users_records_look_missing(client, register_user):
    owner = register_user()
    stranger = register_user()
    nominee = client.post("/nominees", headers=owner["headers"], json=NOMINEE).json()
    asset = client.post("/assets", headers=owner["headers"], json=ASSET).json()

    assert client.get(f"/nominees/{nominee['id']}", headers=stranger["headers"]).status_code == 404
    assert client.put(f"/nominees/{nominee['id']}", headers=stranger["headers"], json={"relationship": "x"}).status_code == 404
    assert client.delete(f"/nominees/{nominee['id']}", headers=stranger["headers"]).status_code == 404
    assert client.get(f"/assets/{asset['id']}", headers=stranger["headers"]).status_code == 404
    assert client.delete(f"/assets/{asset['id']}", headers=stranger["headers"]).status_code == 404
    assert client.get("/nominees", headers=stranger["headers"]).json() == []
    assert client.get("/assets", headers=stranger["headers"]).json() == []

    # still there for the owner
    assert client.get(f"/nominees/{nominee['id']}", headers=owner["headers"]).status_code == 200


def test_asset_crud(client, register_user):
    user = register_user()
    r = client.post("/assets", headers=user["headers"], json=ASSET)
    assert r.status_code == 201
    asset = r.json()
    assert asset["storage_location"] == "local"
    assert asset["currency"] == "INR"

    r = client.put(f"/assets/{asset['id']}", headers=user["headers"], json={"value": "300000", "storage_location": "digilocker"})
    assert r.status_code == 200
    assert r.json()["value"] == "300000"
    assert r.json()["storage_location"] == "digilocker"
    assert r.json()["title"] == "SBI savings"

    assert client.delete(f"/assets/{asset['id']}", headers=user["headers"]).status_code == 204
    assert client.get("/assets", headers=user["headers"]).json() == []


def test_update_clears_optional_fields(client, register_user):
    user = register_user()
    nominee = client.post("/nominees", headers=user["headers"], json=NOMINEE).json()
    r = client.put(f"/nominees/{nominee['id']}", headers=user["headers"], json={"email": None, "full_name": None})
    assert r.status_code == 200
    assert r.json()["email"] is None
    assert r.json()["full_name"] == "Meera Menon"

    asset = client.post("/assets", headers=user["headers"], json={**ASSET, "description": "Joint account"}).json()
    r = client.put(f"/assets/{asset['id']}", headers=user["headers"], json={"description": None, "value": None, "title": None})
    assert r.status_code == 200
    assert r.json()["description"] is None
    assert r.json()["value"] is None
    assert r.json()["title"] == "SBI savings"

def test_asset_type_validation(client, register_user):
    user = register_user()
    r = client.post("/assets", headers=user["headers"], json={**ASSET, "asset_type": "yacht"})
    assert r.status_code == 422
    r = client.post("/assets", headers=user["headers"], json={**ASSET, "currency": "rupees"})
    assert r.status_code == 422


def test_admin_sees_empty_collections(client, register_user, admin_headers):
    """The administrator owns nothing, so per-user lists are empty rather than errors."""
    user = register_user()
    client.post("/nominees", headers=user["headers"], json=NOMINEE)
    client.post("/assets", headers=user["headers"], json=ASSET)

    assert client.get("/nominees", headers=admin_headers).json() == []
    assert client.get("/assets", headers=admin_headers).json() == []
    assert client.get("/activity/me", headers=admin_headers).json() == []
    stats = client.get("/dashboard/stats", headers=admin_headers).json()
    assert stats["total_assets"] == 0
    assert stats["total_nominees"] == 0
    assert stats["last_check_in"] is None

    # creating needs a registered user
    assert client.post("/nominees", headers=admin_headers, json=NOMINEE).status_code == 403


def test_dashboard_stats(client, register_user):
    user = register_user()
    for i in range(4):
        client.post("/assets", headers=user["headers"], json={**ASSET, "title": f"Account {i}"})
    client.post("/nominees", headers=user["headers"], json=NOMINEE)
    client.post("/wellbeing/confirm", headers=user["headers"])

    stats = client.get("/dashboard/stats", headers=user["headers"]).json()
    assert stats["total_assets"] == 4
    assert stats["total_nominees"] == 1
    assert len(stats["recent_assets"]) == 3
    assert stats["recent_assets"][0]["title"] == "Account 3"
    assert stats["wellbeing_counter"] == 0
    assert stats["last_check_in"] is not None
