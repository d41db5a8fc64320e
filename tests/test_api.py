"""
Tests for the public and admin HTTP routes
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from rsvp_seating.core.config import settings
from rsvp_seating.core.db import Base, get_db
from rsvp_seating.models import GuestAssignment, UserRole
from rsvp_seating.utils.security import rate_limiter

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_api.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_HEADERS = {
    "Authorization": f"Bearer {settings.ADMIN_TOKEN}",
    "X-User-Id": "admin-user",
}

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def client():
    """Test client backed by a fresh database with one admin user"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    db.add(UserRole(user_id="admin-user", role="admin"))
    db.add(UserRole(user_id="plain-user", role="user"))
    db.commit()
    db.close()
    rate_limiter.clear()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

def test_submit_rsvp(client):
    response = client.post("/rsvps", json={
        "contact_info": "+381601234567",
        "guest_names": ["Ana", " ", "Marko"],
    })

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["guest_names"] == ["Ana", "Marko"]
    assert body["data"]["guest_count"] == 2

def test_submit_rsvp_validation_message(client):
    """Rule violations reach the caller verbatim"""
    response = client.post("/rsvps", json={"contact_info": "+381601234567", "guest_names": ["", " "]})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "at least one guest name required"
    assert body["error_code"] == "validation_error"

def test_admin_requires_token(client):
    assert client.get("/admin/tables").status_code in (401, 403)

    response = client.get("/admin/tables", headers={**ADMIN_HEADERS, "Authorization": "Bearer wrong"})
    assert response.status_code == 401

def test_admin_requires_admin_role(client):
    response = client.get("/admin/tables", headers={**ADMIN_HEADERS, "X-User-Id": "plain-user"})

    assert response.status_code == 403
    assert response.json()["message"] == "admin role required"

def test_admin_requires_user_identity(client):
    headers = {"Authorization": ADMIN_HEADERS["Authorization"]}
    assert client.get("/admin/tables", headers=headers).status_code == 401

def test_seating_flow(client):
    """Create a table, seat a guest, unseat them again"""
    rsvp = client.post("/rsvps", json={
        "contact_info": "jelena@example.com",
        "guest_names": ["Jelena", "Petar"],
    }).json()["data"]

    created = client.post("/admin/tables", json={"name": "Sto 1", "capacity": 4}, headers=ADMIN_HEADERS)
    assert created.status_code == 201
    table = created.json()["data"]
    assert table["capacity"] == 4

    available = client.get("/admin/guests/available", headers=ADMIN_HEADERS).json()["data"]
    assert [(g["guest_name"], g["seat_index"]) for g in available] == [("Jelena", 0), ("Petar", 1)]
    assert available[0]["label"] == "Jelena (jelena@example.com)"

    assigned = client.post("/admin/assignments", json={
        "table_id": table["id"],
        "rsvp_id": rsvp["id"],
        "seat_index": 1,
    }, headers=ADMIN_HEADERS)
    assert assigned.status_code == 201
    assignment = assigned.json()["data"]
    assert assignment["guest_name"] == "Petar"
    assert assignment["seat_number"] == 1

    available = client.get("/admin/guests/available", headers=ADMIN_HEADERS).json()["data"]
    assert [g["guest_name"] for g in available] == ["Jelena"]

    duplicate = client.post("/admin/assignments", json={
        "table_id": table["id"],
        "rsvp_id": rsvp["id"],
        "seat_index": 1,
    }, headers=ADMIN_HEADERS)
    assert duplicate.status_code == 422
    assert duplicate.json()["message"] == "guest already assigned"

    overview = client.get("/admin/tables/overview", headers=ADMIN_HEADERS).json()["data"]
    assert overview[0]["assigned_count"] == 1
    assert overview[0]["available_seats"] == 3

    deleted = client.delete(f"/admin/assignments/{assignment['id']}", headers=ADMIN_HEADERS)
    assert deleted.status_code == 200

    available = client.get("/admin/guests/available", headers=ADMIN_HEADERS).json()["data"]
    assert len(available) == 2

def test_table_full_over_http(client):
    rsvp = client.post("/rsvps", json={
        "contact_info": "+381641112223",
        "guest_names": ["Petar", "Mila"],
    }).json()["data"]
    table = client.post("/admin/tables", json={"name": "Sto 2", "capacity": 1}, headers=ADMIN_HEADERS).json()["data"]

    first = client.post("/admin/assignments", json={"table_id": table["id"], "rsvp_id": rsvp["id"], "seat_index": 0}, headers=ADMIN_HEADERS)
    second = client.post("/admin/assignments", json={"table_id": table["id"], "rsvp_id": rsvp["id"], "seat_index": 1}, headers=ADMIN_HEADERS)

    assert first.status_code == 201
    assert second.status_code == 422
    assert second.json()["message"] == "table full"

def test_invalid_table_and_missing_resources(client):
    bad = client.post("/admin/tables", json={"name": "Table A", "capacity": 0}, headers=ADMIN_HEADERS)
    assert bad.status_code == 422

    assert client.delete("/admin/tables/missing", headers=ADMIN_HEADERS).status_code == 404
    assert client.delete("/admin/rsvps/missing", headers=ADMIN_HEADERS).status_code == 404
    assert client.put("/admin/tables/missing", json={"name": "Sto", "capacity": 2}, headers=ADMIN_HEADERS).status_code == 404

def test_rsvp_listing_search_and_stats(client):
    client.post("/rsvps", json={"contact_info": "+381601234567", "guest_names": ["Ana", "Marko"]})
    client.post("/rsvps", json={"contact_info": "jelena@example.com", "guest_names": ["Jelena"]})

    listed = client.get("/admin/rsvps", params={"search": "marko"}, headers=ADMIN_HEADERS).json()["data"]
    assert [r["contact_info"] for r in listed] == ["+381601234567"]

    stats = client.get("/admin/rsvps/stats", headers=ADMIN_HEADERS).json()["data"]
    assert stats == {"total_rsvps": 2, "total_guests": 3}

def test_rate_limited_submission(client, monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_PER_MINUTE", 1)
    payload = {"contact_info": "+381601234567", "guest_names": ["Ana"]}

    assert client.post("/rsvps", json=payload).status_code == 201
    assert client.post("/rsvps", json=payload).status_code == 429

def test_store_failure_is_503(client):
    client.post("/rsvps", json={"contact_info": "+381601234567", "guest_names": ["Ana"]})
    GuestAssignment.__table__.drop(bind=engine)

    response = client.get("/admin/guests/available", headers=ADMIN_HEADERS)

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "store_error"
