import os
import tempfile

# Configure the app before anything imports config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="campus-rentals-uploads-")

import pytest
from fastapi.testclient import TestClient

from cli import create_admin
from database.init import Base, engine
from main import app

PROPERTY_PAYLOAD = {
    "title": "Quiet self contain near the school gate",
    "description": "Tiled self contain with a kitchenette and prepaid meter",
    "priceMonthly": 50000,
    "location": "South Gate, Akure",
    "rooms": 1,
    "bathrooms": 1,
    "furnished": False,
    "wifi": True,
    "roomType": "SELF_CON",
    "distanceFromCampus": 1.5,
    "availableFrom": "2026-01-01T00:00:00Z",
}


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register a user and return (token, user dict)."""

    def _register(email: str, role: str = "STUDENT", name: str = "Test User"):
        r = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": "secret123", "role": role},
        )
        assert r.status_code == 201, r.text
        data = r.json()["data"]
        return data["token"], data["user"]

    return _register


@pytest.fixture
def admin_token(client):
    create_admin("Site Admin", "admin@campus.example.com", "secret123")
    r = client.post("/auth/login", json={"email": "admin@campus.example.com", "password": "secret123"})
    assert r.status_code == 200, r.text
    return r.json()["data"]["token"]


@pytest.fixture
def create_property(client):
    """Create a property as ``token``'s landlord; return its data."""

    def _create(token: str, **overrides):
        payload = dict(PROPERTY_PAYLOAD)
        payload.update(overrides)
        r = client.post("/properties", json=payload, headers=auth(token))
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _create


@pytest.fixture
def approve(client, admin_token):
    def _approve(property_id: int):
        r = client.patch(
            f"/admin/properties/{property_id}",
            json={"approved": True},
            headers=auth(admin_token),
        )
        assert r.status_code == 200, r.text
        return r.json()["data"]

    return _approve


@pytest.fixture
def book(client):
    def _book(token: str, property_id: int, start: str, end: str):
        return client.post(
            "/bookings",
            json={"propertyId": property_id, "leaseStart": start, "leaseEnd": end},
            headers=auth(token),
        )

    return _book


@pytest.fixture
def approved_booking(client, book):
    """Book ``property_id`` as the student and have the landlord approve it."""

    def _approved(student_token, landlord_token, property_id,
                  start="2026-03-01T00:00:00Z", end="2026-06-01T00:00:00Z"):
        r = book(student_token, property_id, start, end)
        assert r.status_code == 201, r.text
        booking_id = r.json()["data"]["id"]
        r = client.patch(
            f"/bookings/{booking_id}",
            json={"status": "APPROVED"},
            headers=auth(landlord_token),
        )
        assert r.status_code == 200, r.text
        return r.json()["data"]

    return _approved
