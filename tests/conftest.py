"""
Basic test configuration and fixtures.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://parentos-test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

import pytest
from fastapi.testclient import TestClient

from database.session import get_auth, get_db
from fakes import FakeAuth, FakeDatabase
from main import app


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def auth():
    return FakeAuth()


@pytest.fixture
def client(db, auth):
    """Test client backed by the in-memory provider."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_auth] = lambda: auth
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def headers(auth):
    token = auth.create_user("a@b.com", "secret1", "A")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(auth):
    token = auth.create_user("b@c.com", "secret2", "B")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def parent(client, headers):
    response = client.post("/api/parents", json={"name": "Mom", "relationship": "mom"}, headers=headers)
    return response.json()["parent"]


@pytest.fixture
def appointment_payload(parent):
    return {
        "parent_id": parent["id"],
        "date": "2024-03-15",
        "time": "14:30",
        "doctor": "Dr. Smith",
        "specialty": "Cardiology",
        "location": "City Hospital",
        "reason": "Annual checkup",
    }


@pytest.fixture
def note_payload(parent):
    return {
        "parent_id": parent["id"],
        "date": "2024-03-10",
        "type": "medication",
        "title": "New prescription",
        "content": "Lisinopril 10mg daily",
    }
