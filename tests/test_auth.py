"""
Test registration, login, logout and bearer token handling.
"""

from config import settings

REGISTRATION = {"email": "a@b.com", "password": "secret1", "name": "A"}


def test_register_returns_session(client, auth):
    response = client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "a@b.com"
    assert data["user"]["name"] == "A"
    assert data["session"]["access_token"] in auth.tokens
    assert "requiresEmailConfirmation" not in data


def test_register_requires_email_confirmation(client, auth):
    auth.confirm_email = True
    response = client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 200
    data = response.json()
    assert data["requiresEmailConfirmation"] is True
    assert "session" not in data


def test_register_existing_account_logs_in(client, auth):
    auth.create_user("a@b.com", "secret1", "A")
    response = client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 200
    assert response.json()["session"]["access_token"]


def test_register_existing_account_wrong_password(client, auth):
    auth.create_user("a@b.com", "another-password", "A")
    response = client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 400
    assert response.json() == {"error": "User already registered"}


def test_register_existing_account_without_auto_login(client, auth, monkeypatch):
    monkeypatch.setattr(settings, "AUTO_LOGIN_ON_REGISTER", False)
    auth.create_user("a@b.com", "secret1", "A")
    response = client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 400


def test_register_validation(client, auth):
    response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "123", "name": "  "})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Validation failed"
    fields = {detail["field"]: detail["message"] for detail in data["details"]}
    assert set(fields) == {"email", "password", "name"}
    assert fields["password"] == "Password must be at least 6 characters"
    assert fields["name"] == "Name is required"
    assert auth.users == {}


def test_login(client, auth):
    auth.create_user("a@b.com", "secret1", "A")
    response = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret1"})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["session"]["access_token"]


def test_login_failure_is_generic(client, auth):
    auth.create_user("a@b.com", "secret1", "A")
    wrong_password = client.post("/api/auth/login", json={"email": "a@b.com", "password": "nope"})
    unknown_user = client.post("/api/auth/login", json={"email": "x@y.com", "password": "nope"})
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid email or password"}


def test_logout_revokes_token(client, auth, headers):
    token = headers["Authorization"].split(" ", 1)[1]
    response = client.post("/api/auth/logout", headers=headers)
    assert response.status_code == 200
    assert token in auth.signed_out
    assert client.get("/api/parents", headers=headers).status_code == 401


def test_logout_without_token(client):
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}


def test_me(client, headers):
    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "a@b.com"
    assert "access_token" not in user


def test_missing_token(client):
    response = client.get("/api/parents")
    assert response.status_code == 401
    assert response.json() == {"error": "Access token required"}


def test_invalid_token(client):
    response = client.get("/api/parents", headers={"Authorization": "Bearer made-up"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}


def test_first_run_scenario(client):
    register = client.post("/api/auth/register", json=REGISTRATION)
    assert register.status_code in (200, 201)

    login = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret1"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['session']['access_token']}"}

    assert client.get("/api/parents", headers=headers).json() == {"parents": []}

    created = client.post("/api/parents", json={"name": "Mom", "relationship": "mom"}, headers=headers)
    assert created.status_code == 201

    parents = client.get("/api/parents", headers=headers).json()["parents"]
    assert [p["name"] for p in parents] == ["Mom"]
