from datetime import timedelta

from taskhub.utils.security import create_access_token

from .conftest import PASSWORD, auth_headers


def register(client, email="new@example.com", password="hunter22", name="New Person"):
    return client.post("/api/auth/register", json={"name": name, "email": email, "password": password})


def test_register_issues_token_for_plain_user(client):
    response = register(client)
    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "user"
    assert data["user"]["email"] == "new@example.com"
    assert isinstance(data["user"]["id"], str)

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert profile.status_code == 200
    assert profile.json()["name"] == "New Person"


def test_register_duplicate_email_is_rejected(client, member):
    response = register(client, email="UMA@example.com")
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_losing_email_race_is_rejected(client, member, monkeypatch):
    monkeypatch.setattr("taskhub.routers.auth._email_taken", lambda db, email, exclude_id=None: False)
    response = register(client, email="uma@example.com")
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_validates_fields(client):
    assert register(client, password="123").status_code == 422
    assert register(client, password="x" * 73).status_code == 422
    assert register(client, name="   ").status_code == 422
    assert register(client, email="not-an-email").status_code == 422


def test_login(client, manager):
    response = client.post("/api/auth/login", json={"email": "max@example.com", "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "manager"


def test_login_with_wrong_password(client, manager):
    response = client.post("/api/auth/login", json={"email": "max@example.com", "password": "wrong-one"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_protected_routes_need_a_valid_token(client, manager):
    assert client.get("/api/projects").status_code == 401
    assert client.get("/api/projects", headers={"Authorization": "Bearer garbage"}).status_code == 401

    expired = create_access_token({"sub": str(manager.id)}, expires_delta=timedelta(minutes=-1))
    assert client.get("/api/projects", headers={"Authorization": f"Bearer {expired}"}).status_code == 401

    unknown = create_access_token({"sub": "9999"})
    assert client.get("/api/projects", headers={"Authorization": f"Bearer {unknown}"}).status_code == 401


def test_update_profile(client, member):
    response = client.put(
        "/api/auth/profile",
        json={"name": "Uma Updated", "email": "Uma.New@example.com"},
        headers=auth_headers(member),
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Uma Updated"
    assert response.json()["email"] == "uma.new@example.com"
    assert response.json()["role"] == "user"


def test_profile_password_change_needs_current_password(client, member):
    headers = auth_headers(member)
    missing = client.put("/api/auth/profile", json={"newPassword": "another1"}, headers=headers)
    assert missing.status_code == 400
    assert missing.json()["detail"]["field"] == "currentPassword"

    wrong = client.put(
        "/api/auth/profile",
        json={"currentPassword": "nope-nope", "newPassword": "another1"},
        headers=headers,
    )
    assert wrong.status_code == 400

    ok = client.put(
        "/api/auth/profile",
        json={"currentPassword": PASSWORD, "newPassword": "another1"},
        headers=headers,
    )
    assert ok.status_code == 200
    login = client.post("/api/auth/login", json={"email": "uma@example.com", "password": "another1"})
    assert login.status_code == 200


def test_update_password(client, member):
    headers = auth_headers(member)
    wrong = client.put(
        "/api/auth/update-password",
        json={"currentPassword": "nope-nope", "newPassword": "another1"},
        headers=headers,
    )
    assert wrong.status_code == 400

    ok = client.put(
        "/api/auth/update-password",
        json={"currentPassword": PASSWORD, "newPassword": "another1"},
        headers=headers,
    )
    assert ok.status_code == 200
    assert ok.json() == {"message": "Password updated successfully"}
