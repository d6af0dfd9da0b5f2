from .conftest import auth_headers


def test_only_admins_list_users(client, admin, manager, member):
    response = client.get("/api/users", headers=auth_headers(admin))
    assert response.status_code == 200
    assert [u["email"] for u in response.json()] == ["ada@example.com", "max@example.com", "uma@example.com"]

    denied = client.get("/api/users", headers=auth_headers(manager))
    assert denied.status_code == 403


def test_view_self_or_as_admin(client, admin, manager, member):
    assert client.get(f"/api/users/{member.id}", headers=auth_headers(member)).status_code == 200
    assert client.get(f"/api/users/{member.id}", headers=auth_headers(admin)).status_code == 200
    assert client.get(f"/api/users/{member.id}", headers=auth_headers(manager)).status_code == 403


def test_missing_user_is_not_found_not_forbidden(client, admin):
    assert client.get("/api/users/9999", headers=auth_headers(admin)).status_code == 404
    response = client.get("/api/users/not-a-number", headers=auth_headers(admin))
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_admin_promotes_user(client, admin, member):
    response = client.put(f"/api/users/{member.id}", json={"role": "Manager"}, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["role"] == "manager"


def test_unknown_role_is_rejected(client, admin, member):
    response = client.put(f"/api/users/{member.id}", json={"role": "owner"}, headers=auth_headers(admin))
    assert response.status_code == 422


def test_non_admin_cannot_change_roles(client, manager, member):
    response = client.put(f"/api/users/{member.id}", json={"role": "admin"}, headers=auth_headers(manager))
    assert response.status_code == 403


def test_email_clash(client, admin, manager, member):
    response = client.put(f"/api/users/{member.id}", json={"email": "max@example.com"}, headers=auth_headers(admin))
    assert response.status_code == 400


def test_list_path_without_trailing_slash_is_not_redirected(client, admin):
    response = client.get("/api/users", headers=auth_headers(admin), follow_redirects=False)
    assert response.status_code == 200
