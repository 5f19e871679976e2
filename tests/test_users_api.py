def _login(client, email="admin@mail.com", password="admin123"):
    return client.post("/api/v1/login", json={"email": email, "password": password})


def test_login_returns_usable_token(client, admin_id):
    r = _login(client)
    assert r.status_code == 200
    body = r.json()
    assert body["token_type"] == "bearer"

    profile = client.get("/api/v1/admin/users/profile", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert profile.status_code == 200
    assert profile.json()["data"] == {"id": admin_id, "name": "Admin", "email": "admin@mail.com"}
    assert "password" not in profile.json()["data"]


def test_login_with_wrong_password(client, admin_id):
    r = _login(client, password="wrong-password")
    assert r.status_code == 401
    assert r.json() == {"message": "Incorrect email or password"}


def test_login_with_invalid_email_is_unprocessable(client, session_maker):
    assert _login(client, email="not-an-email").status_code == 422


def test_profile_requires_token(client, session_maker):
    assert client.get("/api/v1/admin/users/profile").status_code == 401


def test_profile_of_deleted_user_is_not_found(client, session_maker):
    from newsdesk.core.security import create_access_token

    token, _ = create_access_token(data={"sub": 999})
    r = client.get("/api/v1/admin/users/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 404


def test_update_password(client, auth_headers):
    r = client.put(
        "/api/v1/admin/users/update-password",
        json={"current_password": "admin123", "new_password": "s3cret-pass", "confirm_password": "s3cret-pass"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["meta"]["message"] == "Success Update Password"

    assert _login(client).status_code == 401
    assert _login(client, password="s3cret-pass").status_code == 200


def test_update_password_mismatch(client, auth_headers):
    r = client.put(
        "/api/v1/admin/users/update-password",
        json={"current_password": "admin123", "new_password": "s3cret-pass", "confirm_password": "other-pass"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"message": "validation error: confirm_password must be equal to new_password"}


def test_update_password_wrong_current(client, auth_headers):
    r = client.put(
        "/api/v1/admin/users/update-password",
        json={"current_password": "nope", "new_password": "s3cret-pass", "confirm_password": "s3cret-pass"},
        headers=auth_headers,
    )
    assert r.status_code == 400


def test_update_password_requires_token(client, session_maker):
    r = client.put("/api/v1/admin/users/update-password", json={})
    assert r.status_code == 401
