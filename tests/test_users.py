import pytest


def _new_user(username: str, **overrides) -> dict:
    payload = {
        "name": "Jane Auditor",
        "username": username,
        "password": "secret123",
        "role": "STAFF",
        "designation": "Auditor",
    }
    payload.update(overrides)
    return payload


@pytest.mark.anyio
async def test_list_users_never_exposes_passwords(async_client, staff_headers):
    resp = await async_client.get("/api/users", headers=staff_headers)
    assert resp.status_code == 200
    users = resp.json()
    assert {"admin123", "staff123"} <= {u["username"] for u in users}
    for user in users:
        assert "password" not in user
        assert "hashedPassword" not in user


@pytest.mark.anyio
async def test_create_update_delete_user(async_client, admin_headers):
    resp = await async_client.post("/api/users", json=_new_user("jane1"), headers=admin_headers)
    assert resp.status_code == 201, resp.text
    user = resp.json()
    assert user["id"].startswith("u-")
    assert user["role"] == "STAFF"
    assert "password" not in user

    resp = await async_client.put(
        f"/api/users/{user['id']}",
        json={"designation": "Lead Auditor", "role": "ADMIN"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["designation"] == "Lead Auditor"
    assert resp.json()["role"] == "ADMIN"

    resp = await async_client.delete(f"/api/users/{user['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "User deleted"}

    resp = await async_client.get(f"/api/users/{user['id']}", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_new_user_can_log_in_and_password_change_applies(async_client, admin_headers):
    user = (await async_client.post("/api/users", json=_new_user("jane2"), headers=admin_headers)).json()

    resp = await async_client.post("/api/auth/login", json={"username": "jane2", "password": "secret123"})
    assert resp.status_code == 200

    await async_client.put(f"/api/users/{user['id']}", json={"password": "changed456"}, headers=admin_headers)

    resp = await async_client.post("/api/auth/login", json={"username": "jane2", "password": "secret123"})
    assert resp.status_code == 401
    resp = await async_client.post("/api/auth/login", json={"username": "jane2", "password": "changed456"})
    assert resp.status_code == 200


@pytest.mark.anyio
async def test_disabled_user_cannot_log_in(async_client, admin_headers):
    user = (await async_client.post("/api/users", json=_new_user("jane3"), headers=admin_headers)).json()
    await async_client.put(f"/api/users/{user['id']}", json={"isActive": False}, headers=admin_headers)

    resp = await async_client.post("/api/auth/login", json={"username": "jane3", "password": "secret123"})
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_duplicate_username_conflicts(async_client, admin_headers):
    resp = await async_client.post("/api/users", json=_new_user("staff123"), headers=admin_headers)
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_invalid_role_is_rejected(async_client, admin_headers):
    resp = await async_client.post("/api/users", json=_new_user("jane4", role="OWNER"), headers=admin_headers)
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_admin_cannot_delete_self(async_client, admin_headers):
    resp = await async_client.delete("/api/users/u-admin", headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_staff_cannot_manage_users(async_client, staff_headers):
    resp = await async_client.post("/api/users", json=_new_user("jane5"), headers=staff_headers)
    assert resp.status_code == 403
    resp = await async_client.delete("/api/users/u-admin", headers=staff_headers)
    assert resp.status_code == 403
