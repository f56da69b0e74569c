import pytest


@pytest.mark.anyio
async def test_create_then_fetch_has_empty_history(async_client, admin_headers, make_asset):
    created = await make_asset(name="Dell XPS 15")
    assert created["id"].startswith("AST-")
    assert created["status"] == "Active"
    assert created["isQrGenerated"] is False
    assert created["verificationLogs"] == []
    assert created["complaints"] == []

    resp = await async_client.get(f"/api/assets/{created['id']}", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    fetched = resp.json()
    assert fetched["verificationLogs"] == []
    assert fetched["complaints"] == []
    assert fetched["lastVerifiedDate"] is None
    assert fetched["verifiedBy"] is None


@pytest.mark.anyio
async def test_create_defaults_status(async_client, admin_headers):
    resp = await async_client.post(
        "/api/assets",
        json={"name": "iPad Air", "category": "Tablet"},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "Active"


@pytest.mark.anyio
async def test_create_with_explicit_id(async_client, admin_headers, make_asset):
    created = await make_asset(id="AST-CUSTOM-1")
    assert created["id"] == "AST-CUSTOM-1"

    # Same id again conflicts
    resp = await async_client.post(
        "/api/assets",
        json={"id": "AST-CUSTOM-1", "name": "Other", "category": "Other"},
        headers=admin_headers,
    )
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_generated_ids_are_unique(make_asset):
    first = await make_asset()
    second = await make_asset()
    assert first["id"] != second["id"]


@pytest.mark.anyio
async def test_duplicate_serial_conflicts(async_client, admin_headers, make_asset):
    await make_asset(serialNumber="DUP-SERIAL-1")
    resp = await async_client.post(
        "/api/assets",
        json={"name": "Copy", "category": "Laptop", "serialNumber": "DUP-SERIAL-1"},
        headers=admin_headers,
    )
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_invalid_category_is_rejected(async_client, admin_headers):
    resp = await async_client.post(
        "/api/assets",
        json={"name": "Toaster", "category": "Kitchen"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert "category" in resp.json()["detail"]


@pytest.mark.anyio
async def test_blank_name_is_rejected(async_client, admin_headers):
    resp = await async_client.post(
        "/api/assets",
        json={"name": "   ", "category": "Laptop"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_list_is_newest_first_and_idempotent(async_client, admin_headers, make_asset):
    older = await make_asset(name="Older")
    newer = await make_asset(name="Newer")

    first = await async_client.get("/api/assets", headers=admin_headers)
    second = await async_client.get("/api/assets", headers=admin_headers)
    assert first.status_code == 200
    assert first.json() == second.json()

    ids = [a["id"] for a in first.json()]
    assert ids.index(newer["id"]) < ids.index(older["id"])
    assert all("verificationLogs" in a and "complaints" in a for a in first.json())


@pytest.mark.anyio
async def test_update_asset(async_client, admin_headers, make_asset):
    created = await make_asset()
    resp = await async_client.put(
        f"/api/assets/{created['id']}",
        json={"status": "Maintenance", "location": "Repair desk"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status"] == "Maintenance"
    assert data["location"] == "Repair desk"
    assert data["name"] == created["name"]
    assert data["verificationLogs"] == []


@pytest.mark.anyio
async def test_update_cannot_forge_verification(async_client, admin_headers, make_asset):
    created = await make_asset()
    resp = await async_client.put(
        f"/api/assets/{created['id']}",
        json={"verifiedBy": "Mallory", "lastVerifiedDate": "2020-01-01T00:00:00Z"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["verifiedBy"] is None
    assert resp.json()["lastVerifiedDate"] is None


@pytest.mark.anyio
async def test_update_invalid_status(async_client, admin_headers, make_asset):
    created = await make_asset()
    resp = await async_client.put(
        f"/api/assets/{created['id']}",
        json={"status": "Sold"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_update_missing_asset(async_client, admin_headers):
    resp = await async_client.put("/api/assets/AST-NOPE", json={"name": "x"}, headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_delete_hides_asset_but_keeps_history(async_client, admin_headers, staff_headers, make_asset):
    created = await make_asset()
    resp = await async_client.post(
        f"/api/assets/{created['id']}/verify",
        json={"verifierName": "John Staff"},
        headers=staff_headers,
    )
    assert resp.status_code == 200

    resp = await async_client.delete(f"/api/assets/{created['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Asset deleted"}

    resp = await async_client.get(f"/api/assets/{created['id']}", headers=admin_headers)
    assert resp.status_code == 404

    resp = await async_client.get("/api/assets", headers=admin_headers)
    assert created["id"] not in [a["id"] for a in resp.json()]

    resp = await async_client.get(
        "/api/verification/logs",
        params={"assetId": created["id"]},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert len(resp.json()) == 1

    resp = await async_client.delete(f"/api/assets/{created['id']}", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_deleted_id_is_not_reused(async_client, admin_headers, make_asset):
    created = await make_asset()
    await async_client.delete(f"/api/assets/{created['id']}", headers=admin_headers)
    replacement = await make_asset()
    assert replacement["id"] != created["id"]


@pytest.mark.anyio
async def test_staff_can_read_assets(async_client, staff_headers, make_asset):
    created = await make_asset()
    resp = await async_client.get(f"/api/assets/{created['id']}", headers=staff_headers)
    assert resp.status_code == 200
