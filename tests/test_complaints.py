import pytest


async def _file(async_client, headers, asset_id, **overrides):
    payload = {
        "description": "Screen flickers",
        "reportedBy": "John Staff",
        "date": "2024-03-01",
    }
    payload.update(overrides)
    return await async_client.post(f"/api/assets/{asset_id}/complaint", json=payload, headers=headers)


@pytest.mark.anyio
async def test_file_then_resolve(async_client, admin_headers, staff_headers, make_asset):
    """Filing creates a Pending complaint; resolving flips the same row"""
    asset = await make_asset(name="Dell XPS 15")

    resp = await _file(async_client, staff_headers, asset["id"])
    assert resp.status_code == 201, resp.text
    complaint = resp.json()
    assert complaint["status"] == "Pending"
    assert complaint["assetName"] == "Dell XPS 15"
    assert complaint["date"] == "2024-03-01"

    resp = await async_client.post(f"/api/complaints/{complaint['id']}/resolve", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    resolved = resp.json()
    assert resolved["id"] == complaint["id"]
    assert resolved["status"] == "Resolved"
    assert resolved["resolvedAt"] is not None

    fetched = (await async_client.get(f"/api/assets/{asset['id']}", headers=staff_headers)).json()
    assert len(fetched["complaints"]) == 1
    assert fetched["complaints"][0]["status"] == "Resolved"


@pytest.mark.anyio
async def test_resolve_twice_is_invalid(async_client, admin_headers, staff_headers, make_asset):
    asset = await make_asset()
    complaint = (await _file(async_client, staff_headers, asset["id"])).json()

    await async_client.post(f"/api/complaints/{complaint['id']}/resolve", headers=admin_headers)
    resp = await async_client.post(f"/api/complaints/{complaint['id']}/resolve", headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_file_with_non_pending_status_is_invalid(async_client, staff_headers, make_asset):
    asset = await make_asset()
    resp = await _file(async_client, staff_headers, asset["id"], status="Resolved")
    assert resp.status_code == 400

    resp = await _file(async_client, staff_headers, asset["id"], status="Escalated")
    assert resp.status_code == 400

    resp = await _file(async_client, staff_headers, asset["id"], status="Pending")
    assert resp.status_code == 201


@pytest.mark.anyio
async def test_file_against_missing_asset(async_client, staff_headers):
    resp = await _file(async_client, staff_headers, "AST-MISSING")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_file_defaults_date_to_today(async_client, staff_headers, make_asset):
    asset = await make_asset()
    resp = await async_client.post(
        f"/api/assets/{asset['id']}/complaint",
        json={"description": "Battery swollen", "reportedBy": "John Staff"},
        headers=staff_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["date"]


@pytest.mark.anyio
async def test_set_status(async_client, admin_headers, staff_headers, make_asset):
    asset = await make_asset()
    complaint = (await _file(async_client, staff_headers, asset["id"])).json()

    resp = await async_client.put(
        f"/api/complaints/{complaint['id']}/status",
        json={"status": "Closed"},
        headers=admin_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.put(
        f"/api/complaints/{complaint['id']}/status",
        json={"status": "Resolved"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "Resolved"

    # Resolved never goes back to Pending
    resp = await async_client.put(
        f"/api/complaints/{complaint['id']}/status",
        json={"status": "Pending"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_staff_cannot_resolve(async_client, staff_headers, make_asset):
    asset = await make_asset()
    complaint = (await _file(async_client, staff_headers, asset["id"])).json()
    resp = await async_client.post(f"/api/complaints/{complaint['id']}/resolve", headers=staff_headers)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_resolve_missing_complaint(async_client, admin_headers):
    resp = await async_client.post("/api/complaints/c-missing/resolve", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_list_filters_by_status(async_client, admin_headers, staff_headers, make_asset):
    asset = await make_asset()
    open_one = (await _file(async_client, staff_headers, asset["id"], description="Open")).json()
    closed = (await _file(async_client, staff_headers, asset["id"], description="Closed")).json()
    await async_client.post(f"/api/complaints/{closed['id']}/resolve", headers=admin_headers)

    pending = (await async_client.get("/api/complaints", params={"status": "Pending"}, headers=staff_headers)).json()
    pending_ids = {c["id"] for c in pending}
    assert open_one["id"] in pending_ids
    assert closed["id"] not in pending_ids

    resp = await async_client.get("/api/complaints", params={"status": "Whatever"}, headers=staff_headers)
    assert resp.status_code == 400
