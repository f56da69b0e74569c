import asyncio
from datetime import datetime

import pytest
from sqlalchemy import func, select

from api.verification import db_manager as verification_db
from api.assets.db_manager import AssetNotFoundError
from core.schemas import ensure_utc
from db_models.asset import Asset
from db_models.verification_log import VerificationLog


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.mark.anyio
async def test_verify_then_fetch(async_client, staff_headers, make_asset):
    """Create, verify as John Staff, fetch: one log and a matching summary"""
    asset = await make_asset(
        name="MacBook Pro M2",
        category="Laptop",
        serialNumber="MBP-001",
        status="Active",
    )

    resp = await async_client.post(
        f"/api/assets/{asset['id']}/verify",
        json={"verifierName": "John Staff"},
        headers=staff_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["message"] == "Asset verified"
    assert body["log"]["verifiedBy"] == "John Staff"
    assert body["log"]["assetName"] == "MacBook Pro M2"
    assert body["asset"]["verifiedBy"] == "John Staff"
    assert body["asset"]["lastVerifiedDate"] == body["log"]["timestamp"]

    resp = await async_client.get(f"/api/assets/{asset['id']}", headers=staff_headers)
    fetched = resp.json()
    assert fetched["lastVerifiedDate"] is not None
    assert len(fetched["verificationLogs"]) == 1
    assert fetched["verificationLogs"][0]["verifiedBy"] == "John Staff"


@pytest.mark.anyio
async def test_second_verification_wins(async_client, admin_headers, staff_headers, make_asset):
    """Two sequential verifications: summary follows the later one, both logs kept"""
    asset = await make_asset()

    first = await async_client.post(
        f"/api/assets/{asset['id']}/verify",
        json={"verifierName": "John Staff"},
        headers=staff_headers,
    )
    second = await async_client.post(
        f"/api/assets/{asset['id']}/verify",
        json={"verifierName": "Admin User"},
        headers=admin_headers,
    )
    assert first.status_code == 200 and second.status_code == 200

    first_ts = _ts(first.json()["log"]["timestamp"])
    second_ts = _ts(second.json()["log"]["timestamp"])
    assert second_ts > first_ts

    resp = await async_client.get(f"/api/assets/{asset['id']}", headers=admin_headers)
    fetched = resp.json()
    assert fetched["verifiedBy"] == "Admin User"
    assert _ts(fetched["lastVerifiedDate"]) == second_ts
    assert [log["verifiedBy"] for log in fetched["verificationLogs"]] == ["Admin User", "John Staff"]


@pytest.mark.anyio
async def test_summary_matches_newest_log_after_many(async_client, staff_headers, make_asset):
    asset = await make_asset()
    for i in range(5):
        resp = await async_client.post(
            f"/api/assets/{asset['id']}/verify",
            json={"verifierName": f"Verifier {i}"},
            headers=staff_headers,
        )
        assert resp.status_code == 200

    fetched = (await async_client.get(f"/api/assets/{asset['id']}", headers=staff_headers)).json()
    newest = max(fetched["verificationLogs"], key=lambda log: _ts(log["timestamp"]))
    assert fetched["lastVerifiedDate"] == newest["timestamp"]
    assert fetched["verifiedBy"] == "Verifier 4"

    stamps = [_ts(log["timestamp"]) for log in fetched["verificationLogs"]]
    assert stamps == sorted(stamps, reverse=True)
    assert len(set(stamps)) == 5


@pytest.mark.anyio
async def test_concurrent_verifications_keep_stored_summary_on_newest_log(
    async_client, staff_headers, make_asset, db_session
):
    """Parallel verifies: the stored asset row names the verifier of the newest log"""
    asset = await make_asset()

    responses = await asyncio.gather(*[
        async_client.post(
            f"/api/assets/{asset['id']}/verify",
            json={"verifierName": f"V{i}"},
            headers=staff_headers,
        )
        for i in range(8)
    ])
    assert [r.status_code for r in responses] == [200] * 8

    logs = (await db_session.execute(
        select(VerificationLog).where(VerificationLog.asset_id == asset["id"])
    )).scalars().all()
    assert len(logs) == 8
    newest = max(logs, key=lambda log: ensure_utc(log.timestamp))

    stored = (await db_session.execute(
        select(Asset)
        .where(Asset.id == asset["id"])
        .execution_options(populate_existing=True)
    )).scalar_one()
    assert stored.verified_by == newest.verified_by
    assert ensure_utc(stored.last_verified_date) == ensure_utc(newest.timestamp)


@pytest.mark.anyio
async def test_asset_name_snapshot_survives_rename(async_client, admin_headers, staff_headers, make_asset):
    asset = await make_asset(name="Canon EOS R5")
    await async_client.post(
        f"/api/assets/{asset['id']}/verify",
        json={"verifierName": "John Staff"},
        headers=staff_headers,
    )

    resp = await async_client.put(
        f"/api/assets/{asset['id']}",
        json={"name": "Canon EOS R6"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    renamed = resp.json()
    assert renamed["name"] == "Canon EOS R6"
    assert renamed["verificationLogs"][0]["assetName"] == "Canon EOS R5"


@pytest.mark.anyio
async def test_verify_missing_asset_writes_nothing(async_client, staff_headers, db_session):
    before = (await db_session.execute(select(func.count(VerificationLog.id)))).scalar()

    resp = await async_client.post(
        "/api/assets/AST-DOES-NOT-EXIST/verify",
        json={"verifierName": "John Staff"},
        headers=staff_headers,
    )
    assert resp.status_code == 404

    after = (await db_session.execute(select(func.count(VerificationLog.id)))).scalar()
    assert after == before


@pytest.mark.anyio
async def test_record_verification_missing_asset_raises(db_session):
    with pytest.raises(AssetNotFoundError):
        await verification_db.record_verification(db_session, "AST-MISSING", "John Staff")


@pytest.mark.anyio
async def test_blank_verifier_is_rejected(async_client, staff_headers, make_asset):
    asset = await make_asset()
    resp = await async_client.post(
        f"/api/assets/{asset['id']}/verify",
        json={"verifierName": "   "},
        headers=staff_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.post(
        f"/api/assets/{asset['id']}/verify",
        json={"verifierName": ""},
        headers=staff_headers,
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_verify_deleted_asset_is_not_found(async_client, admin_headers, staff_headers, make_asset):
    asset = await make_asset()
    await async_client.delete(f"/api/assets/{asset['id']}", headers=admin_headers)
    resp = await async_client.post(
        f"/api/assets/{asset['id']}/verify",
        json={"verifierName": "John Staff"},
        headers=staff_headers,
    )
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_logs_listing(async_client, staff_headers, make_asset):
    asset = await make_asset()
    for name in ("A", "B"):
        await async_client.post(
            f"/api/assets/{asset['id']}/verify",
            json={"verifierName": name},
            headers=staff_headers,
        )

    resp = await async_client.get(
        "/api/verification/logs",
        params={"assetId": asset["id"], "limit": 1},
        headers=staff_headers,
    )
    assert resp.status_code == 200
    logs = resp.json()
    assert len(logs) == 1
    assert logs[0]["verifiedBy"] == "B"
