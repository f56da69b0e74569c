import json
from types import SimpleNamespace

import pytest

from core.artifacts import build_qr_payload, render_identity_artifact


def test_qr_payload_points_at_asset_detail():
    payload = build_qr_payload("AST-000042", "https://assets.example.com/")
    assert json.loads(payload) == {
        "assetId": "AST-000042",
        "url": "https://assets.example.com/assets/detail?id=AST-000042",
    }
    # Compact encoding keeps the QR code small
    assert " " not in payload


def test_render_card_is_deterministic_pdf():
    asset = SimpleNamespace(
        id="AST-000042",
        name="MacBook Pro M2",
        category="Laptop",
        serial_number="MBP-001",
        location=None,
    )
    payload = build_qr_payload(asset.id, "http://testclient")

    first = render_identity_artifact(asset, payload)
    second = render_identity_artifact(asset, payload)
    assert first.startswith(b"%PDF")
    assert first == second


@pytest.mark.anyio
async def test_generate_and_download_card(async_client, admin_headers, staff_headers, make_asset):
    asset = await make_asset()

    resp = await async_client.post(f"/api/assets/{asset['id']}/qr", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    marked = resp.json()
    assert marked["isQrGenerated"] is True
    assert json.loads(marked["qrData"])["assetId"] == asset["id"]

    resp = await async_client.get(f"/api/assets/{asset['id']}/qr.pdf", headers=staff_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert f"QR_{asset['id']}.pdf" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


@pytest.mark.anyio
async def test_staff_cannot_generate_card(async_client, staff_headers, make_asset):
    asset = await make_asset()
    resp = await async_client.post(f"/api/assets/{asset['id']}/qr", headers=staff_headers)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_card_for_missing_asset(async_client, admin_headers):
    resp = await async_client.post("/api/assets/AST-NOPE/qr", headers=admin_headers)
    assert resp.status_code == 404
