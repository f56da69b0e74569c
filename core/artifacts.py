"""
Identity artifact rendering: the QR payload bound to an asset and the
printable card that carries it.

Both functions are pure: they read the asset's identity fields and never
touch the database.
"""
import io
import json
from datetime import datetime, timezone
from typing import Protocol

import qrcode
from qrcode.constants import ERROR_CORRECT_H
from PIL import Image, ImageDraw, ImageFont

CARD_SIZE = (1240, 620)
HEADER_COLOR = (79, 70, 229)
QR_SIZE = 420

# Fixed document dates keep the PDF bytes a function of the asset alone
ARTIFACT_EPOCH = datetime(2000, 1, 1, tzinfo=timezone.utc)


class IdentityFields(Protocol):
    id: str
    name: str
    category: str
    serial_number: str | None
    location: str | None


def build_qr_payload(asset_id: str, base_url: str) -> str:
    """Return the exact string embedded in the QR code for an asset."""
    url = f"{base_url.rstrip('/')}/assets/detail?id={asset_id}"
    return json.dumps({"assetId": asset_id, "url": url}, separators=(",", ":"))


def _load_font(size: int):
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()


def _qr_image(payload: str) -> Image.Image:
    qr = qrcode.QRCode(version=None, error_correction=ERROR_CORRECT_H, box_size=10, border=2)
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").convert("RGB")
    return img.resize((QR_SIZE, QR_SIZE))


def render_identity_artifact(asset: IdentityFields, payload: str) -> bytes:
    """Render a one-page PDF asset card with the QR payload."""
    card = Image.new("RGB", CARD_SIZE, "white")
    draw = ImageDraw.Draw(card)

    draw.rectangle((0, 0, CARD_SIZE[0], 120), fill=HEADER_COLOR)
    draw.text((40, 36), "AMS Asset Card", fill="white", font=_load_font(48))

    text_font = _load_font(30)
    lines = [
        f"ID: {asset.id}",
        f"Name: {asset.name}",
        f"Serial: {asset.serial_number or '-'}",
        f"Category: {asset.category}",
        f"Location: {asset.location or '-'}",
    ]
    y = 170
    for line in lines:
        draw.text((40, y), line, fill="black", font=text_font)
        y += 56

    card.paste(_qr_image(payload), (CARD_SIZE[0] - QR_SIZE - 40, 160))

    buffer = io.BytesIO()
    card.save(
        buffer,
        format="PDF",
        resolution=150.0,
        title=f"Asset {asset.id}",
        creationDate=ARTIFACT_EPOCH,
        modDate=ARTIFACT_EPOCH,
    )
    return buffer.getvalue()
