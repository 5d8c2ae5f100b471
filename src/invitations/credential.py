"""
Entry credential: the payload printed as a QR code and scanned at the door.

Transport format: the payload dict is dumped as compact ASCII JSON (keys in
the order type, event, name, seats, token, hash; non-ASCII text as ``\\uXXXX``
escapes) and then encoded as standard padded Base64. Any scanner can reverse
it with ``json.loads(base64.b64decode(text).decode("utf-8"))``.
"""

import base64
import json
from io import BytesIO
from typing import Any

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.image.pil import PilImage

from src.config.settings import settings
from src.invitations.dtos import PLACEHOLDER_GUEST_NAME, EntryPayload


def build_entry_payload(
    name: str | None,
    seats: int,
    token: str | None,
    summary_hash: str | None = None,
) -> EntryPayload:
    return EntryPayload(
        event=settings.event_id,
        name=name or PLACEHOLDER_GUEST_NAME,
        seats=seats,
        token=token or None,
        hash=summary_hash or None,
    )


def encode_payload(payload: EntryPayload) -> str:
    raw = json.dumps(payload.to_dict(), separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_payload(encoded: str) -> dict[str, Any]:
    return json.loads(base64.b64decode(encoded).decode("utf-8"))


def render_credential_png(encoded: str) -> bytes:
    """Render the transport string as a QR code PNG."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=10,
        border=4,
        image_factory=PilImage,
    )
    qr.add_data(encoded)
    qr.make(fit=True)

    image = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
