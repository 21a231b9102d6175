from __future__ import annotations

import io

import qrcode
from PIL import Image, ImageDraw

from ..participants.model import Participant


def pass_payload(participant: Participant) -> str:
    """Value encoded in the QR pass: student id when present, else phone."""
    return (participant.secondary_identifier or participant.identifier or "").strip()


def render_pass_png(participant: Participant, *, box_size: int = 10, border: int = 2) -> bytes:
    """QR pass image with the encoded value printed underneath."""
    payload = pass_payload(participant)

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    code = qr.make_image(fill_color="black", back_color="white").convert("RGB")

    caption_height = box_size * 4
    canvas = Image.new("RGB", (code.width, code.height + caption_height), "white")
    canvas.paste(code, (0, 0))
    draw = ImageDraw.Draw(canvas)
    text_width = draw.textlength(payload)
    draw.text(((code.width - text_width) / 2, code.height + box_size), payload, fill="black")

    buf = io.BytesIO()
    canvas.save(buf, format="PNG")
    return buf.getvalue()
