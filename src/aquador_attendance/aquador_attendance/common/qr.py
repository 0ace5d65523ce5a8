from __future__ import annotations

import io

import qrcode


def make_qr_png(payload: str) -> io.BytesIO:
    """PNG QR code whose content is exactly `payload` (what the scanner reads back)."""

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
